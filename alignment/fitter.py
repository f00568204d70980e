# alignment/fitter.py
from __future__ import annotations
from dataclasses import dataclass
import math

from .errors import InvalidImage, InvalidInput
from .geometry import DisplaySize, Point, SourceImage, ViewTransform, ViewportSpec, round_half_up


@dataclass(frozen=True)
class DisplayFit:
    display: DisplaySize
    default_pan: Point


def _check_source(source: SourceImage):
    for dim in (source.width, source.height):
        if not math.isfinite(dim) or dim <= 0:
            raise InvalidImage(f"source image must have positive dimensions, got {source.width}x{source.height}")


def fit_display(source: SourceImage, viewport: ViewportSpec) -> DisplayFit:
    """
    Fit the photo into the square preview:
    - width always touches the viewport sides,
    - height follows the aspect ratio (may be taller or shorter than the square),
    - portrait photos start vertically centered.
    """
    _check_source(source)
    if not math.isfinite(viewport.side) or viewport.side <= 0:
        raise InvalidInput(f"viewport side must be positive, got {viewport.side}")

    aspect = source.width / source.height
    width = viewport.side
    height = max(1, round_half_up(viewport.side / aspect))
    display = DisplaySize(width, height)

    pan_x, pan_y = 0.0, 0.0
    if aspect < 1:
        # portrait: the image is taller than the square, show its middle
        pan_y = (height - viewport.side) / 2.0
    return DisplayFit(display, Point(pan_x, pan_y))


def default_pan(source: SourceImage, viewport: ViewportSpec) -> Point:
    return fit_display(source, viewport).default_pan


def default_transform(source: SourceImage, viewport: ViewportSpec) -> ViewTransform:
    """Reset state: no zoom, no rotation, recentered pan."""
    pan = default_pan(source, viewport)
    return ViewTransform(pan_x=pan.x, pan_y=pan.y, zoom=1.0, rotation_deg=0.0)
