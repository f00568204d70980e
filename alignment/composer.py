# alignment/composer.py
from __future__ import annotations
from dataclasses import dataclass
import math

from .errors import DegenerateTransform
from .geometry import DisplaySize, Size, SourceImage


@dataclass(frozen=True)
class ScaleBundle:
    """
    Ratios between the four coordinate spaces of a commit:
    display (preview) -> original -> resized for quality -> processed
    (resized, rotated and zoomed, as measured after the image library ran).
    """
    display_to_original_x: float
    display_to_original_y: float
    resize_scale: float
    original_to_processed_x: float
    original_to_processed_y: float
    processed: Size

    def to_dict(self) -> dict:
        return {
            "display_to_original": [self.display_to_original_x, self.display_to_original_y],
            "resize_scale": self.resize_scale,
            "original_to_processed": [self.original_to_processed_x, self.original_to_processed_y],
            "processed": [self.processed.width, self.processed.height],
        }


def _require_positive(name: str, *dims):
    for d in dims:
        if d is None or not math.isfinite(d) or d <= 0:
            raise DegenerateTransform(f"{name} must have positive finite dimensions, got {dims}")


def compose_scales(source: SourceImage, display: DisplaySize, resized: Size, processed: Size) -> ScaleBundle:
    """
    Derive every scale factor from measured sizes.
    The processed size already includes the rotation bounding box, so no
    trigonometry is redone here.
    """
    _require_positive("source", source.width, source.height)
    _require_positive("display", display.width, display.height)
    _require_positive("resized", resized.width, resized.height)
    _require_positive("processed", processed.width, processed.height)

    return ScaleBundle(
        display_to_original_x=source.width / display.width,
        display_to_original_y=source.height / display.height,
        resize_scale=resized.width / source.width,
        original_to_processed_x=processed.width / source.width,
        original_to_processed_y=processed.height / source.height,
        processed=Size(processed.width, processed.height),
    )


def quality_resize_size(source: SourceImage, target_side: int) -> Size:
    """
    Size of the upscale applied before any lossy rotation.
    The longer side becomes 2x the output square, leaving room for rotate/zoom.
    """
    _require_positive("source", source.width, source.height)
    _require_positive("target", target_side)
    factor = target_side * 2 / max(source.width, source.height)
    return source.size.scaled(factor)
