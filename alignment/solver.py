# alignment/solver.py
from __future__ import annotations
from typing import Optional
import math

from .composer import ScaleBundle
from .errors import InvalidInput
from .geometry import CropRegion, DisplaySize, ViewTransform, ViewportSpec, clamp, round_half_up


def _check(name: str, *values: float, positive: bool = True):
    for v in values:
        if v is None or not math.isfinite(v) or (positive and v <= 0):
            raise InvalidInput(f"{name} must be {'positive ' if positive else ''}finite, got {values}")


def solve_crop(display: DisplaySize, viewport: ViewportSpec, transform: ViewTransform,
               scales: ScaleBundle, resize_scale: Optional[float] = None) -> CropRegion:
    """
    Find the square of the processed image that shows what the viewport showed.

    The preview applies translate -> rotate -> scale around the viewport
    center, while the processed image went through resize -> rotate -> zoom.
    Both keep the point under the viewport center fixed, so the crop is
    centered on that point mapped into processed pixels.
    """
    if resize_scale is None:
        resize_scale = scales.resize_scale
    _check("display", display.width, display.height)
    _check("viewport", viewport.side)
    _check("resize_scale", resize_scale)
    _check("scales", scales.display_to_original_x, scales.display_to_original_y,
           scales.original_to_processed_x, scales.original_to_processed_y)
    _check("processed size", scales.processed.width, scales.processed.height)
    _check("zoom", transform.zoom)
    _check("pan", transform.pan_x, transform.pan_y, positive=False)

    half = viewport.side / 2.0
    proc_w, proc_h = scales.processed.width, scales.processed.height

    # 1) display point under the viewport center (pan is the negated translation)
    center_disp_x = half + transform.pan_x
    center_disp_y = half + transform.pan_y

    # 2) display -> original, 3) original -> processed
    center_x = center_disp_x * scales.display_to_original_x * scales.original_to_processed_x
    center_y = center_disp_y * scales.display_to_original_y * scales.original_to_processed_y

    # 4) viewport square at zoom 1 in resized pixels; resize_scale only, the
    # processed image already carries the zoom-resize
    side_x = viewport.side * scales.display_to_original_x * resize_scale
    side_y = viewport.side * scales.display_to_original_y * resize_scale
    side = min(side_x, side_y)

    # 5) never larger than the image. The cap is taken before zooming
    # (processed / zoom) so more zoom always gives a tighter crop.
    max_side = int(min(proc_w, proc_h))
    if max_side < 1:
        raise InvalidInput(f"processed image too small to crop: {proc_w}x{proc_h}")
    side = min(side, min(proc_w, proc_h) / transform.zoom) / transform.zoom
    side_px = min(max(1, round_half_up(side)), max_side)

    # 6) origin, clamped inside the image before rounding (center may be inf)
    x_max, y_max = int(proc_w) - side_px, int(proc_h) - side_px
    x = round_half_up(clamp(center_x - side_px / 2.0, 0, x_max))
    y = round_half_up(clamp(center_y - side_px / 2.0, 0, y_max))

    return CropRegion(x, y, side_px)
