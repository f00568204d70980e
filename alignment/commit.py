# alignment/commit.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from PIL import Image

from .composer import ScaleBundle, compose_scales, quality_resize_size
from .fitter import DisplayFit, fit_display
from .geometry import CropRegion, SourceImage, ViewTransform, ViewportSpec
from .manipulator import PillowManipulator
from .planner import ProcessingPlan, Resize, plan, plan_preprocess
from .solver import solve_crop

LOGGER = logging.getLogger(__name__)

DEFAULT_TARGET_SIDE = 1080


@dataclass(frozen=True)
class CommitResult:
    image: Image.Image
    plan: ProcessingPlan
    crop: CropRegion
    scales: ScaleBundle
    fit: DisplayFit

    def summary(self) -> dict:
        return {
            "crop": self.crop.to_dict(),
            "plan": self.plan.to_list(),
            "scales": self.scales.to_dict(),
            "display": {"w": self.fit.display.width, "h": self.fit.display.height},
        }


def commit_photo(img: Image.Image, transform: ViewTransform, viewport: ViewportSpec,
                 target_side: int = DEFAULT_TARGET_SIDE,
                 manipulator: Optional[PillowManipulator] = None) -> CommitResult:
    """
    Turn what the preview shows into a square progress photo:
    1) upscale for quality, 2) rotate, 3) zoom, measuring each result,
    4) solve the crop against the measured image, 5) crop, resize, mirror.
    """
    manipulator = manipulator or PillowManipulator()
    source = SourceImage(img.width, img.height)
    fit = fit_display(source, viewport)

    resized_size = quality_resize_size(source, target_side)
    resize_scale = resized_size.width / source.width
    pre = plan_preprocess(source, resize_scale, transform.rotation_deg, transform.zoom)

    handle = manipulator.load(img)
    resized = None
    for step in pre:
        handle = manipulator.apply(handle, step)
        if isinstance(step, Resize):
            resized = handle.size
    processed = handle.size

    scales = compose_scales(source, fit.display, resized, processed)
    crop = solve_crop(fit.display, viewport, transform, scales)
    full = plan(source, resize_scale, transform.rotation_deg, transform.zoom, crop, target_side)

    LOGGER.debug(
        "commit: source=%dx%d display=%sx%s transform=%s resized=%sx%s processed=%sx%s crop=%s",
        source.width, source.height, fit.display.width, fit.display.height, transform.to_dict(),
        resized.width, resized.height, processed.width, processed.height, crop.to_dict(),
    )

    handle = manipulator.run(handle, full.finishing)
    return CommitResult(handle.image, full, crop, scales, fit)
