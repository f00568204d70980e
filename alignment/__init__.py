"""Progress photo alignment: fit, compose, solve the crop and plan the image operations."""

from .commit import CommitResult, commit_photo
from .composer import ScaleBundle, compose_scales, quality_resize_size
from .errors import AlignmentError, DegenerateTransform, InvalidImage, InvalidInput
from .fitter import DisplayFit, default_pan, default_transform, fit_display
from .geometry import (
    CropRegion,
    DisplaySize,
    Point,
    Rect,
    Size,
    SourceImage,
    ViewTransform,
    ViewportSpec,
)
from .planner import ProcessingPlan, plan, plan_preprocess
from .solver import solve_crop

__all__ = [
    "AlignmentError",
    "CommitResult",
    "CropRegion",
    "DegenerateTransform",
    "DisplayFit",
    "DisplaySize",
    "InvalidImage",
    "InvalidInput",
    "Point",
    "ProcessingPlan",
    "Rect",
    "ScaleBundle",
    "Size",
    "SourceImage",
    "ViewTransform",
    "ViewportSpec",
    "commit_photo",
    "compose_scales",
    "default_pan",
    "default_transform",
    "fit_display",
    "plan",
    "plan_preprocess",
    "quality_resize_size",
    "solve_crop",
]
