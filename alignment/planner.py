# alignment/planner.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Tuple, Union

from .errors import InvalidInput
from .geometry import CropRegion, SourceImage

ROTATION_EPSILON = 0.1  # degrees, below this the rotate step is skipped
ZOOM_EPSILON = 0.01


@dataclass(frozen=True)
class Resize:
    width: int
    height: int
    op = "resize"


@dataclass(frozen=True)
class Rotate:
    degrees: float  # clockwise, as shown on screen
    op = "rotate"


@dataclass(frozen=True)
class ZoomResize:
    factor: float  # relative to the size left by the previous step
    op = "zoom"


@dataclass(frozen=True)
class Crop:
    x: int
    y: int
    side: int
    op = "crop"


@dataclass(frozen=True)
class ResizeTo:
    side: int
    op = "resize_to"


@dataclass(frozen=True)
class Flip:
    horizontal: bool = True
    op = "flip"


Step = Union[Resize, Rotate, ZoomResize, Crop, ResizeTo, Flip]

# fixed execution order, callers must not reorder
STEP_ORDER = (Resize, Rotate, ZoomResize, Crop, ResizeTo, Flip)
REQUIRED = (Resize, Crop, ResizeTo, Flip)


def step_to_dict(step: Step) -> dict:
    d = asdict(step)
    d["op"] = step.op
    return d


@dataclass(frozen=True)
class ProcessingPlan:
    steps: Tuple[Step, ...]

    def __post_init__(self):
        ranks = [STEP_ORDER.index(type(s)) for s in self.steps]
        if ranks != sorted(set(ranks)):
            raise InvalidInput(f"plan steps out of order or repeated: {self.ops}")
        missing = [cls.op for cls in REQUIRED if not any(isinstance(s, cls) for s in self.steps)]
        if missing:
            raise InvalidInput(f"plan is missing required steps: {missing}")

    @property
    def ops(self):
        return [s.op for s in self.steps]

    def _crop_index(self) -> int:
        return next(i for i, s in enumerate(self.steps) if isinstance(s, Crop))

    @property
    def pre_crop(self) -> Tuple[Step, ...]:
        """Steps that shape the processed image the crop is solved against."""
        return self.steps[:self._crop_index()]

    @property
    def finishing(self) -> Tuple[Step, ...]:
        return self.steps[self._crop_index():]

    def to_list(self):
        return [step_to_dict(s) for s in self.steps]


def plan_preprocess(source: SourceImage, resize_scale: float, rotation_deg: float, zoom: float) -> Tuple[Step, ...]:
    """resize -> [rotate] -> [zoom], the part that has to run before the crop can be solved."""
    if not resize_scale > 0:
        raise InvalidInput(f"resize_scale must be positive, got {resize_scale}")
    if not zoom > 0:
        raise InvalidInput(f"zoom must be positive, got {zoom}")
    resized = source.size.scaled(resize_scale)
    steps = [Resize(int(resized.width), int(resized.height))]
    if abs(rotation_deg) >= ROTATION_EPSILON:
        steps.append(Rotate(float(rotation_deg)))
    if abs(zoom - 1.0) >= ZOOM_EPSILON:
        steps.append(ZoomResize(float(zoom)))
    return tuple(steps)


def plan(source: SourceImage, resize_scale: float, rotation_deg: float, zoom: float,
         crop: CropRegion, target_side: int) -> ProcessingPlan:
    if crop.side <= 0 or target_side <= 0:
        raise InvalidInput(f"crop side and target side must be positive, got {crop.side}, {target_side}")
    steps = plan_preprocess(source, resize_scale, rotation_deg, zoom) + (
        Crop(crop.x, crop.y, crop.side),
        ResizeTo(int(target_side)),
        Flip(horizontal=True),  # match mirrored front-camera captures
    )
    return ProcessingPlan(steps)
