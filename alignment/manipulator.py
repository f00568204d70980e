# alignment/manipulator.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Tuple
import logging

from PIL import Image

from .geometry import Point, Size, round_half_up
from .planner import Crop, Flip, Resize, ResizeTo, Rotate, Step, ZoomResize

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageHandle:
    """Opaque image passed between primitives; reports its pixel size."""
    image: Image.Image

    @property
    def size(self) -> Size:
        return Size(self.image.width, self.image.height)


class PillowManipulator:
    """
    The four primitives the alignment pipeline relies on, backed by Pillow.
    Every call returns a new handle and leaves the input untouched.
    """

    def __init__(self, fill_color: Tuple[int, int, int] = (255, 255, 255),
                 resample=Image.LANCZOS, rotate_resample=Image.BICUBIC):
        self.fill_color = tuple(fill_color)
        self.resample = resample
        self.rotate_resample = rotate_resample

    def load(self, image: Image.Image) -> ImageHandle:
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGB")
        return ImageHandle(image)

    def resize(self, handle: ImageHandle, size: Size) -> ImageHandle:
        w, h = max(1, int(size.width)), max(1, int(size.height))
        if (w, h) == (handle.image.width, handle.image.height):
            return handle
        return ImageHandle(handle.image.resize((w, h), self.resample))

    def rotate(self, handle: ImageHandle, degrees: float) -> ImageHandle:
        # screen rotation is clockwise, PIL is counter-clockwise;
        # expand so the canvas becomes the rotated bounding box
        fill = self.fill_color if handle.image.mode == "RGB" else self.fill_color + (0,)
        rotated = handle.image.rotate(-degrees, resample=self.rotate_resample, expand=True, fillcolor=fill)
        return ImageHandle(rotated)

    def crop(self, handle: ImageHandle, origin: Point, side: int) -> ImageHandle:
        x, y, side = int(origin.x), int(origin.y), int(side)
        return ImageHandle(handle.image.crop((x, y, x + side, y + side)))

    def flip(self, handle: ImageHandle, horizontal: bool = True) -> ImageHandle:
        method = Image.Transpose.FLIP_LEFT_RIGHT if horizontal else Image.Transpose.FLIP_TOP_BOTTOM
        return ImageHandle(handle.image.transpose(method))

    def apply(self, handle: ImageHandle, step: Step) -> ImageHandle:
        """Execute one plan step with the matching primitive."""
        if isinstance(step, Resize):
            return self.resize(handle, Size(step.width, step.height))
        if isinstance(step, Rotate):
            return self.rotate(handle, step.degrees)
        if isinstance(step, ZoomResize):
            return self.resize(handle, Size(round_half_up(handle.image.width * step.factor),
                                            round_half_up(handle.image.height * step.factor)))
        if isinstance(step, Crop):
            return self.crop(handle, Point(step.x, step.y), step.side)
        if isinstance(step, ResizeTo):
            return self.resize(handle, Size(step.side, step.side))
        if isinstance(step, Flip):
            return self.flip(handle, step.horizontal)
        raise TypeError(f"unknown plan step {step!r}")

    def run(self, handle: ImageHandle, steps: Iterable[Step]) -> ImageHandle:
        for step in steps:
            handle = self.apply(handle, step)
            LOGGER.debug("%s -> %dx%d", step.op, handle.image.width, handle.image.height)
        return handle
