# alignment/geometry.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional
import math

# Slider limits of the import screen
MIN_ZOOM = 1.0
MAX_ZOOM = 1.7  # 70% max zoom
MAX_ROTATION = 20.0  # degrees, each side
ROTATION_STEP = 0.5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (no banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def scaled(self, factor: float) -> "Size":
        return Size(round_half_up(self.width * factor), round_half_up(self.height * factor))


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, other: "Rect") -> bool:
        return (other.x >= self.x and other.y >= self.y
                and other.right <= self.right and other.bottom <= self.bottom)


@dataclass(frozen=True)
class SourceImage:
    """Dimensions of the photo picked by the user. The core never reads pixels."""
    width: int
    height: int
    uri: Optional[str] = None

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class ViewportSpec:
    side: int


@dataclass(frozen=True)
class DisplaySize:
    width: float
    height: float

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)


@dataclass(frozen=True)
class ViewTransform:
    """
    Live pan/zoom/rotation of the preview.

    pan_x/pan_y are the offset of the viewport into the displayed image, in
    display pixels. This is the negated on-screen translation of the image:
    dragging the picture right by 10px lowers pan_x by 10.
    """
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0
    rotation_deg: float = 0.0

    @property
    def pan(self) -> Point:
        return Point(self.pan_x, self.pan_y)

    @classmethod
    def from_translation(cls, translate_x: float, translate_y: float,
                         zoom: float = 1.0, rotation_deg: float = 0.0) -> "ViewTransform":
        """Build from the image's on-screen translation (translate -> rotate -> scale)."""
        return cls(-translate_x, -translate_y, zoom, rotation_deg).with_zoom(zoom).with_rotation(rotation_deg)

    def dragged(self, dx: float, dy: float) -> "ViewTransform":
        # No constraints, free panning
        return replace(self, pan_x=self.pan_x - dx, pan_y=self.pan_y - dy)

    def with_zoom(self, zoom: float) -> "ViewTransform":
        return replace(self, zoom=clamp(float(zoom), MIN_ZOOM, MAX_ZOOM))

    def with_rotation(self, degrees: float) -> "ViewTransform":
        # snap to the slider step, then clamp
        snapped = round_half_up(float(degrees) / ROTATION_STEP) * ROTATION_STEP
        return replace(self, rotation_deg=clamp(snapped, -MAX_ROTATION, MAX_ROTATION))

    def to_dict(self) -> dict:
        return {"x": self.pan_x, "y": self.pan_y, "zoom": self.zoom, "rot": self.rotation_deg}


@dataclass(frozen=True)
class CropRegion:
    """Square crop in processed-image pixels."""
    x: int
    y: int
    side: int

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.side, self.side)

    def box(self):
        """(left, upper, right, lower) as Pillow expects it."""
        return (self.x, self.y, self.x + self.side, self.y + self.side)

    def fits_in(self, size: Size) -> bool:
        return self.side > 0 and Rect(0, 0, size.width, size.height).contains(self.rect)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "side": self.side}
