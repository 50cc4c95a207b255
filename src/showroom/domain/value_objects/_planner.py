"""Planner value objects: catalog templates, rotation and room geometry."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum


class Rotation(IntEnum):
    """Quarter-turn rotation of a placed item, in degrees."""

    R0 = 0
    R90 = 90
    R180 = 180
    R270 = 270

    def next(self) -> "Rotation":
        """Rotate a further 90 degrees clockwise (mod 360)."""
        return Rotation((self.value + 90) % 360)

    @property
    def is_quarter_turned(self) -> bool:
        """True when the footprint is swapped (90 or 270 degrees)."""
        return self.value % 180 != 0


@dataclass(frozen=True)
class FurnitureItem:
    """Catalog template for a piece of furniture.

    Attributes:
        id: Catalog identifier of the template.
        name: Display name.
        category: Category tag (catalog category id or slug).
        width: Footprint width in millimeters.
        depth: Footprint depth in millimeters (the top-view height).
        price: Price in integer currency units.
        thumbnail: Thumbnail reference (URL or empty string).
        color: Optional fill color.
        height: Vertical height in millimeters, used by the 3D view only.
    """

    id: str
    name: str
    category: str
    width: float
    depth: float
    price: int
    thumbnail: str = ""
    color: str | None = None
    height: float = 400.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.depth <= 0:
            raise ValueError("Furniture footprint must be positive")
        if self.price < 0:
            raise ValueError("Furniture price cannot be negative")


@dataclass(frozen=True)
class RoomDimensions:
    """Room size in millimeters."""

    width: float = 5000.0
    height: float = 4000.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Room dimensions must be positive")

    def canvas_size(self, scale: float) -> tuple[float, float]:
        """Canvas size in pixels for a px-per-mm scale."""
        return (self.width * scale, self.height * scale)


@dataclass(frozen=True)
class PlacedFurniture:
    """One instance of a FurnitureItem on the canvas.

    The template is shared and never mutated; per-instance color changes go
    into ``color_override``.
    """

    id: str
    furniture: FurnitureItem
    x: float
    y: float
    rotation: Rotation = Rotation.R0
    color_override: str | None = None

    @property
    def furniture_id(self) -> str:
        return self.furniture.id

    @property
    def color(self) -> str | None:
        """Effective fill color (override first, then template color)."""
        return self.color_override or self.furniture.color

    def footprint_mm(self) -> tuple[float, float]:
        """Rotation-aware footprint (width, depth) in millimeters."""
        if self.rotation.is_quarter_turned:
            return (self.furniture.depth, self.furniture.width)
        return (self.furniture.width, self.furniture.depth)

    def moved_to(self, x: float, y: float) -> "PlacedFurniture":
        return replace(self, x=x, y=y)

    def rotated(self) -> "PlacedFurniture":
        return replace(self, rotation=self.rotation.next())

    def recolored(self, color: str) -> "PlacedFurniture":
        return replace(self, color_override=color)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas pixels."""

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

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.right and self.y <= py <= self.bottom
