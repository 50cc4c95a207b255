"""Isometric projection of a planner layout.

The 3D view draws each placed item as an extruded box on the room floor.
Floor coordinates are millimeters measured from the room's top-left corner,
the same origin the 2D canvas uses.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..value_objects import PlacedFurniture

__all__ = ["Box", "IsometricProjection", "point_in_polygon"]

_COS30 = math.cos(math.radians(30))
_SIN30 = 0.5


@dataclass(frozen=True)
class Box:
    """Axis-aligned furniture volume in room millimeters."""

    item_id: str
    x: float
    y: float
    width: float
    depth: float
    height: float

    @classmethod
    def from_placed(cls, item: PlacedFurniture, scale: float) -> "Box":
        width, depth = item.footprint_mm()
        return cls(
            item_id=item.id,
            x=item.x / scale,
            y=item.y / scale,
            width=width,
            depth=depth,
            height=item.furniture.height,
        )

    @property
    def depth_key(self) -> float:
        """Painter's order; larger keys are nearer the viewer."""
        return (self.x + self.width / 2) + (self.y + self.depth / 2)


@dataclass(frozen=True)
class IsometricProjection:
    """Maps room millimeters to screen pixels.

    Attributes:
        scale: Screen pixels per millimeter.
        origin_x: Screen x of the room's (0, 0, 0) corner.
        origin_y: Screen y of the room's (0, 0, 0) corner.
    """

    scale: float = 0.08
    origin_x: float = 0.0
    origin_y: float = 0.0

    def project(self, x: float, y: float, z: float = 0.0) -> tuple[float, float]:
        sx = self.origin_x + (x - y) * _COS30 * self.scale
        sy = self.origin_y + ((x + y) * _SIN30 - z) * self.scale
        return sx, sy

    def outline(self, box: Box) -> list[tuple[float, float]]:
        """Screen silhouette of a box as a hexagon, clockwise from the top."""
        x0, y0 = box.x, box.y
        x1, y1 = box.x + box.width, box.y + box.depth
        h = box.height
        return [
            self.project(x0, y0, h),
            self.project(x1, y0, h),
            self.project(x1, y0, 0),
            self.project(x1, y1, 0),
            self.project(x0, y1, 0),
            self.project(x0, y1, h),
        ]

    def faces(self, box: Box) -> dict[str, list[tuple[float, float]]]:
        """The three visible faces: top, right (x-facing) and front (y-facing)."""
        x0, y0 = box.x, box.y
        x1, y1 = box.x + box.width, box.y + box.depth
        h = box.height
        return {
            "top": [
                self.project(x0, y0, h),
                self.project(x1, y0, h),
                self.project(x1, y1, h),
                self.project(x0, y1, h),
            ],
            "right": [
                self.project(x1, y0, h),
                self.project(x1, y0, 0),
                self.project(x1, y1, 0),
                self.project(x1, y1, h),
            ],
            "front": [
                self.project(x0, y1, h),
                self.project(x1, y1, h),
                self.project(x1, y1, 0),
                self.project(x0, y1, 0),
            ],
        }

    @classmethod
    def fitted(
        cls, room_width: float, room_depth: float, wall_height: float, margin: float, scale: float
    ) -> "IsometricProjection":
        """Projection whose origin keeps the whole room and its walls on screen."""
        origin_x = margin + room_depth * _COS30 * scale
        origin_y = margin + wall_height * scale
        return cls(scale=scale, origin_x=origin_x, origin_y=origin_y)


def point_in_polygon(px: float, py: float, polygon: Sequence[tuple[float, float]]) -> bool:
    """Even-odd ray casting test."""
    inside = False
    count = len(polygon)
    for i in range(count):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % count]
        if (y1 > py) != (y2 > py):
            crossing = x1 + (py - y1) * (x2 - x1) / (y2 - y1)
            if px < crossing:
                inside = not inside
    return inside
