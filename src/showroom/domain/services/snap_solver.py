"""Placement geometry for the space planner.

Pure functions computing rotation-aware on-canvas sizes and snapping a
dragged item to the room walls and to its neighbors. Nothing here mutates
its inputs; the placement store commits the returned position.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..value_objects import PlacedFurniture, Rect

__all__ = [
    "SNAP_THRESHOLD_PX",
    "SnapResult",
    "effective_size",
    "item_rect",
    "snap",
]

# Screen-space threshold; deliberately independent of the zoom scale.
SNAP_THRESHOLD_PX = 20.0


@dataclass(frozen=True)
class SnapResult:
    """Outcome of a snap computation.

    Attributes:
        x: Final x position in canvas pixels.
        y: Final y position in canvas pixels.
        snapped_x: Which target the x axis snapped to ("wall", a neighbor id, or None).
        snapped_y: Which target the y axis snapped to ("wall", a neighbor id, or None).
    """

    x: float
    y: float
    snapped_x: str | None = None
    snapped_y: str | None = None


def effective_size(item: PlacedFurniture, scale: float) -> tuple[float, float]:
    """Return the on-canvas (width, height) of an item in pixels.

    Width and depth swap when the item is rotated by 90 or 270 degrees.
    """
    width_mm, depth_mm = item.footprint_mm()
    return (width_mm * scale, depth_mm * scale)


def item_rect(item: PlacedFurniture, scale: float) -> Rect:
    """Canvas rectangle covered by an item."""
    width, height = effective_size(item, scale)
    return Rect(item.x, item.y, width, height)


def _wall_snap(
    value: float, size: float, limit: float, threshold: float
) -> tuple[float, str | None]:
    snapped = value
    target: str | None = None
    if abs(value) < threshold:
        snapped, target = 0.0, "wall"
    if abs(value + size - limit) < threshold:
        snapped, target = limit - size, "wall"
    return snapped, target


def _closest_alignment(
    current: float,
    size: float,
    neighbors: Sequence[tuple[str, float, float]],
    threshold: float,
) -> tuple[float, str] | None:
    """Pick the closest edge-to-edge alignment on one axis.

    ``neighbors`` holds (id, start, extent) per neighbor on this axis. Two
    alignments are tested per neighbor: our leading edge against its
    trailing edge, and our trailing edge against its leading edge. The
    smallest distance within the threshold wins; equal distances keep the
    earliest neighbor in list order.
    """
    best: tuple[float, float, str] | None = None
    for neighbor_id, start, extent in neighbors:
        candidates = (
            start + extent,  # our left/top edge to its right/bottom edge
            start - size,  # our right/bottom edge to its left/top edge
        )
        for candidate in candidates:
            distance = abs(current - candidate)
            if distance >= threshold:
                continue
            if best is None or distance < best[0]:
                best = (distance, candidate, neighbor_id)
    if best is None:
        return None
    return best[1], best[2]


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(value, upper))


def snap(
    x: float,
    y: float,
    moving: PlacedFurniture,
    others: Sequence[PlacedFurniture],
    canvas_width: float,
    canvas_height: float,
    scale: float,
    threshold: float = SNAP_THRESHOLD_PX,
) -> SnapResult:
    """Snap a candidate position to walls and neighbors, then clamp.

    Steps:
        1. Wall snap on each axis against the canvas edges.
        2. Neighbor snap: the closest edge-to-edge alignment within the
           threshold overrides the wall snap on that axis. The x and y axes
           are resolved independently and may snap to different neighbors.
        3. Clamp into [0, canvas - size]; clamping wins over any snap.

    Args:
        x: Candidate x position in pixels.
        y: Candidate y position in pixels.
        moving: The item being moved (its rotation decides its size).
        others: Snapshot of every other placed item.
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        scale: Pixels per millimeter.
        threshold: Snap distance in pixels.

    Returns:
        SnapResult with the final position.
    """
    width, height = effective_size(moving, scale)

    snapped_x, target_x = _wall_snap(x, width, canvas_width, threshold)
    snapped_y, target_y = _wall_snap(y, height, canvas_height, threshold)

    rects = [(other.id, item_rect(other, scale)) for other in others if other.id != moving.id]

    horizontal = _closest_alignment(
        snapped_x, width, [(oid, r.x, r.width) for oid, r in rects], threshold
    )
    if horizontal is not None:
        snapped_x, target_x = horizontal

    vertical = _closest_alignment(
        snapped_y, height, [(oid, r.y, r.height) for oid, r in rects], threshold
    )
    if vertical is not None:
        snapped_y, target_y = vertical

    final_x = _clamp(snapped_x, canvas_width - width)
    final_y = _clamp(snapped_y, canvas_height - height)
    if final_x != snapped_x:
        target_x = "wall"
    if final_y != snapped_y:
        target_y = "wall"

    return SnapResult(final_x, final_y, target_x, target_y)
