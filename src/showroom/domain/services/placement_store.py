"""In-memory placement store for a planner session."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from ..entities import PlannerPhase, PlannerState
from ..value_objects import FurnitureItem, PlacedFurniture, RoomDimensions, Rotation
from .snap_solver import SNAP_THRESHOLD_PX, SnapResult, snap

__all__ = ["PlacementStore"]


def _new_placed_id() -> str:
    return f"placed-{uuid.uuid4().hex[:12]}"


@dataclass
class PlacementStore:
    """Owns placed items, selection, scale and room size for one session.

    Every operation taking an id ignores ids that are not placed. The UI
    may hold stale references (a drag racing a delete, a double click), so
    unknown ids are a no-op rather than an error.

    Attributes:
        state: The mutable session aggregate.
        snap_threshold: Snap distance in canvas pixels.
        id_factory: Generates ids for newly placed items.
    """

    state: PlannerState = field(default_factory=PlannerState)
    snap_threshold: float = SNAP_THRESHOLD_PX
    id_factory: Callable[[], str] = _new_placed_id

    # -- queries -------------------------------------------------------------

    @property
    def placed(self) -> list[PlacedFurniture]:
        return list(self.state.placed)

    @property
    def phase(self) -> PlannerPhase:
        return self.state.phase

    @property
    def selected_id(self) -> str | None:
        return self.state.selected_id

    @property
    def selected_furniture(self) -> PlacedFurniture | None:
        return self.state.find(self.state.selected_id)

    @property
    def scale(self) -> float:
        return self.state.scale

    @property
    def room(self) -> RoomDimensions:
        return self.state.room

    def canvas_size(self) -> tuple[float, float]:
        return self.state.room.canvas_size(self.state.scale)

    def get(self, item_id: str) -> PlacedFurniture | None:
        return self.state.find(item_id)

    def get_total_price(self) -> int:
        """Sum of template prices over every placed item."""
        return sum(item.furniture.price for item in self.state.placed)

    # -- settings ------------------------------------------------------------

    def set_room_dimensions(self, room: RoomDimensions) -> None:
        self.state.room = room

    def set_scale(self, scale: float) -> None:
        if scale <= 0:
            raise ValueError("Scale must be positive")
        self.state.scale = scale

    def select(self, item_id: str | None) -> None:
        """Select a placed item, or clear the selection with None."""
        if item_id is None or self.state.find(item_id) is not None:
            self.state.selected_id = item_id

    # -- mutations -----------------------------------------------------------

    def add_furniture(self, template: FurnitureItem, x: float, y: float) -> PlacedFurniture:
        """Place a new instance of a template and select it.

        The drop position is used as-is; snapping only applies to later moves.
        """
        placed = PlacedFurniture(
            id=self.id_factory(),
            furniture=template,
            x=x,
            y=y,
            rotation=Rotation.R0,
        )
        self.state.placed.append(placed)
        self.state.selected_id = placed.id
        return placed

    def update_furniture_position(
        self,
        item_id: str,
        x: float,
        y: float,
        canvas_width: float,
        canvas_height: float,
    ) -> SnapResult | None:
        """Move an item, snapping against a snapshot of its neighbors."""
        index = self.state.index_of(item_id)
        if index is None:
            return None
        snapshot = tuple(self.state.placed)
        moving = snapshot[index]
        others = [item for item in snapshot if item.id != item_id]
        result = snap(
            x,
            y,
            moving,
            others,
            canvas_width,
            canvas_height,
            self.state.scale,
            self.snap_threshold,
        )
        self.state.placed[index] = moving.moved_to(result.x, result.y)
        return result

    def rotate_furniture(self, item_id: str) -> None:
        """Rotate by 90 degrees; the position is not re-snapped."""
        index = self.state.index_of(item_id)
        if index is not None:
            self.state.placed[index] = self.state.placed[index].rotated()

    def change_furniture_color(self, item_id: str, color: str) -> None:
        """Override the color of one instance; the template is untouched."""
        index = self.state.index_of(item_id)
        if index is not None:
            self.state.placed[index] = self.state.placed[index].recolored(color)

    def remove_furniture(self, item_id: str) -> None:
        self.state.placed = [item for item in self.state.placed if item.id != item_id]
        if self.state.selected_id == item_id:
            self.state.selected_id = None

    def clear_all(self) -> None:
        self.state.placed = []
        self.state.selected_id = None
