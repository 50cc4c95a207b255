"""Domain entities for the space planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .value_objects import PlacedFurniture, RoomDimensions


class PlannerPhase(str, Enum):
    """Coarse state of a planner session."""

    EMPTY = "empty"
    HAS_ITEMS = "has_items"


@dataclass
class PlannerState:
    """Aggregate state of one planner session.

    Created empty when a session starts and discarded when it ends; nothing
    here is persisted.

    Attributes:
        room: Room size in millimeters.
        placed: Placed items; list order is insertion and z-order.
        selected_id: Id of the selected item, if any.
        scale: Pixels per millimeter.
    """

    room: RoomDimensions = field(default_factory=RoomDimensions)
    placed: list[PlacedFurniture] = field(default_factory=list)
    selected_id: str | None = None
    scale: float = 0.1

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("Scale must be positive")

    @property
    def phase(self) -> PlannerPhase:
        return PlannerPhase.HAS_ITEMS if self.placed else PlannerPhase.EMPTY

    def index_of(self, item_id: str) -> int | None:
        for index, item in enumerate(self.placed):
            if item.id == item_id:
                return index
        return None

    def find(self, item_id: str | None) -> PlacedFurniture | None:
        if item_id is None:
            return None
        index = self.index_of(item_id)
        return None if index is None else self.placed[index]
