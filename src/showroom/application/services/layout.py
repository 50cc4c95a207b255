"""Conversion between layout files and planner sessions."""

from __future__ import annotations

from showroom.domain.entities import PlannerState
from showroom.domain.services import SNAP_THRESHOLD_PX, PlacementStore
from showroom.domain.value_objects import (
    FurnitureItem,
    PlacedFurniture,
    RoomDimensions,
    Rotation,
)

from ..config.schema import LayoutItemConfig, PlannerLayoutConfig, RoomConfig


def _furniture(item: LayoutItemConfig, index: int) -> FurnitureItem:
    return FurnitureItem(
        id=item.furniture_id or f"item-{index}",
        name=item.name,
        category=item.category,
        width=item.width,
        depth=item.depth,
        price=item.price,
        color=item.color,
        height=item.height,
    )


def store_from_layout(
    layout: PlannerLayoutConfig, snap_threshold: float = SNAP_THRESHOLD_PX
) -> PlacementStore:
    """Build a session from a layout; positions are taken as saved."""
    placed = [
        PlacedFurniture(
            id=item.id or f"placed-{index}",
            furniture=_furniture(item, index),
            x=item.x,
            y=item.y,
            rotation=Rotation(item.rotation),
        )
        for index, item in enumerate(layout.items, start=1)
    ]
    state = PlannerState(
        room=RoomDimensions(width=layout.room.width, height=layout.room.height),
        placed=placed,
        scale=layout.scale,
    )
    return PlacementStore(state=state, snap_threshold=snap_threshold)


def layout_from_store(store: PlacementStore) -> PlannerLayoutConfig:
    return PlannerLayoutConfig(
        room=RoomConfig(width=store.room.width, height=store.room.height),
        scale=store.scale,
        items=[
            LayoutItemConfig(
                id=item.id,
                furniture_id=item.furniture_id,
                name=item.furniture.name,
                category=item.furniture.category,
                width=item.furniture.width,
                depth=item.furniture.depth,
                height=item.furniture.height,
                price=item.furniture.price,
                color=item.color,
                x=item.x,
                y=item.y,
                rotation=int(item.rotation),
            )
            for item in store.placed
        ],
    )
