"""Pointer interaction for the 2D canvas and the 3D view.

Both controllers drive one shared PlacementStore. The 2D canvas supports
dropping templates, selecting and dragging; the 3D view only selects.

A drag captures document-level move/up listeners for its duration. The
listener pair is registered when the drag starts and removed on release,
on a new drag, and when the dragged item disappears mid-drag.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, Protocol

from showroom.domain.services import (
    Box,
    IsometricProjection,
    PlacementStore,
    item_rect,
    point_in_polygon,
)
from showroom.domain.value_objects import FurnitureItem, PlacedFurniture

logger = logging.getLogger(__name__)

PointerKind = Literal["mouse", "touch"]
Handler = Callable[[float, float], None]

MOVE_EVENTS: dict[str, str] = {"mouse": "mousemove", "touch": "touchmove"}
END_EVENTS: dict[str, str] = {"mouse": "mouseup", "touch": "touchend"}


class ListenerTarget(Protocol):
    """Something pointer listeners can be attached to (the document)."""

    def add_listener(self, event: str, handler: Handler) -> None:
        ...

    def remove_listener(self, event: str, handler: Handler) -> None:
        ...


@dataclass
class ListenerRegistry:
    """Event name -> handlers, with synchronous dispatch."""

    handlers: dict[str, list[Handler]] = field(default_factory=dict)

    def add_listener(self, event: str, handler: Handler) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Handler) -> None:
        listeners = self.handlers.get(event, [])
        if handler in listeners:
            listeners.remove(handler)
        if not listeners:
            self.handlers.pop(event, None)

    def dispatch(self, event: str, x: float, y: float) -> None:
        for handler in list(self.handlers.get(event, [])):
            handler(x, y)

    def count(self, event: str | None = None) -> int:
        if event is not None:
            return len(self.handlers.get(event, []))
        return sum(len(listeners) for listeners in self.handlers.values())


class DragSession:
    """One captured drag of a placed item.

    Usable as a context manager; leaving the block releases the listeners
    whether the drag finished normally or not.
    """

    def __init__(
        self,
        store: PlacementStore,
        target: ListenerTarget,
        item_id: str,
        offset: tuple[float, float],
        kind: PointerKind = "mouse",
        on_release: Callable[["DragSession"], None] | None = None,
    ) -> None:
        self.store = store
        self.target = target
        self.item_id = item_id
        self.offset = offset
        self.kind = kind
        self.on_release = on_release
        self.active = False

    def start(self) -> "DragSession":
        if not self.active:
            self.target.add_listener(MOVE_EVENTS[self.kind], self.move)
            self.target.add_listener(END_EVENTS[self.kind], self.end)
            self.active = True
        return self

    def move(self, x: float, y: float) -> None:
        if not self.active:
            return
        if self.store.get(self.item_id) is None:
            logger.debug(f"Dragged item {self.item_id} vanished; releasing capture")
            self.release()
            return
        width, height = self.store.canvas_size()
        self.store.update_furniture_position(
            self.item_id, x - self.offset[0], y - self.offset[1], width, height
        )

    def end(self, x: float, y: float) -> None:
        self.release()

    def release(self) -> None:
        if not self.active:
            return
        self.target.remove_listener(MOVE_EVENTS[self.kind], self.move)
        self.target.remove_listener(END_EVENTS[self.kind], self.end)
        self.active = False
        if self.on_release is not None:
            self.on_release(self)

    def __enter__(self) -> "DragSession":
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class CanvasInteraction:
    """Translates 2D canvas pointer events into placement store operations.

    Coordinates are canvas pixels relative to the canvas's top-left corner.

    Example:
        >>> document = ListenerRegistry()
        >>> canvas = CanvasInteraction(store, document)
        >>> placed = canvas.drop(template, 300, 200)
        >>> canvas.pointer_down(placed.id, 310, 210)
        >>> document.dispatch("mousemove", 400, 260)
        >>> document.dispatch("mouseup", 400, 260)
    """

    def __init__(self, store: PlacementStore, target: ListenerTarget | None = None) -> None:
        self.store = store
        self.target = target if target is not None else ListenerRegistry()
        self.drag: DragSession | None = None

    def drop(self, template: FurnitureItem, x: float, y: float) -> PlacedFurniture:
        """Place a template so the cursor sits at its center."""
        scale = self.store.scale
        left = max(0.0, x - template.width * scale / 2)
        top = max(0.0, y - template.depth * scale / 2)
        return self.store.add_furniture(template, left, top)

    def hit_test(self, x: float, y: float) -> PlacedFurniture | None:
        """Top-most placed item under a point (last drawn wins)."""
        for item in reversed(self.store.placed):
            if item_rect(item, self.store.scale).contains(x, y):
                return item
        return None

    def pointer_down(
        self, item_id: str, x: float, y: float, kind: PointerKind = "mouse"
    ) -> DragSession | None:
        """Select an item and begin dragging it; unknown ids are ignored."""
        item = self.store.get(item_id)
        if item is None:
            return None
        self.cancel_drag()
        self.store.select(item_id)
        self.drag = DragSession(
            self.store,
            self.target,
            item_id,
            offset=(x - item.x, y - item.y),
            kind=kind,
            on_release=self._forget,
        ).start()
        return self.drag

    def click(self, x: float, y: float) -> None:
        """Click on the canvas: select what is under the pointer, else deselect."""
        item = self.hit_test(x, y)
        self.store.select(item.id if item else None)

    def cancel_drag(self) -> None:
        if self.drag is not None:
            self.drag.release()

    def _forget(self, session: DragSession) -> None:
        if self.drag is session:
            self.drag = None


class Scene3DView:
    """Isometric view of the store; clicking selects, dragging is not supported."""

    def __init__(
        self,
        store: PlacementStore,
        scale: float = 0.08,
        margin: float = 20.0,
        wall_height: float = 2400.0,
    ) -> None:
        self.store = store
        self.scale = scale
        self.margin = margin
        self.wall_height = wall_height

    @property
    def projection(self) -> IsometricProjection:
        room = self.store.room
        return IsometricProjection.fitted(
            room.width, room.height, self.wall_height, self.margin, self.scale
        )

    def boxes(self) -> list[Box]:
        """Boxes in draw order, farthest first."""
        boxes = [Box.from_placed(item, self.store.scale) for item in self.store.placed]
        return sorted(boxes, key=lambda box: box.depth_key)

    def pick(self, screen_x: float, screen_y: float) -> str | None:
        projection = self.projection
        for box in reversed(self.boxes()):
            if point_in_polygon(screen_x, screen_y, projection.outline(box)):
                return box.item_id
        return None

    def click(self, screen_x: float, screen_y: float) -> str | None:
        """Select the nearest item under the pointer; empty space deselects."""
        item_id = self.pick(screen_x, screen_y)
        self.store.select(item_id)
        return item_id
