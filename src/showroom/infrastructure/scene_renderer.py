"""SVG rendering of planner layouts.

This module provides a top-down canvas view with a 500 mm grid and an
isometric view with extruded furniture boxes. Both read the same
PlacementStore, so the two views always agree.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from showroom.domain.services import Box, IsometricProjection, item_rect
from showroom.domain.services.catalog_mapper import DEFAULT_COLOR
from showroom.domain.services.placement_store import PlacementStore
from showroom.domain.services.quote_composer import format_mm
from showroom.domain.value_objects import PlacedFurniture

GRID_SPACING_MM = 500
DEFAULT_WALL_HEIGHT_MM = 2400.0


def _points(polygon: list[tuple[float, float]]) -> str:
    return " ".join(f"{x:.1f},{y:.1f}" for x, y in polygon)


def _fill(item: PlacedFurniture) -> str:
    return item.color or DEFAULT_COLOR


class TopDownRenderer:
    """Renders the 2D canvas as SVG.

    Attributes:
        grid_color: Stroke color for the 500 mm grid.
        wall_color: Stroke color for the room outline.
        selection_color: Outline color of the selected item.
        show_dimensions: Whether to print footprint sizes under labels.
    """

    def __init__(
        self,
        grid_color: str = "#e5e7eb",
        wall_color: str = "#374151",
        selection_color: str = "#2563eb",
        show_dimensions: bool = True,
    ) -> None:
        self.grid_color = grid_color
        self.wall_color = wall_color
        self.selection_color = selection_color
        self.show_dimensions = show_dimensions

    def render(self, store: PlacementStore) -> str:
        """Generate an SVG document for the current layout.

        Args:
            store: Placement store to draw.

        Returns:
            SVG markup sized to the canvas (room size times scale).
        """
        width, height = store.canvas_size()
        parts: list[str] = [
            f'<svg width="{width:g}" height="{height:g}" '
            f'viewBox="0 0 {width:g} {height:g}" xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{width:g}" height="{height:g}" fill="white"/>',
        ]

        parts.append("  <!-- Grid -->")
        parts.extend(self._render_grid(store, width, height))

        parts.append("  <!-- Furniture -->")
        for item in store.placed:
            parts.append(self._render_item(item, store.scale, item.id == store.selected_id))

        parts.append(
            f'  <rect x="0" y="0" width="{width:g}" height="{height:g}" '
            f'fill="none" stroke="{self.wall_color}" stroke-width="4"/>'
        )
        parts.append("</svg>")
        return "\n".join(parts)

    def _render_grid(self, store: PlacementStore, width: float, height: float) -> list[str]:
        step = GRID_SPACING_MM * store.scale
        lines: list[str] = []
        x = step
        while x < width:
            lines.append(
                f'  <line x1="{x:g}" y1="0" x2="{x:g}" y2="{height:g}" '
                f'stroke="{self.grid_color}" stroke-width="1"/>'
            )
            x += step
        y = step
        while y < height:
            lines.append(
                f'  <line x1="0" y1="{y:g}" x2="{width:g}" y2="{y:g}" '
                f'stroke="{self.grid_color}" stroke-width="1"/>'
            )
            y += step
        return lines

    def _render_item(self, item: PlacedFurniture, scale: float, selected: bool) -> str:
        rect = item_rect(item, scale)
        stroke = self.selection_color if selected else "#6b7280"
        stroke_width = 2 if selected else 1
        cx = rect.x + rect.width / 2
        cy = rect.y + rect.height / 2
        label = escape(item.furniture.name)

        parts = [
            f'  <g data-id="{escape(item.id)}" data-rotation="{int(item.rotation)}">',
            f'    <rect x="{rect.x:g}" y="{rect.y:g}" width="{rect.width:g}" '
            f'height="{rect.height:g}" fill="{_fill(item)}" stroke="{stroke}" '
            f'stroke-width="{stroke_width}" rx="2"/>',
            f'    <text x="{cx:g}" y="{cy:g}" text-anchor="middle" '
            f'font-size="10" font-family="sans-serif">{label}</text>',
        ]
        if self.show_dimensions:
            width_mm, depth_mm = item.footprint_mm()
            parts.append(
                f'    <text x="{cx:g}" y="{cy + 12:g}" text-anchor="middle" '
                f'font-size="8" font-family="sans-serif" fill="#6b7280">'
                f"{format_mm(width_mm)}×{format_mm(depth_mm)}</text>"
            )
        parts.append("  </g>")
        return "\n".join(parts)


class IsometricRenderer:
    """Renders the layout as an isometric 3D scene in SVG.

    Boxes are painted back to front by their floor-center depth so nearer
    furniture covers farther furniture.
    """

    def __init__(
        self,
        scale: float = 0.08,
        margin: float = 20.0,
        wall_height: float = DEFAULT_WALL_HEIGHT_MM,
        selection_color: str = "#2563eb",
    ) -> None:
        self.scale = scale
        self.margin = margin
        self.wall_height = wall_height
        self.selection_color = selection_color

    def projection(self, store: PlacementStore) -> IsometricProjection:
        room = store.room
        return IsometricProjection.fitted(
            room.width, room.height, self.wall_height, self.margin, self.scale
        )

    def canvas_size(self, store: PlacementStore) -> tuple[float, float]:
        room = store.room
        projection = self.projection(store)
        right, _ = projection.project(room.width, 0)
        _, bottom = projection.project(room.width, room.height)
        return right + self.margin, bottom + self.margin

    def render(self, store: PlacementStore) -> str:
        projection = self.projection(store)
        width, height = self.canvas_size(store)
        room = store.room

        floor = [
            projection.project(0, 0),
            projection.project(room.width, 0),
            projection.project(room.width, room.height),
            projection.project(0, room.height),
        ]
        back_wall = [
            projection.project(0, 0, self.wall_height),
            projection.project(room.width, 0, self.wall_height),
            projection.project(room.width, 0),
            projection.project(0, 0),
        ]
        left_wall = [
            projection.project(0, 0, self.wall_height),
            projection.project(0, 0),
            projection.project(0, room.height),
            projection.project(0, room.height, self.wall_height),
        ]

        parts: list[str] = [
            f'<svg width="{width:.1f}" height="{height:.1f}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "  <!-- Room -->",
            f'  <polygon points="{_points(back_wall)}" fill="#f3f4f6" stroke="#9ca3af"/>',
            f'  <polygon points="{_points(left_wall)}" fill="#e5e7eb" stroke="#9ca3af"/>',
            f'  <polygon points="{_points(floor)}" fill="#fafaf9" stroke="#9ca3af"/>',
            "  <!-- Furniture -->",
        ]

        boxes = sorted(
            ((Box.from_placed(item, store.scale), item) for item in store.placed),
            key=lambda pair: pair[0].depth_key,
        )
        for box, item in boxes:
            parts.append(
                self._render_box(projection, box, item, item.id == store.selected_id)
            )

        parts.append("</svg>")
        return "\n".join(parts)

    def _render_box(
        self,
        projection: IsometricProjection,
        box: Box,
        item: PlacedFurniture,
        selected: bool,
    ) -> str:
        faces = projection.faces(box)
        stroke = self.selection_color if selected else "#4b5563"
        fill = _fill(item)
        return "\n".join(
            [
                f'  <g data-id="{escape(item.id)}">',
                f'    <polygon points="{_points(faces["front"])}" fill="{fill}" '
                f'stroke="{stroke}" fill-opacity="0.85"/>',
                f'    <polygon points="{_points(faces["right"])}" fill="{fill}" '
                f'stroke="{stroke}" fill-opacity="0.7"/>',
                f'    <polygon points="{_points(faces["top"])}" fill="{fill}" '
                f'stroke="{stroke}"/>',
                "  </g>",
            ]
        )
