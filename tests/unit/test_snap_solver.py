"""Tests for the snap solver.

Tests cover:
- Rotation-aware effective sizes
- Wall snapping on both axes
- Neighbor edge alignment and its precedence over walls
- Clamping into the canvas
- Determinism for a fixed input
"""

from __future__ import annotations

import pytest

from showroom.domain.services import SNAP_THRESHOLD_PX, effective_size, item_rect, snap
from showroom.domain.value_objects import FurnitureItem, PlacedFurniture, Rotation

SCALE = 0.1
CANVAS_W = 500.0
CANVAS_H = 400.0


def _placed(
    template: FurnitureItem,
    item_id: str = "moving",
    x: float = 0.0,
    y: float = 0.0,
    rotation: Rotation = Rotation.R0,
) -> PlacedFurniture:
    return PlacedFurniture(id=item_id, furniture=template, x=x, y=y, rotation=rotation)


@pytest.fixture
def slim() -> FurnitureItem:
    """A 100x100 mm item, 10x10 px on the canvas."""
    return FurnitureItem(id="slim", name="스툴", category="chairs", width=100, depth=100, price=1)


class TestEffectiveSize:
    """Tests for rotation-aware sizes."""

    def test_unrotated_size_is_template_footprint(self, desk: FurnitureItem) -> None:
        assert effective_size(_placed(desk), SCALE) == pytest.approx((120.0, 60.0))

    @pytest.mark.parametrize("rotation", [Rotation.R90, Rotation.R270])
    def test_quarter_turn_swaps_width_and_depth(
        self, desk: FurnitureItem, rotation: Rotation
    ) -> None:
        assert effective_size(_placed(desk, rotation=rotation), SCALE) == pytest.approx(
            (60.0, 120.0)
        )

    def test_two_quarter_turns_restore_orientation(self, desk: FurnitureItem) -> None:
        item = _placed(desk).rotated().rotated()
        assert item.rotation is Rotation.R180
        assert effective_size(item, SCALE) == pytest.approx((120.0, 60.0))

    def test_rotation_has_period_four(self, desk: FurnitureItem) -> None:
        item = _placed(desk)
        for _ in range(4):
            item = item.rotated()
        assert item.rotation is Rotation.R0

    def test_item_rect_uses_position(self, desk: FurnitureItem) -> None:
        rect = item_rect(_placed(desk, x=10, y=20), SCALE)
        assert (rect.x, rect.y, rect.right, rect.bottom) == pytest.approx((10, 20, 130, 80))


class TestWallSnap:
    """Tests for snapping against the canvas edges."""

    def test_near_top_left_snaps_to_origin(self, desk: FurnitureItem) -> None:
        result = snap(2, 2, _placed(desk), [], CANVAS_W, CANVAS_H, SCALE)
        assert (result.x, result.y) == (0.0, 0.0)
        assert result.snapped_x == "wall"
        assert result.snapped_y == "wall"

    def test_near_right_and_bottom_walls(self, desk: FurnitureItem) -> None:
        result = snap(375, 335, _placed(desk), [], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(380.0)
        assert result.y == pytest.approx(340.0)

    def test_far_from_walls_is_unchanged(self, desk: FurnitureItem) -> None:
        result = snap(200, 150, _placed(desk), [], CANVAS_W, CANVAS_H, SCALE)
        assert (result.x, result.y) == (200, 150)
        assert result.snapped_x is None
        assert result.snapped_y is None

    def test_threshold_is_exclusive(self, desk: FurnitureItem) -> None:
        result = snap(SNAP_THRESHOLD_PX, 100, _placed(desk), [], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == SNAP_THRESHOLD_PX


class TestNeighborSnap:
    """Tests for edge-to-edge alignment with other items."""

    def test_left_edge_aligns_to_neighbor_right_edge(
        self, desk: FurnitureItem, chair: FurnitureItem
    ) -> None:
        neighbor = _placed(desk, "desk-1", x=100, y=100)
        result = snap(230, 100, _placed(chair), [neighbor], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(220.0)
        assert result.snapped_x == "desk-1"
        assert result.y == pytest.approx(100.0)

    def test_right_edge_aligns_to_neighbor_left_edge(
        self, desk: FurnitureItem, chair: FurnitureItem
    ) -> None:
        neighbor = _placed(desk, "desk-1", x=200, y=100)
        # chair is 45 px wide; its right edge at 150 + 45 = 195 is 5 px off
        result = snap(150, 250, _placed(chair), [neighbor], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(155.0)
        assert result.snapped_x == "desk-1"

    def test_neighbor_overrides_wall(self, desk: FurnitureItem, slim: FurnitureItem) -> None:
        neighbor = _placed(slim, "stool", x=0, y=300)
        result = snap(12, 100, _placed(desk), [neighbor], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(10.0)
        assert result.snapped_x == "stool"

    def test_axes_snap_independently(self, desk: FurnitureItem, chair: FurnitureItem) -> None:
        left = _placed(desk, "left", x=100, y=50)
        below = _placed(desk, "below", x=300, y=250)
        # x aligns with "left" (right edge 220); y aligns above "below" (250 - 45 = 205)
        result = snap(225, 200, _placed(chair), [left, below], CANVAS_W, CANVAS_H, SCALE)
        assert (result.x, result.y) == pytest.approx((220.0, 205.0))
        assert result.snapped_x == "left"
        assert result.snapped_y == "below"

    def test_closest_alignment_wins(self, chair: FurnitureItem, slim: FurnitureItem) -> None:
        near = _placed(slim, "near", x=200, y=300)  # right edge 210
        far = _placed(slim, "far", x=205, y=0)  # right edge 215
        result = snap(212, 150, _placed(chair), [far, near], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(210.0)
        assert result.snapped_x == "near"

    def test_equal_distance_keeps_earlier_neighbor(
        self, chair: FurnitureItem, slim: FurnitureItem
    ) -> None:
        first = _placed(slim, "first", x=200, y=300)  # right edge 210
        second = _placed(slim, "second", x=210, y=0)  # right edge 220
        result = snap(215, 150, _placed(chair), [first, second], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(210.0)
        assert result.snapped_x == "first"

    def test_moving_item_is_not_its_own_neighbor(self, desk: FurnitureItem) -> None:
        moving = _placed(desk, "same", x=200, y=150)
        result = snap(205, 150, moving, [moving], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(205.0)

    def test_rotated_neighbor_uses_swapped_footprint(
        self, desk: FurnitureItem, chair: FurnitureItem
    ) -> None:
        neighbor = _placed(desk, "turned", x=100, y=100, rotation=Rotation.R90)  # 60 px wide
        result = snap(165, 300, _placed(chair), [neighbor], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(160.0)


class TestClamp:
    """Tests for clamping into the canvas."""

    @pytest.mark.parametrize(
        ("x", "y"),
        [(-50, -50), (600, 500), (-10, 390), (499, 0), (1000, -1000)],
    )
    def test_result_is_always_inside_canvas(self, desk: FurnitureItem, x: float, y: float) -> None:
        result = snap(x, y, _placed(desk), [], CANVAS_W, CANVAS_H, SCALE)
        assert 0 <= result.x <= CANVAS_W - 120
        assert 0 <= result.y <= CANVAS_H - 60

    def test_clamp_wins_over_neighbor_snap(self, desk: FurnitureItem, slim: FurnitureItem) -> None:
        neighbor = _placed(slim, "edge", x=490, y=0)  # right edge at the canvas edge
        result = snap(485, 200, _placed(desk), [neighbor], CANVAS_W, CANVAS_H, SCALE)
        assert result.x == pytest.approx(CANVAS_W - 120)
        assert result.snapped_x == "wall"


class TestDeterminism:
    """Snapping a fixed input against a fixed layout is repeatable."""

    @pytest.mark.parametrize(("x", "y"), [(2, 2), (225, 200), (485, 200), (-30, 410)])
    def test_same_input_same_output(
        self, desk: FurnitureItem, chair: FurnitureItem, x: float, y: float
    ) -> None:
        others = [_placed(desk, "a", x=100, y=50), _placed(desk, "b", x=300, y=250)]
        first = snap(x, y, _placed(chair), others, CANVAS_W, CANVAS_H, SCALE)
        second = snap(x, y, _placed(chair), others, CANVAS_W, CANVAS_H, SCALE)
        assert first == second
