"""Tests for the isometric projection used by the 3D view."""

from __future__ import annotations

import math

import pytest

from showroom.domain.services import Box, IsometricProjection, point_in_polygon
from showroom.domain.value_objects import FurnitureItem, PlacedFurniture, Rotation


class TestBox:
    def test_from_placed_converts_pixels_to_mm(self, desk: FurnitureItem) -> None:
        item = PlacedFurniture(id="d", furniture=desk, x=10, y=20, rotation=Rotation.R90)
        box = Box.from_placed(item, 0.1)
        assert (box.x, box.y) == pytest.approx((100, 200))
        assert (box.width, box.depth, box.height) == (600, 1200, 730)

    def test_depth_key_orders_far_before_near(self) -> None:
        far = Box("far", 0, 0, 100, 100, 100)
        near = Box("near", 2000, 2000, 100, 100, 100)
        assert far.depth_key < near.depth_key


class TestIsometricProjection:
    def test_origin_maps_to_origin(self) -> None:
        projection = IsometricProjection(scale=0.1, origin_x=50, origin_y=60)
        assert projection.project(0, 0, 0) == pytest.approx((50, 60))

    def test_x_axis_goes_right_and_down(self) -> None:
        sx, sy = IsometricProjection(scale=1.0).project(100, 0)
        assert sx == pytest.approx(100 * math.cos(math.radians(30)))
        assert sy == pytest.approx(50)

    def test_height_moves_up(self) -> None:
        projection = IsometricProjection(scale=1.0)
        _, floor_y = projection.project(10, 10, 0)
        _, top_y = projection.project(10, 10, 100)
        assert top_y == pytest.approx(floor_y - 100)

    def test_fitted_keeps_room_on_screen(self) -> None:
        projection = IsometricProjection.fitted(5000, 4000, 2400, 20, 0.08)
        left_x, _ = projection.project(0, 4000)
        _, top_y = projection.project(0, 0, 2400)
        assert left_x == pytest.approx(20)
        assert top_y == pytest.approx(20)

    def test_outline_contains_box_center(self) -> None:
        projection = IsometricProjection(scale=0.1, origin_x=400, origin_y=300)
        box = Box("b", 1000, 1000, 800, 600, 700)
        center = projection.project(1400, 1300, 350)
        assert point_in_polygon(*center, projection.outline(box))

    def test_faces_have_four_corners(self) -> None:
        faces = IsometricProjection().faces(Box("b", 0, 0, 10, 10, 10))
        assert set(faces) == {"top", "right", "front"}
        assert all(len(points) == 4 for points in faces.values())


class TestPointInPolygon:
    square = [(0, 0), (10, 0), (10, 10), (0, 10)]

    def test_inside_and_outside(self) -> None:
        assert point_in_polygon(5, 5, self.square)
        assert not point_in_polygon(15, 5, self.square)
        assert not point_in_polygon(-1, -1, self.square)
