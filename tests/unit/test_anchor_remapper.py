"""Tests for reattaching floating images to data rows."""

from __future__ import annotations

from showroom.domain.services import AnchorRemapper
from showroom.domain.value_objects import ExcelImageData, ExcelRowData


def _image(row: int, col: int = 7, tag: bytes = b"x") -> ExcelImageData:
    return ExcelImageData(tag, "png", row, col)


def _data_row(index: int, title: str, images: list[ExcelImageData] | None = None) -> ExcelRowData:
    return ExcelRowData(index, {"품명": title}, images or [])


def _image_row(index: int, *images: ExcelImageData) -> ExcelRowData:
    return ExcelRowData(index, {"품명": ""}, list(images))


class TestAnchorRemapper:
    """Tests for AnchorRemapper.remap."""

    def test_rows_with_own_images_are_untouched(self) -> None:
        rows = [_data_row(2, "책상", [_image(2)]), _data_row(3, "의자")]
        result = AnchorRemapper().remap(rows)
        assert [len(row.images) for row in result.rows] == [1, 0]
        assert result.moved_images == 0
        assert result.warnings == []

    def test_image_one_row_below_moves_up(self) -> None:
        rows = [_data_row(2, "책상"), _image_row(3, _image(3, tag=b"a"))]
        result = AnchorRemapper().remap(rows)

        assert [row.row_index for row in result.rows] == [2]
        moved = result.rows[0].images
        assert [image.data for image in moved] == [b"a"]
        assert moved[0].anchor_row == 2
        assert result.moved_images == 1

    def test_image_two_rows_below_still_attaches(self) -> None:
        rows = [_data_row(2, "책상"), _image_row(4, _image(4))]
        result = AnchorRemapper().remap(rows)
        assert len(result.rows[0].images) == 1

    def test_image_too_far_is_dropped_with_warning(self) -> None:
        rows = [_data_row(2, "책상"), _image_row(5, _image(5))]
        result = AnchorRemapper().remap(rows)

        assert [row.row_index for row in result.rows] == [2]
        assert result.rows[0].images == []
        assert len(result.warnings) == 1
        assert "행 5" in result.warnings[0]

    def test_equidistant_image_goes_to_earlier_row(self) -> None:
        rows = [_data_row(2, "책상"), _image_row(3, _image(3)), _data_row(4, "의자")]
        result = AnchorRemapper().remap(rows)
        assert [len(row.images) for row in result.rows] == [1, 0]

    def test_nearest_row_wins(self) -> None:
        rows = [_data_row(2, "책상"), _image_row(5, _image(5)), _data_row(6, "의자")]
        result = AnchorRemapper(max_distance=3).remap(rows)
        assert [len(row.images) for row in result.rows] == [0, 1]

    def test_capacity_is_respected(self) -> None:
        rows = [
            _data_row(2, "책상", [_image(2), _image(2)]),
            _image_row(3, _image(3, tag=b"a"), _image(3, tag=b"b")),
        ]
        result = AnchorRemapper().remap(rows)

        assert [image.data for image in result.rows[0].images] == [b"x", b"x", b"a"]
        assert len(result.warnings) == 1

    def test_input_rows_are_not_mutated(self) -> None:
        target = _data_row(2, "책상")
        rows = [target, _image_row(3, _image(3))]
        AnchorRemapper().remap(rows)
        assert target.images == []
