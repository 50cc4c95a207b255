"""Tests for workbook reading and embedded image extraction.

Tests cover:
- Header normalization and cell text conversion
- Images anchored on data rows, per-row cap, size limit and format check
- Unresolvable image anchors reported as warnings
- Images floating on empty rows reattached to the nearest product
- Unreadable and empty workbooks
"""

from __future__ import annotations

import zipfile
from datetime import datetime
from io import BytesIO

import pytest
from PIL import Image

from showroom.contracts.errors import SpreadsheetParseError
from showroom.infrastructure import spreadsheet_reader
from showroom.infrastructure.spreadsheet_reader import (
    SpreadsheetReader,
    cell_text,
    is_csv_file,
    is_excel_file,
    normalize_header,
    resolve_anchor,
)


class TestHelpers:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            ("  책상 ", "책상"),
            (1200.0, "1200"),
            (12.5, "12.5"),
            (True, "TRUE"),
            (datetime(2024, 3, 1), "2024-03-01"),
        ],
    )
    def test_cell_text(self, value, expected) -> None:
        assert cell_text(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"), [("품명 *", "품명"), ("가격*", "가격"), ("  규격  ", "규격")]
    )
    def test_normalize_header(self, value, expected) -> None:
        assert normalize_header(value) == expected

    def test_resolve_cell_reference(self) -> None:
        assert resolve_anchor("G2") == (2, 7)
        assert resolve_anchor("not a cell") is None
        assert resolve_anchor("??") is None
        assert resolve_anchor(None) is None

    def test_file_kind_detection(self) -> None:
        assert is_excel_file("products.XLSX")
        assert is_excel_file("upload", "application/vnd.ms-excel")
        assert is_csv_file("products.csv")
        assert not is_csv_file("products.xlsx")


class TestSpreadsheetReader:
    """Tests for SpreadsheetReader.read."""

    def test_reads_rows_keyed_by_header(self, make_workbook) -> None:
        content = make_workbook(
            [
                ["품명 *", "가격", "규격"],
                ["책상", 500000, "1200x600"],
                ["의자", 80000.0, None],
            ]
        )

        parsed = SpreadsheetReader().read(content)

        assert parsed.headers == ["품명", "가격", "규격"]
        assert [row.row_index for row in parsed.rows] == [2, 3]
        assert parsed.rows[0].data == {"품명": "책상", "가격": "500000", "규격": "1200x600"}
        assert parsed.rows[1].data["가격"] == "80000"
        assert parsed.rows[1].data["규격"] == ""

    def test_blank_rows_are_skipped(self, make_workbook) -> None:
        content = make_workbook([["품명"], ["책상"], [None], ["의자"]])
        parsed = SpreadsheetReader().read(content)
        assert [row.row_index for row in parsed.rows] == [2, 4]

    def test_image_attached_to_its_row(self, make_workbook, png_bytes) -> None:
        content = make_workbook(
            [["품명", "이미지"], ["책상", None], ["의자", None]],
            images=[("B3", png_bytes())],
        )

        parsed = SpreadsheetReader().read(content)

        assert parsed.rows[0].images == []
        (image,) = parsed.rows[1].images
        assert image.extension == "png"
        assert (image.anchor_row, image.anchor_col) == (3, 2)
        assert image.data.startswith(b"\x89PNG")

    def test_images_per_row_are_capped(self, make_workbook, png_bytes) -> None:
        cells = ["B2", "C2", "D2", "E2"]
        content = make_workbook(
            [["품명"], ["책상"]], images=[(cell, png_bytes()) for cell in cells]
        )

        parsed = SpreadsheetReader().read(content)

        images = parsed.rows[0].images
        assert [image.anchor_col for image in images] == [2, 3, 4]
        assert any("초과" in warning for warning in parsed.warnings)

    def test_floating_image_moves_to_nearest_row(self, make_workbook, png_bytes) -> None:
        content = make_workbook([["품명"], ["책상"]], images=[("B3", png_bytes("blue"))])

        parsed = SpreadsheetReader().read(content)

        assert [row.row_index for row in parsed.rows] == [2]
        assert len(parsed.rows[0].images) == 1
        assert parsed.rows[0].images[0].anchor_row == 2

    def test_header_row_image_is_ignored(self, make_workbook, png_bytes) -> None:
        content = make_workbook([["품명"], ["책상"]], images=[("B1", png_bytes())])

        parsed = SpreadsheetReader().read(content)

        assert parsed.rows[0].images == []
        assert any("헤더 행" in warning for warning in parsed.warnings)

    def test_oversized_image_is_skipped(self, make_workbook, png_bytes) -> None:
        content = make_workbook([["품명"], ["책상"]], images=[("B2", png_bytes(size=(64, 64)))])

        parsed = SpreadsheetReader(max_image_size=10).read(content)

        assert parsed.rows[0].images == []
        assert any("용량 초과" in warning for warning in parsed.warnings)

    def test_not_a_workbook(self) -> None:
        with pytest.raises(SpreadsheetParseError, match="엑셀 파일을 읽을 수 없습니다"):
            SpreadsheetReader().read(b"definitely not a zip")

    def test_headers_only(self, make_workbook) -> None:
        with pytest.raises(SpreadsheetParseError, match="데이터가 없습니다"):
            SpreadsheetReader().read(make_workbook([["품명", "가격"]]))

    def test_empty_sheet(self, make_workbook) -> None:
        with pytest.raises(SpreadsheetParseError, match="헤더가 없습니다"):
            SpreadsheetReader().read(make_workbook([]))

    def test_unsupported_image_format_is_dropped(self, make_workbook, png_bytes) -> None:
        """Test that a BMP picture is reported and left off its row."""
        bmp = BytesIO()
        Image.new("RGB", (8, 8), "red").save(bmp, format="BMP")
        content = _replace_media(
            make_workbook([["품명"], ["책상"]], images=[("B2", png_bytes())]), bmp.getvalue()
        )

        parsed = SpreadsheetReader().read(content)

        assert [row.data["품명"] for row in parsed.rows] == ["책상"]
        assert parsed.rows[0].images == []
        assert any("지원하지 않는 이미지 형식 (bmp)" in warning for warning in parsed.warnings)

    def test_unresolvable_anchor_is_a_warning(
        self, make_workbook, png_bytes, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a picture with a malformed cell anchor is skipped, not fatal."""
        real_load = spreadsheet_reader.load_workbook

        def load_with_broken_anchor(*args, **kwargs):
            workbook = real_load(*args, **kwargs)
            workbook.worksheets[0]._images[0].anchor = "??"
            return workbook

        monkeypatch.setattr(spreadsheet_reader, "load_workbook", load_with_broken_anchor)
        content = make_workbook([["품명"], ["책상"]], images=[("B2", png_bytes())])

        parsed = SpreadsheetReader().read(content)

        assert parsed.rows[0].images == []
        assert "이미지 1: 위치를 확인할 수 없어 무시됩니다." in parsed.warnings


def _replace_media(content: bytes, data: bytes) -> bytes:
    """Swap every embedded media part of a workbook for ``data``."""
    buffer = BytesIO()
    with zipfile.ZipFile(BytesIO(content)) as source, zipfile.ZipFile(buffer, "w") as target:
        for info in source.infolist():
            payload = source.read(info.filename)
            if info.filename.startswith("xl/media/"):
                payload = data
            target.writestr(info, payload)
    return buffer.getvalue()
