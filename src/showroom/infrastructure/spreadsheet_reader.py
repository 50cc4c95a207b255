"""Workbook reading with embedded image extraction.

This module reads the first worksheet of an .xlsx workbook with openpyxl,
normalizes the header row, extracts embedded images with their anchor cell
and groups them onto data rows. Image anchors that float onto empty rows are
reconciled by the AnchorRemapper.
"""

from __future__ import annotations

import logging
import re
import zipfile
from dataclasses import dataclass, field
from datetime import date, datetime
from io import BytesIO
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.cell import coordinate_from_string, column_index_from_string
from openpyxl.utils.exceptions import CellCoordinatesException, InvalidFileException

from showroom.contracts.errors import SpreadsheetParseError
from showroom.domain.services import AnchorRemapper
from showroom.domain.value_objects import ExcelImageData, ExcelRowData, ParsedSpreadsheet

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES: tuple[str, ...] = ("png", "jpeg", "jpg", "gif", "webp")
MAX_IMAGE_SIZE = 5 * 1024 * 1024
MAX_IMAGES_PER_ROW = 3

EXCEL_CONTENT_TYPES = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
)
EXCEL_EXTENSIONS = (".xlsx", ".xls")

# openpyxl hands back gif/jpeg/png bytes untouched and re-encodes the rest as png
_PASSTHROUGH_FORMATS = ("gif", "jpeg", "png")

_HEADER_MARKER_RE = re.compile(r"[\s*]+$")


def is_excel_file(filename: str, content_type: str | None = None) -> bool:
    return content_type in EXCEL_CONTENT_TYPES or filename.lower().endswith(EXCEL_EXTENSIONS)


def is_csv_file(filename: str, content_type: str | None = None) -> bool:
    return content_type == "text/csv" or filename.lower().endswith(".csv")


def normalize_header(value: Any) -> str:
    """Header text without surrounding whitespace or trailing "*" markers.

    Examples:
        >>> normalize_header("품명 *")
        '품명'
    """
    return _HEADER_MARKER_RE.sub("", cell_text(value))


def cell_text(value: Any) -> str:
    """Cell value as trimmed text; integral floats lose their ".0"."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime) and not (value.hour or value.minute or value.second):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def resolve_anchor(anchor: Any) -> tuple[int, int] | None:
    """Resolve an image anchor to a 1-based (row, col) pair.

    Two encodings are understood: a cell reference string such as "G2",
    and a one-/two-cell anchor object whose ``_from`` marker holds 0-based
    row and column indices. Anything else (e.g. absolute anchors) is None.
    """
    if isinstance(anchor, str):
        try:
            column_letters, row = coordinate_from_string(anchor)
            return row, column_index_from_string(column_letters)
        except (ValueError, CellCoordinatesException):
            return None

    marker = getattr(anchor, "_from", None)
    if marker is None:
        return None
    row = getattr(marker, "row", None)
    col = getattr(marker, "col", None)
    if row is None or col is None:
        return None
    return int(row) + 1, int(col) + 1


@dataclass
class SpreadsheetReader:
    """Reads product rows and embedded images from an .xlsx workbook.

    Attributes:
        max_image_size: Largest accepted image in bytes.
        max_images_per_row: Images kept per data row.
        remapper: Reconciles image-only rows with nearby data rows.
    """

    max_image_size: int = MAX_IMAGE_SIZE
    max_images_per_row: int = MAX_IMAGES_PER_ROW
    remapper: AnchorRemapper = field(default_factory=AnchorRemapper)

    def read(self, content: bytes) -> ParsedSpreadsheet:
        """Parse a workbook.

        Args:
            content: Raw .xlsx bytes.

        Returns:
            ParsedSpreadsheet with rows, headers and per-image warnings.

        Raises:
            SpreadsheetParseError: If the workbook cannot be read or has no
                sheet, no headers or no data rows.
        """
        try:
            workbook = load_workbook(BytesIO(content), data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as e:
            raise SpreadsheetParseError(f"엑셀 파일을 읽을 수 없습니다: {e}") from e

        if not workbook.worksheets:
            raise SpreadsheetParseError("엑셀 파일에 시트가 없습니다.")
        worksheet = workbook.worksheets[0]

        headers = self._read_headers(worksheet)
        if not any(headers.values()):
            raise SpreadsheetParseError("엑셀 파일에 헤더가 없습니다.")

        result = ParsedSpreadsheet(headers=[h for h in headers.values() if h])
        images_by_row = self._collect_images(worksheet, result.warnings)

        rows: list[ExcelRowData] = []
        for row_index, values in enumerate(
            worksheet.iter_rows(min_row=2, max_row=worksheet.max_row, values_only=True),
            start=2,
        ):
            data = {
                header: cell_text(values[col - 1]) if col - 1 < len(values) else ""
                for col, header in headers.items()
                if header
            }
            images = images_by_row.pop(row_index, [])
            if any(data.values()) or images:
                rows.append(ExcelRowData(row_index, data, images))

        # Images anchored below the last populated row
        for row_index, images in sorted(images_by_row.items()):
            rows.append(ExcelRowData(row_index, {h: "" for h in headers.values() if h}, images))

        remapped = self.remapper.remap(rows)
        result.warnings.extend(remapped.warnings)
        result.rows = remapped.rows
        if remapped.moved_images:
            logger.info(f"Reattached {remapped.moved_images} images to neighboring rows")

        if not result.rows:
            raise SpreadsheetParseError("엑셀 파일에 데이터가 없습니다.")

        logger.debug(f"Parsed {len(result.rows)} rows, {len(result.warnings)} warnings")
        return result

    def _read_headers(self, worksheet: Any) -> dict[int, str]:
        headers: dict[int, str] = {}
        for cell in next(worksheet.iter_rows(min_row=1, max_row=1), ()):
            text = normalize_header(cell.value)
            if text:
                headers[cell.column] = text
        return headers

    def _validate_image(self, extension: str, size: int, row: int) -> str | None:
        if extension not in SUPPORTED_IMAGE_TYPES:
            return (
                f"행 {row}: 지원하지 않는 이미지 형식 ({extension}). "
                f"지원 형식: {', '.join(SUPPORTED_IMAGE_TYPES)}"
            )
        if size > self.max_image_size:
            size_mb = size / (1024 * 1024)
            limit_mb = self.max_image_size / (1024 * 1024)
            return f"행 {row}: 이미지 용량 초과 ({size_mb:.2f}MB). 최대 {limit_mb:g}MB까지 허용됩니다."
        return None

    def _extract(self, image: Any) -> tuple[bytes, str]:
        image_format = str(getattr(image, "format", "") or "png").lower()
        data = image._data()
        extension = image_format if image_format in _PASSTHROUGH_FORMATS else "png"
        return data, extension

    def _collect_images(
        self, worksheet: Any, warnings: list[str]
    ) -> dict[int, list[ExcelImageData]]:
        extracted: list[ExcelImageData] = []
        for position, image in enumerate(getattr(worksheet, "_images", []), start=1):
            anchor = resolve_anchor(getattr(image, "anchor", None))
            if anchor is None:
                warnings.append(f"이미지 {position}: 위치를 확인할 수 없어 무시됩니다.")
                continue
            row, col = anchor
            if row < 2:
                warnings.append(f"이미지 {position}: 헤더 행에 있는 이미지는 무시됩니다.")
                continue

            source_format = str(getattr(image, "format", "") or "png").lower()
            if source_format not in SUPPORTED_IMAGE_TYPES:
                warnings.append(
                    f"행 {row}: 지원하지 않는 이미지 형식 ({source_format}). "
                    f"지원 형식: {', '.join(SUPPORTED_IMAGE_TYPES)}"
                )
                continue
            try:
                data, extension = self._extract(image)
            except (OSError, ValueError, ImportError) as e:
                logger.warning(f"Could not extract image {position}: {e}")
                warnings.append(f"행 {row}: 이미지를 읽을 수 없어 무시됩니다.")
                continue

            problem = self._validate_image(extension, len(data), row)
            if problem:
                warnings.append(problem)
                continue
            extracted.append(ExcelImageData(data, extension, row, col))

        images_by_row: dict[int, list[ExcelImageData]] = {}
        for image_data in sorted(extracted, key=lambda i: (i.anchor_row, i.anchor_col)):
            row_images = images_by_row.setdefault(image_data.anchor_row, [])
            if len(row_images) < self.max_images_per_row:
                row_images.append(image_data)
            else:
                warnings.append(
                    f"행 {image_data.anchor_row}: 이미지가 {self.max_images_per_row}개를 "
                    "초과하여 일부가 무시됩니다."
                )
        return images_by_row
