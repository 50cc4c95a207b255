"""Plain CSV product sheets (no embedded images)."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass

from showroom.contracts.errors import SpreadsheetParseError
from showroom.domain.value_objects import ExcelRowData, ParsedSpreadsheet
from showroom.infrastructure.spreadsheet_reader import normalize_header

logger = logging.getLogger(__name__)

MAX_CSV_FILE_SIZE = 5 * 1024 * 1024
MAX_CSV_ROWS = 1000
MAX_FIELD_LENGTH = 10000


@dataclass
class CsvReader:
    """Reads header-keyed rows from CSV text.

    Quoted fields, doubled quotes and embedded commas are handled by the
    standard csv module. Blank lines are ignored; row numbers count from the
    header line as row 1, like the spreadsheet path.
    """

    max_file_size: int = MAX_CSV_FILE_SIZE
    max_rows: int = MAX_CSV_ROWS

    def read(self, content: bytes) -> ParsedSpreadsheet:
        """Parse CSV bytes (UTF-8, optional BOM).

        Raises:
            SpreadsheetParseError: If the file is too large, has too many rows,
                cannot be decoded or lacks a header and at least one data row.
        """
        if len(content) > self.max_file_size:
            limit_mb = self.max_file_size / (1024 * 1024)
            raise SpreadsheetParseError(f"CSV 파일은 {limit_mb:g}MB 이하여야 합니다.")

        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SpreadsheetParseError("CSV 파일은 UTF-8 인코딩이어야 합니다.") from e

        lines = [
            (number, record)
            for number, record in enumerate(csv.reader(io.StringIO(text)), start=1)
            if any(field.strip() for field in record)
        ]
        if len(lines) < 2:
            raise SpreadsheetParseError("CSV 파일에 헤더와 데이터가 필요합니다.")
        if len(lines) > self.max_rows + 1:
            raise SpreadsheetParseError(
                f"CSV 파일은 최대 {self.max_rows}개의 행만 처리할 수 있습니다."
            )

        headers = [normalize_header(value) for value in lines[0][1]]
        if not any(headers):
            raise SpreadsheetParseError("CSV 헤더가 비어있습니다.")

        result = ParsedSpreadsheet(headers=[h for h in headers if h])
        for position, (_, values) in enumerate(lines[1:], start=2):
            data = {
                header: (values[index].strip() if index < len(values) else "")[:MAX_FIELD_LENGTH]
                for index, header in enumerate(headers)
                if header
            }
            result.rows.append(ExcelRowData(position, data))

        logger.debug(f"Parsed {len(result.rows)} CSV rows")
        return result
