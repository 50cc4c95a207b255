"""Reattachment of embedded images anchored next to their data row.

Users drop pictures onto a sheet by hand, so an image's anchor cell often
lands a row above or below the product it illustrates. Rows that carry
images but no data are folded into the nearest data row within a bounded
distance.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..value_objects import ExcelRowData

__all__ = ["AnchorRemapper", "RemapResult"]

DEFAULT_REMAP_DISTANCE = 2
DEFAULT_MAX_IMAGES_PER_ROW = 3


@dataclass
class RemapResult:
    """Rows after remapping, ordered by row index, plus warnings."""

    rows: list[ExcelRowData] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    moved_images: int = 0


@dataclass
class AnchorRemapper:
    """Moves images from image-only rows onto the nearest data row.

    Attributes:
        max_distance: Maximum row distance an image may travel.
        max_images_per_row: Image capacity of a data row.
    """

    max_distance: int = DEFAULT_REMAP_DISTANCE
    max_images_per_row: int = DEFAULT_MAX_IMAGES_PER_ROW

    def _nearest_data_row(
        self, row_index: int, data_rows: Sequence[int]
    ) -> int | None:
        best: int | None = None
        for candidate in data_rows:
            distance = abs(candidate - row_index)
            if distance > self.max_distance:
                continue
            # Ascending scan: strict < keeps the earlier row on ties.
            if best is None or distance < abs(best - row_index):
                best = candidate
        return best

    def remap(self, rows: Sequence[ExcelRowData]) -> RemapResult:
        """Fold image-only rows into neighboring data rows.

        Image-only rows with no data row in range lose their images with a
        warning. Rows left with neither data nor images are removed.
        """
        by_index = {
            row.row_index: ExcelRowData(row.row_index, dict(row.data), list(row.images))
            for row in rows
        }
        data_rows = sorted(index for index, row in by_index.items() if row.has_data)
        result = RemapResult()

        for index in sorted(by_index):
            row = by_index[index]
            if row.has_data or not row.images:
                continue

            target_index = self._nearest_data_row(index, data_rows)
            if target_index is None:
                result.warnings.append(
                    f"행 {index}: 연결할 데이터 행이 없어 이미지 {len(row.images)}개가 무시됩니다."
                )
                row.images = []
                continue

            target = by_index[target_index]
            capacity = max(self.max_images_per_row - len(target.images), 0)
            moving = row.images[:capacity]
            dropped = len(row.images) - len(moving)
            target.images.extend(image.moved_to_row(target_index) for image in moving)
            result.moved_images += len(moving)
            if dropped:
                result.warnings.append(
                    f"행 {target_index}: 이미지가 {self.max_images_per_row}개를 초과하여 "
                    f"행 {index}의 이미지 {dropped}개가 무시됩니다."
                )
            row.images = []

        result.rows = [
            row for index, row in sorted(by_index.items()) if row.has_data or row.images
        ]
        return result
