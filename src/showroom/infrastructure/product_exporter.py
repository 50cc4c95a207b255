"""CSV export of catalog products and the CSV upload template.

Exported files use the Korean headers the importer accepts, so an export
can be edited and uploaded again.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable, Mapping
from typing import Any

EXPORT_HEADERS: tuple[str, ...] = (
    "슬러그",
    "품명",
    "규격",
    "조달식별번호",
    "가격",
    "제품설명",
    "이미지URL",
    "추가이미지1",
    "추가이미지2",
    "뱃지",
    "특징",
    "대분류",
    "소분류",
    "순서",
)

EXPORT_FILENAME = "제품_목록.csv"
TEMPLATE_FILENAME = "제품_업로드_템플릿.csv"

CSV_TEMPLATE_ROWS: tuple[dict[str, Any], ...] = (
    {
        "슬러그": "example-product-1",
        "품명": "예시 제품 1",
        "규격": "W1200 x D600 x H750",
        "조달식별번호": "12345678",
        "가격": "500,000",
        "제품설명": "제품 설명을 입력하세요",
        "이미지URL": "https://example.com/image1.jpg",
        "추가이미지1": "https://example.com/image2.jpg",
        "추가이미지2": "https://example.com/image3.jpg",
        "뱃지": "MAS 등록, KS 인증",
        "특징": "특징1 | 특징2 | 특징3",
        "대분류": "educational",
        "소분류": "blackboard-cabinet",
        "순서": 1,
    },
    {
        "슬러그": "example-product-2",
        "품명": "예시 제품 2",
        "규격": "W800 x D500 x H1800",
        "조달식별번호": "87654321",
        "가격": "350,000",
        "제품설명": "두 번째 제품 설명",
        "이미지URL": "",
        "추가이미지1": "",
        "추가이미지2": "",
        "뱃지": "친환경",
        "특징": "내구성 우수 | 조립 간편",
        "대분류": "office",
        "소분류": "cabinet",
        "순서": 2,
    },
)


def _size_text(specs: Any) -> str:
    if not specs:
        return ""
    if isinstance(specs, str):
        return specs
    if isinstance(specs, Mapping) and isinstance(specs.get("규격"), str):
        return specs["규격"]
    return json.dumps(specs, ensure_ascii=False)


def to_export_row(product: Mapping[str, Any], index: int) -> dict[str, Any]:
    """Flatten a stored product row into export columns."""
    images = list(product.get("images") or [])
    return {
        "슬러그": product.get("slug") or "",
        "품명": product.get("title") or "",
        "규격": _size_text(product.get("specs")),
        "조달식별번호": product.get("procurement_id") or "",
        "가격": product.get("price") or "",
        "제품설명": product.get("description") or "",
        "이미지URL": images[0] if images else product.get("image_url") or "",
        "추가이미지1": images[1] if len(images) > 1 else "",
        "추가이미지2": images[2] if len(images) > 2 else "",
        "뱃지": ", ".join(product.get("badges") or []),
        "특징": " | ".join(product.get("features") or []),
        "대분류": product.get("main_category") or "",
        "소분류": product.get("subcategory") or "",
        "순서": product.get("display_order") or index,
    }


def render_csv(rows: Iterable[Mapping[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_HEADERS, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


class ProductCsvExporter:
    """Writes products as UTF-8 CSV with a byte order mark for spreadsheet apps."""

    def export(self, products: Iterable[Mapping[str, Any]]) -> bytes:
        rows = [to_export_row(product, index) for index, product in enumerate(products)]
        return render_csv(rows).encode("utf-8-sig")

    def template(self) -> bytes:
        return render_csv(CSV_TEMPLATE_ROWS).encode("utf-8-sig")
