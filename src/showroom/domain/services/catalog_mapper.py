"""Conversion of catalog product rows into planner furniture templates."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..value_objects import FurnitureItem

__all__ = [
    "CATEGORY_COLORS",
    "DEFAULT_COLOR",
    "category_color",
    "parse_dimensions",
    "parse_price",
    "product_to_furniture",
    "products_to_furniture",
]

DEFAULT_WIDTH = 800
DEFAULT_DEPTH = 600
DEFAULT_HEIGHT = 400

CATEGORY_COLORS: dict[str, str] = {
    "educational": "hsl(45, 40%, 85%)",
    "office": "hsl(210, 20%, 80%)",
    "chairs": "hsl(0, 0%, 30%)",
    "dining-table": "hsl(30, 40%, 70%)",
    "lab-bench": "hsl(180, 15%, 75%)",
    "military": "hsl(120, 15%, 65%)",
}
DEFAULT_COLOR = "hsl(210, 15%, 80%)"

_DIMENSIONS_RE = re.compile(r"(\d+)\s*[×xX*]\s*(\d+)\s*[×xX*]\s*(\d+)")

# key -> index into (width, depth, height)
_JSON_DIMENSION_KEYS: tuple[tuple[str, int], ...] = (
    ("width", 0),
    ("height", 1),
    ("depth", 2),
    ("가로", 0),
    ("세로", 1),
    ("높이", 2),
)


def _positive_int(value: Any, default: int) -> int:
    match = re.match(r"\s*(\d+)", str(value))
    if not match:
        return default
    return int(match.group(1)) or default


def parse_dimensions(specs: Any) -> tuple[int, int, int]:
    """Parse (width, depth, height) in mm from a product's specs.

    Accepts "W×D×H" text such as "1400×800×730mm" or "650x450x720",
    then a JSON object with width/height/depth (or 가로/세로/높이) keys, where
    "height" is the top-view depth. Anything else yields the defaults.
    """
    width, depth, height = DEFAULT_WIDTH, DEFAULT_DEPTH, DEFAULT_HEIGHT
    if isinstance(specs, Mapping):
        parsed: Any = specs
    elif isinstance(specs, str):
        match = _DIMENSIONS_RE.search(specs)
        if match:
            return (
                int(match.group(1)) or DEFAULT_WIDTH,
                int(match.group(2)) or DEFAULT_DEPTH,
                int(match.group(3)) or DEFAULT_HEIGHT,
            )
        try:
            parsed = json.loads(specs)
        except ValueError:
            return (width, depth, height)
    else:
        return (width, depth, height)

    if not isinstance(parsed, Mapping):
        return (width, depth, height)

    values = [width, depth, height]
    defaults = (DEFAULT_WIDTH, DEFAULT_DEPTH, DEFAULT_HEIGHT)
    for key, index in _JSON_DIMENSION_KEYS:
        if parsed.get(key):
            values[index] = _positive_int(parsed[key], defaults[index])
    return (values[0], values[1], values[2])


def parse_price(price: str | None) -> int:
    """Digits of a display price string ("500,000원" -> 500000), else 0."""
    if not price:
        return 0
    digits = re.sub(r"[^0-9]", "", str(price))
    return int(digits) if digits else 0


def category_color(main_category: str | None) -> str:
    return CATEGORY_COLORS.get(main_category or "", DEFAULT_COLOR)


def product_to_furniture(product: Mapping[str, Any], category: str) -> FurnitureItem:
    """Build a FurnitureItem from a product table row."""
    width, depth, height = parse_dimensions(product.get("specs"))
    return FurnitureItem(
        id=str(product["id"]),
        name=str(product.get("title") or ""),
        category=category,
        width=width,
        depth=depth,
        height=height,
        price=parse_price(product.get("price")),
        thumbnail=product.get("thumbnail_url") or "",
        color=category_color(product.get("main_category")),
    )


def products_to_furniture(
    products: Iterable[Mapping[str, Any]], category: str
) -> list[FurnitureItem]:
    """Convert product rows, dropping duplicate ids while keeping order."""
    seen: set[str] = set()
    items: list[FurnitureItem] = []
    for product in products:
        product_id = str(product["id"])
        if product_id in seen:
            continue
        seen.add(product_id)
        items.append(product_to_furniture(product, category))
    return items
