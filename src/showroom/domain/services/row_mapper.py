"""Mapping of raw import rows onto product records.

Header aliases (Korean and English) are resolved once per file into a
``HeaderMap``; every row lookup then goes straight to the matching columns
in alias priority order.
"""

from __future__ import annotations

import json
from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..value_objects import (
    BADGE_MAX_LENGTH,
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    DISPLAY_ORDER_MAX,
    FEATURE_MAX_LENGTH,
    IMAGE_URL_MAX_LENGTH,
    MAX_BADGES,
    MAX_FEATURES,
    MAX_IMAGES,
    PRICE_MAX_LENGTH,
    PROCUREMENT_ID_MAX_LENGTH,
    SIZE_MAX_LENGTH,
    SLUG_MAX_LENGTH,
    SPECS_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    ProductImportRecord,
)
from .slug_allocator import SlugAllocator, create_slug_from_title, fallback_slug

__all__ = [
    "FIELD_ALIASES",
    "HeaderMap",
    "MappingResult",
    "RowClaim",
    "RowToProductMapper",
    "SpecsMode",
    "parse_specs_json",
]

# Ordered (canonical field, accepted headers) pairs; earlier aliases win.
FIELD_ALIASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("title", ("품명", "제품명", "title")),
    ("slug", ("슬러그", "slug")),
    ("description", ("제품설명", "설명", "description")),
    ("image_url", ("이미지URL", "image_url")),
    ("additional_image_1", ("추가이미지1", "additional_image_1")),
    ("additional_image_2", ("추가이미지2", "additional_image_2")),
    ("badges", ("뱃지", "badges")),
    ("features", ("특징", "features")),
    ("specs", ("사양", "specs")),
    ("size", ("규격", "size")),
    ("main_category", ("대분류", "main_category")),
    ("subcategory", ("소분류", "subcategory")),
    ("display_order", ("순서", "display_order")),
    ("procurement_id", ("조달식별번호", "조달번호", "procurement_id")),
    ("price", ("가격", "price")),
)

URL_FIELDS = ("image_url", "additional_image_1", "additional_image_2")
URL_PREFIXES = ("http://", "https://", "/")
MAX_SPEC_KEYS = 50

# Placeholder columns that hold embedded pictures rather than values
IMAGE_PLACEHOLDER_HEADERS = ("이미지", "이미지 (여기에 삽입)", "image")


class SpecsMode(str, Enum):
    """How the specs column is stored."""

    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class HeaderMap:
    """Canonical field -> matching headers present in one file."""

    columns: Mapping[str, tuple[str, ...]]
    unsupported_headers: tuple[str, ...] = ()

    @classmethod
    def resolve(cls, headers: Iterable[str]) -> "HeaderMap":
        present = [h for h in headers if h]
        columns: dict[str, tuple[str, ...]] = {}
        known: set[str] = set(IMAGE_PLACEHOLDER_HEADERS)
        for canonical, aliases in FIELD_ALIASES:
            known.update(aliases)
            matches = tuple(alias for alias in aliases if alias in present)
            if matches:
                columns[canonical] = matches
        unsupported = tuple(h for h in present if h not in known)
        return cls(columns=columns, unsupported_headers=unsupported)

    def has(self, canonical: str) -> bool:
        return canonical in self.columns

    def value(self, data: Mapping[str, str], canonical: str) -> str:
        """First non-empty value among the field's columns, else ""."""
        for header in self.columns.get(canonical, ()):
            value = data.get(header) or ""
            if value:
                return value
        return ""

    def title(self, data: Mapping[str, str]) -> str:
        return self.value(data, "title")


@dataclass(frozen=True)
class RowClaim:
    """A row that passed validation and holds an allocated slug."""

    row_index: int
    data: Mapping[str, str]
    title: str
    slug: str


@dataclass
class MappingResult:
    """Record or rejection for a single row."""

    record: ProductImportRecord | None = None
    errors: list[str] = field(default_factory=list)


def _cap(value: str, limit: int) -> str | None:
    return value[:limit] or None


def _split(value: str, separator: str, max_items: int, max_length: int) -> list[str]:
    if not value:
        return []
    return [part.strip()[:max_length] for part in value.split(separator)][:max_items]


def parse_specs_json(text: str) -> dict[str, Any]:
    """Parse a JSON specs object; anything else (or too many keys) yields {}."""
    if not text or not text.strip():
        return {}
    try:
        parsed = json.loads(text)
    except ValueError:
        return {}
    if not isinstance(parsed, dict) or len(parsed) > MAX_SPEC_KEYS:
        return {}
    return parsed


def _display_order(value: str, default: int) -> int:
    try:
        number = float(value.replace(",", "")) if value else None
    except ValueError:
        number = None
    if number is None or number != number:  # NaN
        number = default
    return int(min(max(number, 0), DISPLAY_ORDER_MAX))


class RowToProductMapper:
    """Turns raw rows into ProductImportRecords.

    Mapping is split in two steps so images can be uploaded under the
    allocated slug in between: ``claim`` validates the title and allocates
    the slug, ``build`` assembles the record from the claim and the uploaded
    image URLs. ``map_row`` runs both for rows without embedded images.
    """

    def __init__(
        self,
        header_map: HeaderMap,
        slug_allocator: SlugAllocator | None = None,
        specs_mode: SpecsMode = SpecsMode.TEXT,
    ) -> None:
        self.header_map = header_map
        self.slug_allocator = slug_allocator or SlugAllocator()
        self.specs_mode = specs_mode

    def claim(
        self,
        row_index: int,
        data: Mapping[str, str],
        existing_slugs: Collection[str],
        batch_slugs: set[str],
    ) -> RowClaim | str:
        """Validate a row and allocate its slug.

        Returns:
            A RowClaim, or the rejection message when the title is missing.
            The allocated slug is added to ``batch_slugs``.
        """
        title = self.header_map.title(data)[:TITLE_MAX_LENGTH]
        if not title:
            return f"행 {row_index}: 품명이 필요합니다."

        base = self.header_map.value(data, "slug").strip()[:SLUG_MAX_LENGTH]
        if not base:
            base = create_slug_from_title(title)
        if not base:
            base = fallback_slug(row_index)

        slug = self.slug_allocator.allocate(base, existing_slugs, batch_slugs)
        batch_slugs.add(slug)
        return RowClaim(row_index=row_index, data=data, title=title, slug=slug)

    def url_images(self, data: Mapping[str, str]) -> list[str]:
        urls = []
        for canonical in URL_FIELDS:
            url = self.header_map.value(data, canonical)
            if url and url.startswith(URL_PREFIXES):
                urls.append(url[:IMAGE_URL_MAX_LENGTH])
        return urls

    def _specs(self, data: Mapping[str, str]) -> str | dict[str, Any] | None:
        specs = self.header_map.value(data, "specs")
        size = self.header_map.value(data, "size")
        if self.specs_mode is SpecsMode.JSON:
            if specs:
                return parse_specs_json(specs)
            return {"규격": size[:SIZE_MAX_LENGTH]} if size else {}
        if specs:
            return specs[:SPECS_MAX_LENGTH]
        if size:
            return size[:SIZE_MAX_LENGTH]
        return None

    def build(self, claim: RowClaim, uploaded_urls: Sequence[str] = ()) -> ProductImportRecord:
        data = claim.data
        value = self.header_map.value
        images = [*uploaded_urls, *self.url_images(data)][:MAX_IMAGES]
        return ProductImportRecord(
            slug=claim.slug,
            title=claim.title,
            description=_cap(value(data, "description"), DESCRIPTION_MAX_LENGTH),
            image_url=images[0] if images else None,
            images=images,
            badges=_split(value(data, "badges"), ",", MAX_BADGES, BADGE_MAX_LENGTH),
            features=_split(value(data, "features"), "|", MAX_FEATURES, FEATURE_MAX_LENGTH),
            specs=self._specs(data),
            main_category=_cap(value(data, "main_category"), CATEGORY_MAX_LENGTH),
            subcategory=_cap(value(data, "subcategory"), CATEGORY_MAX_LENGTH),
            display_order=_display_order(value(data, "display_order"), claim.row_index),
            procurement_id=_cap(value(data, "procurement_id"), PROCUREMENT_ID_MAX_LENGTH),
            price=_cap(value(data, "price"), PRICE_MAX_LENGTH),
            is_active=True,
        )

    def map_row(
        self,
        row_index: int,
        data: Mapping[str, str],
        existing_slugs: Collection[str],
        batch_slugs: set[str],
        uploaded_urls: Sequence[str] = (),
    ) -> MappingResult:
        claim = self.claim(row_index, data, existing_slugs, batch_slugs)
        if isinstance(claim, str):
            return MappingResult(errors=[claim])
        return MappingResult(record=self.build(claim, uploaded_urls))
