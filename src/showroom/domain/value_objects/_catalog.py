"""Import value objects: spreadsheet rows, embedded images and product records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

# Field length caps for product records
SLUG_MAX_LENGTH = 100
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000
IMAGE_URL_MAX_LENGTH = 500
BADGE_MAX_LENGTH = 50
MAX_BADGES = 10
FEATURE_MAX_LENGTH = 500
MAX_FEATURES = 20
SPECS_MAX_LENGTH = 1000
SIZE_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 100
PROCUREMENT_ID_MAX_LENGTH = 50
PRICE_MAX_LENGTH = 50
DISPLAY_ORDER_MAX = 10000
MAX_IMAGES = 3


class ImportPhase(str, Enum):
    """Phase reported by bulk import progress callbacks."""

    PARSING = "parsing"
    UPLOADING_IMAGES = "uploading-images"
    INSERTING = "inserting"
    DONE = "done"


@dataclass(frozen=True)
class ExcelImageData:
    """An image embedded in a worksheet.

    Attributes:
        data: Raw image bytes.
        extension: Lowercase file extension without the dot.
        anchor_row: 1-based row the image is anchored to.
        anchor_col: 1-based column the image is anchored to.
    """

    data: bytes
    extension: str
    anchor_row: int
    anchor_col: int

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def content_type(self) -> str:
        return f"image/{self.extension}"

    def moved_to_row(self, row: int) -> "ExcelImageData":
        return ExcelImageData(self.data, self.extension, row, self.anchor_col)


@dataclass
class ExcelRowData:
    """One parsed spreadsheet row with its header-keyed values and images."""

    row_index: int
    data: dict[str, str]
    images: list[ExcelImageData] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.row_index < 2:
            raise ValueError("Data rows start at row 2 (row 1 holds headers)")

    @property
    def has_data(self) -> bool:
        return any(value for value in self.data.values())


@dataclass
class ParsedSpreadsheet:
    """Result of reading a workbook."""

    rows: list[ExcelRowData] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ProductImportRecord:
    """Normalized product row ready for insertion into the product table.

    ``specs`` is free text on the spreadsheet path and a JSON object on the
    CSV path.
    """

    slug: str
    title: str
    description: str | None = None
    image_url: str | None = None
    images: list[str] = field(default_factory=list)
    badges: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    specs: str | dict[str, Any] | None = None
    main_category: str | None = None
    subcategory: str | None = None
    display_order: int = 0
    procurement_id: str | None = None
    price: str | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.slug:
            raise ValueError("Product slug must not be empty")
        if not self.title:
            raise ValueError("Product title must not be empty")
        if len(self.slug) > SLUG_MAX_LENGTH:
            raise ValueError(f"Product slug exceeds {SLUG_MAX_LENGTH} characters")
        if len(self.title) > TITLE_MAX_LENGTH:
            raise ValueError(f"Product title exceeds {TITLE_MAX_LENGTH} characters")
        if len(self.images) > MAX_IMAGES:
            raise ValueError(f"At most {MAX_IMAGES} images per product")
        if not 0 <= self.display_order <= DISPLAY_ORDER_MAX:
            raise ValueError(f"display_order must be within 0..{DISPLAY_ORDER_MAX}")

    def with_slug(self, slug: str) -> "ProductImportRecord":
        values = self.to_row()
        values["slug"] = slug
        return ProductImportRecord(**values)

    def to_row(self) -> dict[str, Any]:
        """Row payload for the data store."""
        return asdict(self)
