"""Value objects for the showroom domain.

This module provides immutable data types used throughout the planner and
the bulk import pipeline. All classes are re-exported from sub-modules for
convenience.
"""

from __future__ import annotations

# Space planner
from ._planner import (
    FurnitureItem,
    PlacedFurniture,
    Rect,
    RoomDimensions,
    Rotation,
)

# Bulk import
from ._catalog import (
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
    ExcelImageData,
    ExcelRowData,
    ImportPhase,
    ParsedSpreadsheet,
    ProductImportRecord,
)

__all__ = [
    "BADGE_MAX_LENGTH",
    "CATEGORY_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "DISPLAY_ORDER_MAX",
    "ExcelImageData",
    "ExcelRowData",
    "FEATURE_MAX_LENGTH",
    "FurnitureItem",
    "IMAGE_URL_MAX_LENGTH",
    "ImportPhase",
    "MAX_BADGES",
    "MAX_FEATURES",
    "MAX_IMAGES",
    "PRICE_MAX_LENGTH",
    "PROCUREMENT_ID_MAX_LENGTH",
    "ParsedSpreadsheet",
    "PlacedFurniture",
    "ProductImportRecord",
    "Rect",
    "RoomDimensions",
    "Rotation",
    "SIZE_MAX_LENGTH",
    "SLUG_MAX_LENGTH",
    "SPECS_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
]
