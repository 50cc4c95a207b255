"""Domain services for the space planner and the bulk import pipeline."""

from .anchor_remapper import AnchorRemapper, RemapResult
from .catalog_mapper import (
    category_color,
    parse_dimensions,
    parse_price,
    product_to_furniture,
    products_to_furniture,
)
from .placement_store import PlacementStore
from .projection import Box, IsometricProjection, point_in_polygon
from .quote_composer import ConsultationRequest, QuoteComposer, format_price
from .row_mapper import (
    FIELD_ALIASES,
    HeaderMap,
    MappingResult,
    RowClaim,
    RowToProductMapper,
    SpecsMode,
    parse_specs_json,
)
from .slug_allocator import (
    DEFAULT_MAX_ATTEMPTS,
    LEGACY_MAX_ATTEMPTS,
    SlugAllocator,
    create_slug_from_title,
    generate_random_suffix,
    generate_unique_slug,
    strip_random_suffix,
)
from .snap_solver import SNAP_THRESHOLD_PX, SnapResult, effective_size, item_rect, snap

__all__ = [
    "AnchorRemapper",
    "Box",
    "ConsultationRequest",
    "DEFAULT_MAX_ATTEMPTS",
    "FIELD_ALIASES",
    "HeaderMap",
    "IsometricProjection",
    "LEGACY_MAX_ATTEMPTS",
    "MappingResult",
    "PlacementStore",
    "QuoteComposer",
    "RemapResult",
    "RowClaim",
    "RowToProductMapper",
    "SNAP_THRESHOLD_PX",
    "SlugAllocator",
    "SnapResult",
    "SpecsMode",
    "category_color",
    "create_slug_from_title",
    "effective_size",
    "format_price",
    "generate_random_suffix",
    "generate_unique_slug",
    "item_rect",
    "parse_dimensions",
    "parse_price",
    "parse_specs_json",
    "point_in_polygon",
    "product_to_furniture",
    "products_to_furniture",
    "snap",
    "strip_random_suffix",
]
