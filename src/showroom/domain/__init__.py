"""Domain layer - core planner and import logic."""

from .entities import PlannerPhase, PlannerState
from .services import (
    AnchorRemapper,
    HeaderMap,
    PlacementStore,
    QuoteComposer,
    RowToProductMapper,
    SlugAllocator,
    snap,
)
from .value_objects import (
    ExcelImageData,
    ExcelRowData,
    FurnitureItem,
    ImportPhase,
    ParsedSpreadsheet,
    PlacedFurniture,
    ProductImportRecord,
    RoomDimensions,
    Rotation,
)

__all__ = [
    "AnchorRemapper",
    "ExcelImageData",
    "ExcelRowData",
    "FurnitureItem",
    "HeaderMap",
    "ImportPhase",
    "ParsedSpreadsheet",
    "PlacedFurniture",
    "PlacementStore",
    "PlannerPhase",
    "PlannerState",
    "ProductImportRecord",
    "QuoteComposer",
    "RoomDimensions",
    "Rotation",
    "RowToProductMapper",
    "SlugAllocator",
    "snap",
]
