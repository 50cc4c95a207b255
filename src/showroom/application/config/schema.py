"""Pydantic models for showroom settings and planner layout files.

Settings files tune the planner and the import pipeline and hold the store
connection. Layout files describe a planner session (room, scale, placed
items) so it can be quoted or rendered outside the browser.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

MIB = 1024 * 1024


class RoomConfig(BaseModel):
    """Room size in millimeters."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=5000.0, gt=0)
    height: float = Field(default=4000.0, gt=0)


class PlannerSettings(BaseModel):
    """Space planner tuning.

    Attributes:
        snap_threshold_px: Snap distance in canvas pixels; independent of scale.
        default_room: Room used for new sessions.
        default_scale: Canvas pixels per millimeter.
        currency_symbol: Prefix for formatted prices.
    """

    model_config = ConfigDict(extra="forbid")

    snap_threshold_px: float = Field(default=20.0, ge=0)
    default_room: RoomConfig = Field(default_factory=RoomConfig)
    default_scale: float = Field(default=0.1, gt=0)
    currency_symbol: str = "₩"


class ImportSettings(BaseModel):
    """Bulk import limits and batch sizes."""

    model_config = ConfigDict(extra="forbid")

    excel_chunk_size: int = Field(default=50, ge=1)
    csv_chunk_size: int = Field(default=200, ge=1)
    max_slug_attempts: int = Field(default=20, ge=1)
    legacy_max_slug_attempts: int = Field(default=10, ge=1)
    max_insert_attempts: int = Field(default=8, ge=1)
    max_images_per_row: int = Field(default=3, ge=1, le=3)
    max_image_bytes: int = Field(default=5 * MIB, gt=0)
    remap_distance: int = Field(default=2, ge=0)
    max_csv_bytes: int = Field(default=5 * MIB, gt=0)
    max_csv_rows: int = Field(default=1000, ge=1)
    slug_page_size: int = Field(default=1000, ge=1)


class StorageSettings(BaseModel):
    """Hosted data and blob store connection.

    An empty ``base_url`` selects the in-memory stores.
    """

    model_config = ConfigDict(extra="forbid")

    base_url: str = ""
    api_key: str = ""
    bucket: str = "product-images"
    folder: str = "products"
    table: str = "products"
    upload_retries: int = Field(default=2, ge=0)
    retry_backoff_seconds: float = Field(default=0.4, ge=0)
    upload_timeout_seconds: float = Field(default=45.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def is_remote(self) -> bool:
        return bool(self.base_url)


class ShowroomSettings(BaseModel):
    """Root settings model."""

    model_config = ConfigDict(extra="forbid")

    version: str = "1.0"
    planner: PlannerSettings = Field(default_factory=PlannerSettings)
    importing: ImportSettings = Field(default_factory=ImportSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: str) -> str:
        if value not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported settings version {value!r}; "
                f"supported: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
        return value


class LayoutItemConfig(BaseModel):
    """One placed item in a layout file. Positions are canvas pixels."""

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    furniture_id: str | None = None
    name: str = Field(..., min_length=1)
    category: str = ""
    width: float = Field(..., gt=0, description="Width in mm")
    depth: float = Field(..., gt=0, description="Depth in mm")
    height: float = Field(default=400.0, gt=0, description="Height in mm")
    price: int = Field(default=0, ge=0)
    color: str | None = None
    x: float = 0.0
    y: float = 0.0
    rotation: Literal[0, 90, 180, 270] = 0


class PlannerLayoutConfig(BaseModel):
    """A saved planner session."""

    model_config = ConfigDict(extra="forbid")

    room: RoomConfig = Field(default_factory=RoomConfig)
    scale: float = Field(default=0.1, gt=0)
    items: list[LayoutItemConfig] = Field(default_factory=list)
