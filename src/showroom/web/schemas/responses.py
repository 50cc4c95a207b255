"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Error body produced by the exception handlers."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional error details")


class ImportResultSchema(BaseModel):
    """Outcome of a bulk import."""

    outcome: str = Field(..., description="success, partial or failure")
    summary: str = Field(..., description="Short summary line")
    inserted: int = Field(..., description="Number of products written")
    skipped_duplicates: int = Field(default=0, description="Rows skipped as duplicates")
    errors: list[str] = Field(default_factory=list, description="Per-row errors")
    warnings: list[str] = Field(default_factory=list, description="Parse and upload warnings")


class PendingFileSchema(BaseModel):
    """What a file would import."""

    filename: str
    kind: str = Field(..., description="excel or csv")
    row_count: int
    image_count: int
    duplicate_titles: list[str] = Field(default_factory=list)
    unsupported_headers: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class QuoteLineSchema(BaseModel):
    """One placed item in a quote."""

    id: str
    name: str
    width: float = Field(..., description="Width in mm")
    depth: float = Field(..., description="Depth in mm")
    price: int
    rotation: int


class QuoteSchema(BaseModel):
    """Quote for a layout."""

    items: list[QuoteLineSchema] = Field(default_factory=list)
    lines: list[str] = Field(default_factory=list, description="Formatted furniture list")
    total: int = Field(..., description="Sum of item prices")
    total_formatted: str
    text: str = Field(..., description="Plain-text quote sheet")


class ConsultationResponseSchema(BaseModel):
    """The inquiry that was submitted."""

    name: str
    phone: str
    email: str
    title: str
    content: str


class FurnitureSchema(BaseModel):
    """Planner furniture template built from a catalog product."""

    id: str
    name: str
    category: str
    width: float
    depth: float
    height: float
    price: int
    thumbnail: str = ""
    color: str | None = None
