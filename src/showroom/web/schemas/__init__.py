"""Pydantic schemas for the REST API."""

from showroom.web.schemas.requests import ConsultationRequestSchema, LayoutRequest
from showroom.web.schemas.responses import (
    ConsultationResponseSchema,
    ErrorResponseSchema,
    FurnitureSchema,
    ImportResultSchema,
    PendingFileSchema,
    QuoteLineSchema,
    QuoteSchema,
)

__all__ = [
    # Requests
    "ConsultationRequestSchema",
    "LayoutRequest",
    # Responses
    "ConsultationResponseSchema",
    "ErrorResponseSchema",
    "FurnitureSchema",
    "ImportResultSchema",
    "PendingFileSchema",
    "QuoteLineSchema",
    "QuoteSchema",
]
