"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class LayoutRequest(BaseModel):
    """Request carrying a planner layout."""

    layout: dict[str, Any] = Field(..., description="Planner layout JSON (room, scale, items)")


class ConsultationRequestSchema(BaseModel):
    """Request for a consultation inquiry about a layout."""

    layout: dict[str, Any] = Field(..., description="Planner layout JSON")
    name: str = Field(default="", description="Contact name")
    phone: str = Field(default="", description="Contact phone number")
    email: str = Field(default="", description="Contact email")
    message: str = Field(default="", description="Additional message")
