"""FastAPI REST API for the showroom tools.

This module provides a REST API for bulk product import, upload templates,
catalog export and space planner quotes.

Usage:
    uvicorn showroom.web:app --reload
"""

from showroom.web.app import app, create_app

__all__ = ["app", "create_app"]
