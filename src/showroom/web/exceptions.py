"""Exception handlers for the REST API."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from showroom.application.config import ConfigError
from showroom.contracts.errors import (
    ImportAbortedError,
    InvalidInquiryError,
    SpreadsheetParseError,
    StoreError,
    UnsupportedFileError,
    user_message,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(SpreadsheetParseError)
    async def parse_error_handler(
        request: Request, exc: SpreadsheetParseError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "parse_error",
                "details": None,
            },
        )

    @app.exception_handler(UnsupportedFileError)
    async def unsupported_file_handler(
        request: Request, exc: UnsupportedFileError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unsupported_file",
                "details": {"filename": exc.filename},
            },
        )

    @app.exception_handler(ImportAbortedError)
    async def import_aborted_handler(
        request: Request, exc: ImportAbortedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "error": str(exc),
                "error_type": "import_aborted",
                "details": [{"message": e} for e in exc.errors],
            },
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(f"Store error on {request.url.path}: code={exc.code} {exc.message}")
        return JSONResponse(
            status_code=502,
            content={
                "error": user_message(exc),
                "error_type": "store",
                "details": {"code": exc.code},
            },
        )

    @app.exception_handler(InvalidInquiryError)
    async def invalid_inquiry_handler(
        request: Request, exc: InvalidInquiryError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Inquiry is incomplete",
                "error_type": "invalid_inquiry",
                "details": [{"message": p} for p in exc.problems],
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details,
            },
        )
