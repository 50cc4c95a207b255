"""Bulk product import endpoints."""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from showroom.application import ImportResult, PendingFileInfo
from showroom.infrastructure.product_exporter import EXPORT_FILENAME
from showroom.infrastructure.product_exporter import TEMPLATE_FILENAME as CSV_TEMPLATE_FILENAME
from showroom.infrastructure.template_generator import TEMPLATE_FILENAME as XLSX_TEMPLATE_FILENAME
from showroom.web.dependencies import (
    BulkImportCommandDep,
    PreParseCommandDep,
    ServiceFactoryDep,
)
from showroom.web.schemas.responses import ImportResultSchema, PendingFileSchema

router = APIRouter(prefix="/products", tags=["products"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}


def _result_to_schema(result: ImportResult) -> ImportResultSchema:
    return ImportResultSchema(
        outcome=result.outcome.value,
        summary=result.summary,
        inserted=result.inserted,
        skipped_duplicates=result.skipped_duplicates,
        errors=result.errors,
        warnings=result.warnings,
    )


def _pending_to_schema(info: PendingFileInfo) -> PendingFileSchema:
    return PendingFileSchema(
        filename=info.filename,
        kind=info.kind.value,
        row_count=info.row_count,
        image_count=info.image_count,
        duplicate_titles=info.duplicate_titles,
        unsupported_headers=info.unsupported_headers,
        warnings=info.warnings,
    )


@router.post("/import", response_model=ImportResultSchema)
async def import_products(
    command: BulkImportCommandDep,
    file: Annotated[UploadFile, File(description="Spreadsheet (.xlsx) or CSV file")],
    skip_titles: Annotated[
        list[str] | None,
        Form(description="Titles to leave out, compared case-insensitively"),
    ] = None,
) -> ImportResultSchema:
    """Import products from an uploaded spreadsheet or CSV file.

    Args:
        command: Injected BulkImportCommand.
        file: The uploaded file.
        skip_titles: Titles to skip, usually the duplicates reported by preparse.

    Returns:
        Import outcome with counts, errors and warnings.

    Raises:
        UnsupportedFileError, SpreadsheetParseError, ImportAbortedError:
            Handled by the registered exception handlers.
    """
    if not file.filename:
        raise HTTPException(
            status_code=400,
            detail={"error": "A file name is required", "error_type": "unsupported_file"},
        )
    content = await file.read()
    result = await command.import_file(content, file.filename, file.content_type, skip_titles)
    return _result_to_schema(result)


@router.post("/preparse", response_model=PendingFileSchema)
async def preparse_products(
    command: PreParseCommandDep,
    file: Annotated[UploadFile, File(description="Spreadsheet (.xlsx) or CSV file")],
) -> PendingFileSchema:
    """Parse an upload without importing it and report duplicate titles."""
    if not file.filename:
        raise HTTPException(
            status_code=400,
            detail={"error": "A file name is required", "error_type": "unsupported_file"},
        )
    content = await file.read()
    info = await command.run(content, file.filename, file.content_type)
    return _pending_to_schema(info)


@router.get("/template")
async def download_template(factory: ServiceFactoryDep, format: str = "xlsx") -> Response:
    """Download an upload template (xlsx with image guide, or csv)."""
    if format == "xlsx":
        return Response(
            content=factory.get_template_generator().generate(),
            media_type=XLSX_MEDIA_TYPE,
            headers=_attachment(XLSX_TEMPLATE_FILENAME),
        )
    if format == "csv":
        return Response(
            content=factory.get_product_exporter().template(),
            media_type=CSV_MEDIA_TYPE,
            headers=_attachment(CSV_TEMPLATE_FILENAME),
        )
    raise HTTPException(
        status_code=400,
        detail={
            "error": f"Unsupported format: {format}. Available: xlsx, csv",
            "error_type": "unsupported_format",
        },
    )


@router.get("/export")
async def export_products(factory: ServiceFactoryDep) -> Response:
    """Export every catalog product as CSV in the upload format."""
    products = await factory.get_data_store().select(
        factory.settings.storage.table, order="display_order"
    )
    return Response(
        content=factory.get_product_exporter().export(products),
        media_type=CSV_MEDIA_TYPE,
        headers=_attachment(EXPORT_FILENAME),
    )
