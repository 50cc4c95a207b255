"""Typer CLI for bulk product import and planner layouts."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from showroom.application import ImportProgress, ImportResult, ServiceFactory
from showroom.cli.commands import planner_app
from showroom.cli.settings import configure_logging, resolve_settings
from showroom.contracts.errors import (
    ImportAbortedError,
    ShowroomError,
    SpreadsheetParseError,
    UnsupportedFileError,
)
from showroom.domain.value_objects import ImportPhase
from showroom.infrastructure.product_exporter import EXPORT_FILENAME
from showroom.infrastructure.product_exporter import TEMPLATE_FILENAME as CSV_TEMPLATE_FILENAME
from showroom.infrastructure.template_generator import TEMPLATE_FILENAME as XLSX_TEMPLATE_FILENAME

app = typer.Typer(
    name="showroom",
    help="Import furniture products from spreadsheets and quote planner layouts.",
)

app.add_typer(planner_app, name="planner")

SettingsOption = Annotated[
    Path | None,
    typer.Option("--settings", "-s", help="Path to a JSON settings file"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log debug output to stderr"),
]


def _read_upload(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        typer.echo(f"Error: cannot read {path}: {e}", err=True)
        raise typer.Exit(code=1)


def _print_result(result: ImportResult) -> None:
    typer.echo(result.summary)
    for warning in result.warnings:
        typer.echo(f"  warning: {warning}")
    for error in result.errors:
        typer.echo(f"  error: {error}")


def _print_progress(current: int, total: int, label: str, phase: str) -> None:
    update = ImportProgress(current, total, label, ImportPhase(phase))
    if update.total:
        typer.echo(
            f"[{phase}] {update.current}/{update.total} {update.label} ({update.percent}%)",
            err=True,
        )
    else:
        typer.echo(f"[{phase}] {update.label}", err=True)


@app.command(name="import")
def import_products(
    file: Annotated[Path, typer.Argument(help="Spreadsheet (.xlsx) or CSV file to import")],
    settings_file: SettingsOption = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Import into in-memory stores and list the result"),
    ] = False,
    skip_duplicates: Annotated[
        bool,
        typer.Option(
            "--skip-duplicates",
            help="Leave out rows whose title already exists in the catalog",
        ),
    ] = False,
    progress: Annotated[
        bool,
        typer.Option("--progress", help="Print progress updates to stderr"),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Import products from a spreadsheet or CSV file.

    Embedded spreadsheet images are uploaded to the blob store and the
    products are written in batches. Slugs are made unique against the
    catalog and within the file.

    Examples:
        showroom import products.xlsx --settings showroom.json
        showroom import products.csv --dry-run
    """
    configure_logging(verbose)
    settings = resolve_settings(settings_file, dry_run=dry_run)
    factory = ServiceFactory(settings)
    content = _read_upload(file)

    async def run() -> ImportResult:
        skip_titles = None
        if skip_duplicates:
            info = await factory.create_pre_parse_command().run(content, file.name)
            skip_titles = info.duplicate_titles
        command = factory.create_bulk_import_command(
            progress=_print_progress if progress else None
        )
        return await command.import_file(content, file.name, skip_titles=skip_titles)

    try:
        result = asyncio.run(run())
    except ImportAbortedError as e:
        typer.echo(f"Import aborted: {e}", err=True)
        for error in e.errors:
            typer.echo(f"  error: {error}", err=True)
        raise typer.Exit(code=1)
    except ShowroomError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    _print_result(result)

    if dry_run:
        typer.echo("\nProducts (dry run):")
        rows = asyncio.run(
            factory.get_data_store().select(settings.storage.table, columns="slug,title")
        )
        for row in rows:
            typer.echo(f"  {row['slug']}  {row['title']}")


@app.command()
def preparse(
    file: Annotated[Path, typer.Argument(help="Spreadsheet (.xlsx) or CSV file to inspect")],
    settings_file: SettingsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show what a file would import without importing it.

    Example:
        showroom preparse products.xlsx
    """
    configure_logging(verbose)
    factory = ServiceFactory(resolve_settings(settings_file))
    content = _read_upload(file)

    try:
        info = asyncio.run(factory.create_pre_parse_command().run(content, file.name))
    except (SpreadsheetParseError, UnsupportedFileError, ImportAbortedError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"File: {info.filename} ({info.kind.value})")
    typer.echo(f"Products: {info.row_count}")
    typer.echo(f"Images: {info.image_count}")
    if info.unsupported_headers:
        typer.echo(f"Ignored columns: {', '.join(info.unsupported_headers)}")
    if info.has_duplicates:
        typer.echo(f"Already in catalog ({len(info.duplicate_titles)}):")
        for title in info.duplicate_titles:
            typer.echo(f"  - {title}")
    for warning in info.warnings:
        typer.echo(f"  warning: {warning}")


@app.command()
def template(
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Where to write the template"),
    ] = None,
    file_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Template format: xlsx or csv"),
    ] = "xlsx",
) -> None:
    """Write an upload template with sample rows.

    Example:
        showroom template --format csv -o upload.csv
    """
    factory = ServiceFactory()
    file_format = file_format.lower()
    if file_format == "xlsx":
        content = factory.get_template_generator().generate()
        default_name = XLSX_TEMPLATE_FILENAME
    elif file_format == "csv":
        content = factory.get_product_exporter().template()
        default_name = CSV_TEMPLATE_FILENAME
    else:
        typer.echo(f"Unknown format: {file_format}. Available: xlsx, csv", err=True)
        raise typer.Exit(code=1)

    path = output or Path(default_name)
    path.write_bytes(content)
    typer.echo(f"Template written to {path}")


@app.command()
def export(
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Where to write the CSV file"),
    ] = None,
    settings_file: SettingsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Export catalog products as CSV in the upload format.

    Example:
        showroom export -o products.csv --settings showroom.json
    """
    configure_logging(verbose)
    settings = resolve_settings(settings_file)
    factory = ServiceFactory(settings)

    try:
        products = asyncio.run(
            factory.get_data_store().select(settings.storage.table, order="display_order")
        )
    except ShowroomError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    path = output or Path(EXPORT_FILENAME)
    path.write_bytes(factory.get_product_exporter().export(products))
    typer.echo(f"Exported {len(products)} products to {path}")


if __name__ == "__main__":
    app()
