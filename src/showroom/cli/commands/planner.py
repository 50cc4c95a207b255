"""Planner commands for saved layout files.

This module provides the `planner` command group: placing furniture into a
layout, printing its quote, rendering it as SVG and composing a consultation
inquiry.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from showroom.application import ServiceFactory
from showroom.application.services import layout_from_store, store_from_layout
from showroom.cli.settings import read_layout, resolve_settings
from showroom.contracts.errors import InvalidInquiryError
from showroom.domain.value_objects import FurnitureItem

planner_app = typer.Typer(
    name="planner",
    help="Quote, render and send inquiries for planner layouts.",
)

VIEWS = ("top", "iso")


@planner_app.command(name="quote")
def quote(
    layout_file: Annotated[Path, typer.Argument(help="Path to a JSON layout file")],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output", "-o", help="Write the quote sheet to this file or directory"
        ),
    ] = None,
    settings_file: Annotated[
        Path | None,
        typer.Option("--settings", "-s", help="Path to a JSON settings file"),
    ] = None,
) -> None:
    """Print the furniture list and total price of a layout.

    Example:
        showroom planner quote living-room.json
    """
    settings = resolve_settings(settings_file)
    store = store_from_layout(read_layout(layout_file), settings.planner.snap_threshold_px)
    composer = ServiceFactory(settings).get_quote_composer()

    if output is not None:
        if output.is_dir():
            output = output / composer.quote_filename()
        output.write_text(composer.quote_text(store.placed), encoding="utf-8")
        typer.echo(f"Quote written to {output}")
        return

    if not store.placed:
        typer.echo("No furniture placed.")
        return
    typer.echo(composer.generate_furniture_list(store.placed))
    typer.echo(f"Total: {composer.total_price(store.placed):,}")


@planner_app.command(name="place")
def place(
    layout_file: Annotated[Path, typer.Argument(help="Path to a JSON layout file")],
    name: Annotated[str, typer.Option("--name", help="Furniture name")],
    width: Annotated[float, typer.Option("--width", min=1, help="Width in mm")],
    depth: Annotated[float, typer.Option("--depth", min=1, help="Depth in mm")],
    x: Annotated[float, typer.Option("--x", help="Canvas x position in pixels")] = 0.0,
    y: Annotated[float, typer.Option("--y", help="Canvas y position in pixels")] = 0.0,
    price: Annotated[int, typer.Option("--price", min=0, help="Price")] = 0,
    category: Annotated[str, typer.Option("--category", help="Category tag")] = "",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the layout here instead of in place"),
    ] = None,
    settings_file: Annotated[
        Path | None,
        typer.Option("--settings", "-s", help="Path to a JSON settings file"),
    ] = None,
) -> None:
    """Add a piece of furniture to a layout, snapping it to walls and neighbors.

    Example:
        showroom planner place room.json --name 책상 --width 1200 --depth 600 --x 130 --y 5
    """
    settings = resolve_settings(settings_file)
    store = store_from_layout(read_layout(layout_file), settings.planner.snap_threshold_px)
    template = FurnitureItem(
        id=f"cli-{len(store.placed) + 1}",
        name=name,
        category=category,
        width=width,
        depth=depth,
        price=price,
    )

    placed = store.add_furniture(template, 0, 0)
    canvas_width, canvas_height = store.canvas_size()
    store.update_furniture_position(placed.id, x, y, canvas_width, canvas_height)
    moved = store.get(placed.id)

    target = output or layout_file
    target.write_text(layout_from_store(store).model_dump_json(indent=2), encoding="utf-8")
    typer.echo(f"Placed {name} at ({moved.x:g}, {moved.y:g}) in {target}")


@planner_app.command(name="render")
def render(
    layout_file: Annotated[Path, typer.Argument(help="Path to a JSON layout file")],
    view: Annotated[
        str,
        typer.Option("--view", help="View to render: top (2D plan) or iso (3D)"),
    ] = "top",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the SVG to this file"),
    ] = None,
) -> None:
    """Render a layout as SVG.

    Examples:
        showroom planner render living-room.json
        showroom planner render living-room.json --view iso -o room.svg
    """
    if view not in VIEWS:
        typer.echo(f"Unknown view: {view}. Available: {', '.join(VIEWS)}", err=True)
        raise typer.Exit(code=1)

    factory = ServiceFactory()
    store = store_from_layout(read_layout(layout_file))
    if view == "top":
        svg = factory.get_top_down_renderer().render(store)
    else:
        svg = factory.get_isometric_renderer().render(store)

    if output is None:
        typer.echo(svg)
    else:
        output.write_text(svg, encoding="utf-8")
        typer.echo(f"SVG written to {output}")


@planner_app.command(name="inquiry")
def inquiry(
    layout_file: Annotated[Path, typer.Argument(help="Path to a JSON layout file")],
    name: Annotated[str, typer.Option("--name", help="Contact name")],
    phone: Annotated[str, typer.Option("--phone", help="Contact phone number")],
    email: Annotated[str, typer.Option("--email", help="Contact email")],
    message: Annotated[str, typer.Option("--message", "-m", help="Additional message")] = "",
) -> None:
    """Compose a consultation inquiry for a layout and print it.

    Example:
        showroom planner inquiry room.json --name 홍길동 --phone 010-1234-5678 --email a@b.kr
    """
    factory = ServiceFactory()
    store = store_from_layout(read_layout(layout_file))
    command = factory.create_consultation_command()

    try:
        request = asyncio.run(command.execute(store, name, phone, email, message))
    except InvalidInquiryError as e:
        for problem in e.problems:
            typer.echo(f"Error: {problem}", err=True)
        raise typer.Exit(code=1)

    typer.echo(request.title)
    typer.echo()
    typer.echo(request.content)
