"""Space planner endpoints: quote, render, consultation and catalog."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from showroom.application.config import load_layout_from_dict
from showroom.application.services import store_from_layout
from showroom.domain.services import PlacementStore, format_price
from showroom.web.dependencies import (
    CatalogQueryDep,
    ConsultationCommandDep,
    ServiceFactoryDep,
)
from showroom.web.schemas.requests import ConsultationRequestSchema, LayoutRequest
from showroom.web.schemas.responses import (
    ConsultationResponseSchema,
    FurnitureSchema,
    QuoteLineSchema,
    QuoteSchema,
)

router = APIRouter(prefix="/planner", tags=["planner"])

SVG_MEDIA_TYPE = "image/svg+xml"


def _store(factory: ServiceFactoryDep, layout: dict) -> PlacementStore:
    """Build a session from a layout payload (ConfigError -> 422)."""
    return store_from_layout(
        load_layout_from_dict(layout), factory.settings.planner.snap_threshold_px
    )


@router.post("/quote", response_model=QuoteSchema)
async def quote_layout(request: LayoutRequest, factory: ServiceFactoryDep) -> QuoteSchema:
    """Price a layout and return its furniture list and quote sheet."""
    store = _store(factory, request.layout)
    composer = factory.get_quote_composer()
    total = composer.total_price(store.placed)
    items = []
    for item in store.placed:
        width, depth = item.footprint_mm()
        items.append(
            QuoteLineSchema(
                id=item.id,
                name=item.furniture.name,
                width=width,
                depth=depth,
                price=item.furniture.price,
                rotation=int(item.rotation),
            )
        )
    return QuoteSchema(
        items=items,
        lines=composer.furniture_lines(store.placed),
        total=total,
        total_formatted=format_price(total, composer.currency),
        text=composer.quote_text(store.placed),
    )


@router.post("/render")
async def render_layout(
    request: LayoutRequest, factory: ServiceFactoryDep, view: str = "top"
) -> Response:
    """Render a layout as SVG, either the 2D plan (top) or the 3D view (iso)."""
    store = _store(factory, request.layout)
    if view == "top":
        svg = factory.get_top_down_renderer().render(store)
    elif view == "iso":
        svg = factory.get_isometric_renderer().render(store)
    else:
        raise HTTPException(
            status_code=400,
            detail={
                "error": f"Unknown view: {view}. Available: top, iso",
                "error_type": "unsupported_view",
            },
        )
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)


@router.post("/consultation", response_model=ConsultationResponseSchema)
async def request_consultation(
    request: ConsultationRequestSchema,
    factory: ServiceFactoryDep,
    command: ConsultationCommandDep,
) -> ConsultationResponseSchema:
    """Submit a consultation inquiry carrying the layout's furniture list."""
    store = _store(factory, request.layout)
    submitted = await command.execute(
        store, request.name, request.phone, request.email, request.message
    )
    return ConsultationResponseSchema(
        name=submitted.name,
        phone=submitted.phone,
        email=submitted.email,
        title=submitted.title,
        content=submitted.content,
    )


@router.get("/catalog/{main_category}", response_model=list[FurnitureSchema])
async def list_catalog(main_category: str, query: CatalogQueryDep) -> list[FurnitureSchema]:
    """Active products of a category as planner furniture templates."""
    items = await query.run(main_category)
    return [
        FurnitureSchema(
            id=item.id,
            name=item.name,
            category=item.category,
            width=item.width,
            depth=item.depth,
            height=item.height,
            price=item.price,
            thumbnail=item.thumbnail,
            color=item.color,
        )
        for item in items
    ]
