"""Pytest configuration and shared fixtures for showroom tests."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence
from io import BytesIO
from typing import Any

import pytest
from openpyxl import Workbook
from openpyxl.drawing.image import Image as SheetImage
from PIL import Image

from showroom.domain.entities import PlannerState
from showroom.domain.services import PlacementStore
from showroom.domain.value_objects import FurnitureItem, RoomDimensions
from showroom.infrastructure.memory import InMemoryBlobStore, InMemoryDataStore


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Planner fixtures
# =============================================================================


@pytest.fixture
def desk() -> FurnitureItem:
    """A 1200x600 mm desk template."""
    return FurnitureItem(
        id="desk",
        name="책상",
        category="office",
        width=1200,
        depth=600,
        price=300000,
        height=730,
    )


@pytest.fixture
def chair() -> FurnitureItem:
    """A 450x450 mm chair template."""
    return FurnitureItem(
        id="chair",
        name="의자",
        category="chairs",
        width=450,
        depth=450,
        price=80000,
        height=800,
    )


@pytest.fixture
def store() -> PlacementStore:
    """Empty 5000x4000 mm session at 0.1 px/mm with predictable ids."""
    counter = itertools.count(1)
    return PlacementStore(
        state=PlannerState(room=RoomDimensions(5000, 4000), scale=0.1),
        id_factory=lambda: f"placed-{next(counter)}",
    )


# =============================================================================
# Import fixtures
# =============================================================================


@pytest.fixture
def data_store() -> InMemoryDataStore:
    return InMemoryDataStore()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    """Build a small PNG image."""

    def build(color: str = "red", size: tuple[int, int] = (8, 8)) -> bytes:
        buffer = BytesIO()
        Image.new("RGB", size, color).save(buffer, format="PNG")
        return buffer.getvalue()

    return build


@pytest.fixture
def make_workbook() -> Callable[..., bytes]:
    """Build .xlsx bytes from rows and (cell, image bytes) pairs.

    The first row is the header row. Images are anchored at the given cell
    reference, e.g. ("G2", png).
    """

    def build(
        rows: Sequence[Sequence[Any]],
        images: Sequence[tuple[str, bytes]] = (),
    ) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(list(row))
        for cell, data in images:
            sheet.add_image(SheetImage(BytesIO(data)), cell)
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return build
