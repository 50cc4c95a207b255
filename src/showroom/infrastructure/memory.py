"""In-memory stores for dry runs and tests.

InMemoryDataStore enforces the products slug constraint the way the hosted
database does, including the all-or-nothing batch semantics, so the batch
committer's conflict handling can be exercised without a network.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from showroom.contracts.errors import (
    SLUG_CONSTRAINT,
    UNIQUE_VIOLATION,
    BlobUploadError,
    StoreError,
)
from showroom.domain.services.quote_composer import ConsultationRequest

logger = logging.getLogger(__name__)


@dataclass
class InMemoryDataStore:
    """Dict-backed data store with a unique slug column per table.

    Attributes:
        tables: Table name -> list of rows.
        unique_columns: Table name -> column that must be unique.
        inserts: Number of successful insert calls.
    """

    tables: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    unique_columns: dict[str, str] = field(default_factory=lambda: {"products": "slug"})
    inserts: int = 0
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        rows = [
            row
            for row in self.rows(table)
            if all(row.get(k) == v for k, v in (filters or {}).items())
        ]
        if order:
            rows = sorted(rows, key=lambda row: (row.get(order) is None, row.get(order)))
        end = None if limit is None else offset + limit
        rows = rows[offset:end]
        if columns == "*":
            return [dict(row) for row in rows]
        wanted = [c.strip() for c in columns.split(",")]
        return [{c: row.get(c) for c in wanted} for row in rows]

    async def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> None:
        async with self._lock:
            column = self.unique_columns.get(table)
            if column:
                taken = {row.get(column) for row in self.rows(table)}
                for row in rows:
                    value = row.get(column)
                    if value in taken:
                        raise StoreError(
                            f'duplicate key value violates unique constraint "{SLUG_CONSTRAINT}"',
                            code=UNIQUE_VIOLATION,
                            details=f"Key ({column})=({value}) already exists.",
                        )
                    taken.add(value)

            stored = self.rows(table)
            next_id = len(stored) + 1
            for offset, row in enumerate(rows):
                stored.append({"id": next_id + offset, **row})
            self.inserts += 1
            logger.debug(f"Stored {len(rows)} rows in {table}")


@dataclass
class InMemoryBlobStore:
    """Path -> bytes store that refuses to overwrite existing objects."""

    base_url: str = "memory://blobs"
    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        if path in self.objects:
            raise BlobUploadError(f"The resource already exists: {path}", status_code=409)
        self.objects[path] = (data, content_type)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"


@dataclass
class InquiryOutbox:
    """Collects consultation requests instead of sending them."""

    submitted: list[ConsultationRequest] = field(default_factory=list)

    async def submit(self, request: ConsultationRequest) -> None:
        self.submitted.append(request)
