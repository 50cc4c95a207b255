"""Protocols for the external collaborators of the showroom core.

The import pipeline and the planner talk to storage only through these
contracts, so the REST clients in the infrastructure layer can be replaced
by the in-memory stores in tests and dry runs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from showroom.domain.services.quote_composer import ConsultationRequest


@runtime_checkable
class DataStoreProtocol(Protocol):
    """Relational data store addressed by table name.

    Implementations must insert a batch atomically and raise
    ``StoreError`` with a distinguishable code for unique-constraint
    violations; the batch committer's retry logic depends on it.

    Example:
        ```python
        rows = await store.select(
            "products", columns="slug", order="id", offset=0, limit=1000
        )
        await store.insert("products", [record.to_row()])
        ```
    """

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Read rows matching equality filters, ordered and paged.

        Args:
            table: Table name.
            columns: Comma-separated column list.
            filters: Column -> value equality filters.
            order: Column to order by.
            offset: Number of rows to skip.
            limit: Maximum number of rows to return.

        Returns:
            List of row dictionaries.
        """
        ...

    async def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> None:
        """Insert rows; all or nothing.

        Raises:
            StoreError: If the insert fails.
        """
        ...


@runtime_checkable
class BlobStoreProtocol(Protocol):
    """Object storage for uploaded images."""

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Store bytes under a path.

        Raises:
            BlobUploadError: If the upload fails.
        """
        ...

    def public_url(self, path: str) -> str:
        """Public URL of a stored object."""
        ...


class InquirySubmitterProtocol(Protocol):
    """Receives consultation requests composed from a planner layout."""

    async def submit(self, request: "ConsultationRequest") -> None:
        ...


class ProgressCallback(Protocol):
    """Receives bulk import progress updates."""

    def __call__(self, current: int, total: int, label: str, phase: str) -> None:
        ...
