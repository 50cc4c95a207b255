"""Chunked insertion of product records with slug conflict recovery.

Records are inserted in fixed-size chunks. When a chunk fails on the
product slug unique constraint, the committer falls back to inserting that
chunk row by row, regenerating a row's slug after each conflict. Each row
gets a bounded number of attempts; any other store error aborts the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from showroom.contracts.errors import StoreError
from showroom.contracts.protocols import DataStoreProtocol, ProgressCallback
from showroom.domain.services import SlugAllocator, strip_random_suffix
from showroom.domain.value_objects import ImportPhase, ProductImportRecord

from ..dtos import CommitResult

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 50
DEFAULT_MAX_INSERT_ATTEMPTS = 8
INSERTING_LABEL = "데이터베이스 저장 중..."


class AttemptState(str, Enum):
    PENDING = "pending"
    INSERTED = "inserted"
    FAILED = "failed"


@dataclass
class RowInsertAttempt:
    """Retry state for inserting a single record.

    Every slug conflict consumes one attempt; the attempt fails for good
    once ``max_attempts`` conflicts have been seen.
    """

    record: ProductImportRecord
    max_attempts: int = DEFAULT_MAX_INSERT_ATTEMPTS
    attempts: int = 0
    state: AttemptState = AttemptState.PENDING

    @property
    def original_title(self) -> str:
        return self.record.title or self.record.slug

    def succeed(self) -> None:
        self.state = AttemptState.INSERTED

    def conflict(self, next_slug: str) -> None:
        self.attempts += 1
        if self.attempts >= self.max_attempts:
            self.state = AttemptState.FAILED
        else:
            self.record = self.record.with_slug(next_slug)


async def fetch_column_values(
    store: DataStoreProtocol, table: str, column: str, page_size: int = 1000
) -> list[str]:
    """Read one column of every stored row, one page at a time."""
    values: list[str] = []
    offset = 0
    while True:
        page = await store.select(
            table, columns=column, order="id", offset=offset, limit=page_size
        )
        values.extend(row[column] for row in page if row.get(column))
        if len(page) < page_size:
            break
        offset += page_size
    logger.debug(f"Loaded {len(values)} {column} values from {table}")
    return values


async def fetch_all_existing_slugs(
    store: DataStoreProtocol, table: str = "products", page_size: int = 1000
) -> set[str]:
    return set(await fetch_column_values(store, table, "slug", page_size))


@dataclass
class BatchCommitter:
    """Writes product records to the data store.

    Attributes:
        store: Destination data store.
        table: Product table name.
        chunk_size: Records per bulk insert.
        max_insert_attempts: Attempts per row in the row-by-row fallback.
        slug_allocator: Generates replacement slugs after conflicts.
        progress: Optional progress callback.
    """

    store: DataStoreProtocol
    table: str = "products"
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_insert_attempts: int = DEFAULT_MAX_INSERT_ATTEMPTS
    slug_allocator: SlugAllocator = field(default_factory=SlugAllocator)
    progress: ProgressCallback | None = None

    async def commit(
        self, records: Sequence[ProductImportRecord], existing_slugs: set[str]
    ) -> CommitResult:
        """Insert all records.

        Args:
            records: Records in insertion order.
            existing_slugs: Slugs known to be stored; grows as rows land.

        Returns:
            Inserted count, final slugs and per-row failures.

        Raises:
            StoreError: For any failure other than a slug conflict.
        """
        result = CommitResult()
        regenerated: set[str] = set()
        total = len(records)
        self._report(0, total)

        for start in range(0, total, self.chunk_size):
            chunk = records[start : start + self.chunk_size]
            await self._commit_chunk(chunk, existing_slugs, regenerated, result)
            self._report(min(start + self.chunk_size, total), total)

        logger.info(f"Inserted {result.inserted} of {total} products")
        return result

    async def _commit_chunk(
        self,
        chunk: Sequence[ProductImportRecord],
        existing_slugs: set[str],
        regenerated: set[str],
        result: CommitResult,
    ) -> None:
        try:
            await self.store.insert(self.table, [record.to_row() for record in chunk])
        except StoreError as e:
            if not e.is_slug_conflict:
                raise
            logger.warning(f"Slug conflict in chunk of {len(chunk)}; inserting row by row")
        else:
            for record in chunk:
                existing_slugs.add(record.slug)
                result.slugs.append(record.slug)
            result.inserted += len(chunk)
            return

        for record in chunk:
            attempt = RowInsertAttempt(record, max_attempts=self.max_insert_attempts)
            await self._insert_row(attempt, existing_slugs, regenerated)
            if attempt.state is AttemptState.INSERTED:
                result.inserted += 1
                result.slugs.append(attempt.record.slug)
            else:
                result.errors.append(f"슬러그 중복으로 업로드 실패: {attempt.original_title}")

    async def _insert_row(
        self, attempt: RowInsertAttempt, existing_slugs: set[str], regenerated: set[str]
    ) -> None:
        while attempt.state is AttemptState.PENDING:
            try:
                await self.store.insert(self.table, [attempt.record.to_row()])
            except StoreError as e:
                if not e.is_slug_conflict:
                    raise
                slug = attempt.record.slug
                # The store just told us this slug is taken
                existing_slugs.add(slug)
                base = strip_random_suffix(slug) or slug
                next_slug = self.slug_allocator.allocate(base, existing_slugs, regenerated)
                logger.debug(f"Slug {slug!r} taken; retrying as {next_slug!r}")
                attempt.conflict(next_slug)
            else:
                attempt.succeed()
                existing_slugs.add(attempt.record.slug)
                regenerated.add(attempt.record.slug)

    def _report(self, current: int, total: int) -> None:
        if self.progress is not None:
            self.progress(current, total, INSERTING_LABEL, ImportPhase.INSERTING.value)
