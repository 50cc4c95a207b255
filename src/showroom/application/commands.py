"""Application commands (use cases) for bulk import and the space planner."""

from __future__ import annotations

import logging
import random
from collections.abc import Collection, Sequence

from showroom.contracts.errors import (
    ImportAbortedError,
    InvalidInquiryError,
    StoreError,
    UnsupportedFileError,
    user_message,
)
from showroom.contracts.protocols import (
    BlobStoreProtocol,
    DataStoreProtocol,
    InquirySubmitterProtocol,
    ProgressCallback,
)
from showroom.domain.services import (
    AnchorRemapper,
    ConsultationRequest,
    HeaderMap,
    PlacementStore,
    QuoteComposer,
    RowToProductMapper,
    SlugAllocator,
    SpecsMode,
    products_to_furniture,
)
from showroom.domain.value_objects import (
    ExcelRowData,
    FurnitureItem,
    ImportPhase,
    ParsedSpreadsheet,
    ProductImportRecord,
)
from showroom.infrastructure.csv_reader import CsvReader
from showroom.infrastructure.spreadsheet_reader import (
    SpreadsheetReader,
    is_csv_file,
    is_excel_file,
)

from .config.schema import ImportSettings, StorageSettings
from .dtos import FileKind, ImportResult, PendingFileInfo
from .services.batch_committer import (
    BatchCommitter,
    fetch_all_existing_slugs,
    fetch_column_values,
)
from .services.image_uploader import ImageUploader

logger = logging.getLogger(__name__)

NO_VALID_PRODUCTS = "업로드할 유효한 제품이 없습니다."
PARSING_LABEL = "파싱 중..."
DONE_LABEL = "완료"


def detect_file_kind(filename: str, content_type: str | None = None) -> FileKind:
    """Pick the import path for an upload.

    Raises:
        UnsupportedFileError: If the file is neither a spreadsheet nor CSV.
    """
    if is_excel_file(filename, content_type):
        return FileKind.EXCEL
    if is_csv_file(filename, content_type):
        return FileKind.CSV
    raise UnsupportedFileError(filename)


def _normalized_title(title: str) -> str:
    return title.strip().lower()


def spreadsheet_reader(settings: ImportSettings) -> SpreadsheetReader:
    return SpreadsheetReader(
        max_image_size=settings.max_image_bytes,
        max_images_per_row=settings.max_images_per_row,
        remapper=AnchorRemapper(
            max_distance=settings.remap_distance,
            max_images_per_row=settings.max_images_per_row,
        ),
    )


def csv_reader(settings: ImportSettings) -> CsvReader:
    return CsvReader(max_file_size=settings.max_csv_bytes, max_rows=settings.max_csv_rows)


class BulkImportCommand:
    """Imports products from a spreadsheet (with embedded images) or a CSV file.

    Rows are processed one after another because each row's slug must be
    visible to the next row's allocation; a row's images upload concurrently.

    Example:
        >>> command = BulkImportCommand(data_store, blob_store)
        >>> result = await command.import_excel(workbook_bytes)
        >>> print(result.summary)
    """

    def __init__(
        self,
        data_store: DataStoreProtocol,
        blob_store: BlobStoreProtocol | None = None,
        settings: ImportSettings | None = None,
        storage: StorageSettings | None = None,
        uploader: ImageUploader | None = None,
        progress: ProgressCallback | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.data_store = data_store
        self.blob_store = blob_store
        self.settings = settings or ImportSettings()
        self.storage = storage or StorageSettings()
        self.progress = progress
        self.rng = rng or random.Random()
        if uploader is None and blob_store is not None:
            uploader = ImageUploader(
                blob_store,
                folder=self.storage.folder,
                retries=self.storage.upload_retries,
                backoff_seconds=self.storage.retry_backoff_seconds,
                timeout_seconds=self.storage.upload_timeout_seconds,
                rng=self.rng,
            )
        self.uploader = uploader

    async def import_file(
        self,
        content: bytes,
        filename: str,
        content_type: str | None = None,
        skip_titles: Collection[str] | None = None,
    ) -> ImportResult:
        if detect_file_kind(filename, content_type) is FileKind.EXCEL:
            return await self.import_excel(content, skip_titles)
        return await self.import_csv(content, skip_titles)

    async def import_excel(
        self, content: bytes, skip_titles: Collection[str] | None = None
    ) -> ImportResult:
        """Import a workbook whose rows may carry embedded images.

        Args:
            content: Raw .xlsx bytes.
            skip_titles: Titles to leave out (compared case-insensitively).

        Returns:
            ImportResult with counts, row errors and parse warnings.

        Raises:
            SpreadsheetParseError: If the workbook cannot be parsed.
            ImportAbortedError: If no valid product remains or the store
                fails with anything but a slug conflict.
        """
        self._report(0, 0, PARSING_LABEL, ImportPhase.PARSING)
        parsed = spreadsheet_reader(self.settings).read(content)
        existing = await self._existing_slugs()
        return await self._run(
            parsed,
            existing,
            skip_titles,
            specs_mode=SpecsMode.TEXT,
            max_slug_attempts=self.settings.max_slug_attempts,
            chunk_size=self.settings.excel_chunk_size,
        )

    async def import_csv(
        self, content: bytes, skip_titles: Collection[str] | None = None
    ) -> ImportResult:
        """Import a CSV file; specs are stored as a JSON object."""
        self._report(0, 0, PARSING_LABEL, ImportPhase.PARSING)
        parsed = csv_reader(self.settings).read(content)
        existing = await self._existing_slugs()
        return await self._run(
            parsed,
            existing,
            skip_titles,
            specs_mode=SpecsMode.JSON,
            max_slug_attempts=self.settings.legacy_max_slug_attempts,
            chunk_size=self.settings.csv_chunk_size,
        )

    async def _existing_slugs(self) -> set[str]:
        return await fetch_all_existing_slugs(
            self.data_store, self.storage.table, self.settings.slug_page_size
        )

    async def _run(
        self,
        parsed: ParsedSpreadsheet,
        existing: set[str],
        skip_titles: Collection[str] | None,
        specs_mode: SpecsMode,
        max_slug_attempts: int,
        chunk_size: int,
    ) -> ImportResult:
        header_map = HeaderMap.resolve(parsed.headers)
        result = ImportResult(errors=list(parsed.errors), warnings=list(parsed.warnings))
        if header_map.unsupported_headers:
            result.warnings.append(
                f"인식되지 않는 열은 무시됩니다: {', '.join(header_map.unsupported_headers)}"
            )

        rows = self._drop_skipped(parsed.rows, header_map, skip_titles, result)
        if not rows:
            raise ImportAbortedError(self._no_products_message(result.errors), result.errors)

        allocator = SlugAllocator(max_attempts=max_slug_attempts, rng=self.rng)
        mapper = RowToProductMapper(header_map, allocator, specs_mode)
        records = await self._map_rows(rows, mapper, existing, result)
        if not records:
            raise ImportAbortedError(NO_VALID_PRODUCTS, result.errors)

        committer = BatchCommitter(
            self.data_store,
            table=self.storage.table,
            chunk_size=chunk_size,
            max_insert_attempts=self.settings.max_insert_attempts,
            slug_allocator=allocator,
            progress=self.progress,
        )
        try:
            committed = await committer.commit(records, existing)
        except StoreError as e:
            logger.error(f"Import aborted by store error: code={e.code} {e.message}")
            raise ImportAbortedError(user_message(e), result.errors) from e

        result.inserted = committed.inserted
        result.errors.extend(committed.errors)
        self._report(committed.inserted, committed.inserted, DONE_LABEL, ImportPhase.DONE)
        logger.info(
            f"Import finished: {result.inserted} inserted, {len(result.errors)} errors, "
            f"{len(result.warnings)} warnings, {result.skipped_duplicates} skipped"
        )
        return result

    def _drop_skipped(
        self,
        rows: Sequence[ExcelRowData],
        header_map: HeaderMap,
        skip_titles: Collection[str] | None,
        result: ImportResult,
    ) -> list[ExcelRowData]:
        if not skip_titles:
            return list(rows)
        skip = {_normalized_title(title) for title in skip_titles}
        kept = []
        for row in rows:
            title = _normalized_title(header_map.title(row.data))
            if title and title in skip:
                result.skipped_duplicates += 1
            else:
                kept.append(row)
        if result.skipped_duplicates:
            logger.info(f"Skipped {result.skipped_duplicates} rows with existing titles")
        return kept

    async def _map_rows(
        self,
        rows: Sequence[ExcelRowData],
        mapper: RowToProductMapper,
        existing: set[str],
        result: ImportResult,
    ) -> list[ProductImportRecord]:
        records: list[ProductImportRecord] = []
        batch_slugs: set[str] = set()
        total = len(rows)

        for position, row in enumerate(rows, start=1):
            label = mapper.header_map.title(row.data) or f"제품 {position}"
            self._report(position, total, label, ImportPhase.UPLOADING_IMAGES)

            claim = mapper.claim(row.row_index, row.data, existing, batch_slugs)
            if isinstance(claim, str):
                result.errors.append(claim)
                continue

            uploaded: list[str] = []
            if row.images and self.uploader is not None:
                upload = await self.uploader.upload_row(row.images, claim.slug, row.row_index)
                uploaded = upload.urls
                result.errors.extend(upload.errors)
            elif row.images:
                result.warnings.append(
                    f"행 {row.row_index}: 이미지 저장소가 없어 이미지 {len(row.images)}개가 무시됩니다."
                )
            records.append(mapper.build(claim, uploaded))

        return records

    @staticmethod
    def _no_products_message(errors: Sequence[str]) -> str:
        if errors:
            return f"{NO_VALID_PRODUCTS} ({', '.join(errors)})"
        return NO_VALID_PRODUCTS

    def _report(self, current: int, total: int, label: str, phase: ImportPhase) -> None:
        if self.progress is not None:
            self.progress(current, total, label, phase.value)


class PreParseCommand:
    """Reads an upload without importing it and reports duplicate titles."""

    def __init__(
        self,
        data_store: DataStoreProtocol,
        settings: ImportSettings | None = None,
        table: str = "products",
    ) -> None:
        self.data_store = data_store
        self.settings = settings or ImportSettings()
        self.table = table

    async def run(
        self, content: bytes, filename: str, content_type: str | None = None
    ) -> PendingFileInfo:
        """Parse a file and compare its titles to the catalog.

        Raises:
            UnsupportedFileError: For files that are neither spreadsheet nor CSV.
            SpreadsheetParseError: If the file cannot be parsed.
            ImportAbortedError: If the file holds no importable rows.
        """
        kind = detect_file_kind(filename, content_type)
        if kind is FileKind.EXCEL:
            parsed = spreadsheet_reader(self.settings).read(content)
        else:
            parsed = csv_reader(self.settings).read(content)

        header_map = HeaderMap.resolve(parsed.headers)
        titles = [header_map.title(row.data).strip() for row in parsed.rows]
        if kind is FileKind.CSV:
            row_count = sum(1 for title in titles if title)
        else:
            row_count = len(parsed.rows)
        if row_count == 0:
            raise ImportAbortedError(NO_VALID_PRODUCTS)

        stored = await fetch_column_values(
            self.data_store, self.table, "title", self.settings.slug_page_size
        )
        existing_titles = {_normalized_title(title) for title in stored}
        duplicates = [t for t in titles if t and _normalized_title(t) in existing_titles]

        return PendingFileInfo(
            filename=filename,
            kind=kind,
            row_count=row_count,
            image_count=sum(len(row.images) for row in parsed.rows),
            duplicate_titles=duplicates,
            unsupported_headers=list(header_map.unsupported_headers),
            warnings=list(parsed.warnings),
        )


class ConsultationCommand:
    """Composes a consultation request from a layout and hands it off."""

    def __init__(
        self,
        submitter: InquirySubmitterProtocol,
        composer: QuoteComposer | None = None,
    ) -> None:
        self.submitter = submitter
        self.composer = composer or QuoteComposer()

    async def execute(
        self,
        store: PlacementStore,
        name: str,
        phone: str,
        email: str,
        message: str = "",
    ) -> ConsultationRequest:
        """Validate contact fields and submit the inquiry.

        Raises:
            InvalidInquiryError: If nothing is placed or a contact field
                is missing or malformed.
        """
        request = self.composer.compose_consultation(store.placed, name, phone, email, message)
        problems = request.problems()
        if not store.placed:
            problems.insert(0, "no furniture placed")
        if problems:
            raise InvalidInquiryError(problems)

        request = request.truncated()
        await self.submitter.submit(request)
        logger.info(f"Submitted consultation for {len(store.placed)} items")
        return request


class PlannerCatalogQuery:
    """Loads active products of a category as planner furniture templates."""

    def __init__(self, data_store: DataStoreProtocol, table: str = "products") -> None:
        self.data_store = data_store
        self.table = table

    async def run(self, main_category: str) -> list[FurnitureItem]:
        rows = await self.data_store.select(
            self.table,
            columns="id,title,slug,price,thumbnail_url,main_category,subcategory,specs",
            filters={"is_active": True, "main_category": main_category},
            order="display_order",
        )
        return products_to_furniture(rows, main_category)
