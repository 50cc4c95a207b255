"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from showroom.domain.value_objects import ImportPhase


class ImportOutcome(str, Enum):
    """How a bulk import ended, as shown to the user."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


class FileKind(str, Enum):
    EXCEL = "excel"
    CSV = "csv"


@dataclass(frozen=True)
class ImportProgress:
    """One progress update; ``current`` only grows within a phase."""

    current: int
    total: int
    label: str
    phase: ImportPhase

    @property
    def percent(self) -> int:
        if self.total <= 0:
            return 100 if self.phase is ImportPhase.DONE else 0
        return round(self.current / self.total * 100)


@dataclass
class CommitResult:
    """Rows written by the batch committer and per-row failures."""

    inserted: int = 0
    errors: list[str] = field(default_factory=list)
    slugs: list[str] = field(default_factory=list)


@dataclass
class ImportResult:
    """Outcome of a bulk import.

    Attributes:
        inserted: Number of products written.
        errors: Per-row rejections and insert failures.
        warnings: Per-image and per-row notices from parsing and upload.
        skipped_duplicates: Rows skipped because their title already exists.
    """

    inserted: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    skipped_duplicates: int = 0

    @property
    def outcome(self) -> ImportOutcome:
        if self.inserted == 0:
            return ImportOutcome.FAILURE
        if self.errors or self.skipped_duplicates:
            return ImportOutcome.PARTIAL
        return ImportOutcome.SUCCESS

    @property
    def summary(self) -> str:
        """Short Korean summary line for the admin UI."""
        if self.inserted == 0:
            return "업로드할 유효한 제품이 없습니다."
        skipped = len(self.errors) + self.skipped_duplicates
        if skipped:
            return f"{self.inserted}개의 제품이 업로드되었습니다. ({skipped}개 오류/건너뜀)"
        return f"{self.inserted}개의 제품이 업로드되었습니다."


@dataclass
class PendingFileInfo:
    """What a file would import, computed before any upload.

    Attributes:
        filename: Uploaded file name.
        kind: Spreadsheet or CSV path.
        row_count: Rows that carry a title.
        image_count: Embedded images after anchor remapping.
        duplicate_titles: Titles already present in the catalog.
        unsupported_headers: Headers that map to no product field.
        warnings: Parse warnings.
    """

    filename: str
    kind: FileKind
    row_count: int = 0
    image_count: int = 0
    duplicate_titles: list[str] = field(default_factory=list)
    unsupported_headers: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicate_titles)
