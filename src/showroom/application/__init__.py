"""Application layer - use cases and orchestration."""

from .commands import (
    BulkImportCommand,
    ConsultationCommand,
    PlannerCatalogQuery,
    PreParseCommand,
    detect_file_kind,
)
from .dtos import (
    CommitResult,
    FileKind,
    ImportOutcome,
    ImportProgress,
    ImportResult,
    PendingFileInfo,
)
from .factory import ServiceFactory

__all__ = [
    "BulkImportCommand",
    "CommitResult",
    "ConsultationCommand",
    "FileKind",
    "ImportOutcome",
    "ImportProgress",
    "ImportResult",
    "PendingFileInfo",
    "PlannerCatalogQuery",
    "PreParseCommand",
    "ServiceFactory",
    "detect_file_kind",
]
