"""Error taxonomy shared across layers.

Fatal failures raise; per-row and per-image problems are collected as
message strings by the import pipeline and never raise.
"""

from __future__ import annotations

from typing import Any

SLUG_CONSTRAINT = "products_slug_key"
UNIQUE_VIOLATION = "23505"

GENERIC_MESSAGE = "작업을 완료할 수 없습니다."


class ShowroomError(Exception):
    """Base class for showroom errors."""


class SpreadsheetParseError(ShowroomError):
    """Raised when a spreadsheet or CSV file cannot be parsed at all."""


class UnsupportedFileError(ShowroomError):
    """Raised for uploads that are neither a spreadsheet nor a CSV file."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(
            "지원하지 않는 파일 형식입니다. CSV 또는 Excel(.xlsx) 파일을 업로드해주세요."
        )


class ImportAbortedError(ShowroomError):
    """Raised when a bulk import stops as a whole.

    Attributes:
        errors: Per-row errors collected before the abort.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class InvalidInquiryError(ShowroomError):
    """Raised when a consultation request is missing or has malformed contact fields.

    Attributes:
        problems: One message per invalid field.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("; ".join(problems) or "invalid inquiry")


class StoreError(ShowroomError):
    """Failure reported by the relational data store.

    Attributes:
        code: Database error code (PostgreSQL SQLSTATE where available).
        message: Error message from the store.
        details: Optional detail text.
    """

    def __init__(self, message: str, code: str | None = None, details: str | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def is_slug_conflict(self) -> bool:
        """True for unique violations on the product slug constraint."""
        if self.code != UNIQUE_VIOLATION:
            return False
        return SLUG_CONSTRAINT in (self.message or "") or SLUG_CONSTRAINT in (self.details or "")

    @classmethod
    def from_payload(cls, payload: dict[str, Any], fallback: str = "") -> "StoreError":
        return cls(
            message=str(payload.get("message") or fallback),
            code=payload.get("code"),
            details=payload.get("details"),
        )


class BlobUploadError(ShowroomError):
    """Failure reported by the blob store.

    Attributes:
        status_code: HTTP status of the failed request, if any.
        timed_out: True when the request hit its deadline.
    """

    def __init__(
        self, message: str, status_code: int | None = None, timed_out: bool = False
    ) -> None:
        self.status_code = status_code
        self.timed_out = timed_out
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        if self.timed_out or self.status_code is None:
            return True
        return self.status_code in (408, 429) or self.status_code >= 500

    @property
    def is_already_exists(self) -> bool:
        return self.status_code == 409 or "already exists" in str(self).lower()


def user_message(error: BaseException | None) -> str:
    """Map an error to a short user-facing message without leaking details."""
    if error is None:
        return GENERIC_MESSAGE

    code = getattr(error, "code", None)
    text = str(getattr(error, "message", None) or error).lower()

    if code == "23505":
        return "중복된 데이터가 있습니다."
    if code == "23503":
        return "관련 데이터가 존재하지 않습니다."
    if code == "23502":
        return "필수 항목이 누락되었습니다."
    if code == "22P02":
        return "입력 형식이 올바르지 않습니다."
    if code == "42501" or "rls" in text or "policy" in text:
        return "권한이 없습니다."

    if "invalid login" in text or "invalid credentials" in text:
        return "이메일 또는 비밀번호가 올바르지 않습니다."
    if "user already registered" in text or "already exists" in text:
        return "이미 등록된 사용자입니다."

    if isinstance(error, BlobUploadError) or "storage" in text or "bucket" in text:
        return "파일 업로드 중 오류가 발생했습니다."
    if "network" in text or "timeout" in text or "fetch" in text:
        return "네트워크 연결을 확인해주세요."

    return GENERIC_MESSAGE
