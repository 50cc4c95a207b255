"""Uploading of embedded spreadsheet images to the blob store."""

from __future__ import annotations

import asyncio
import logging
import random
import string
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field

from showroom.contracts.errors import BlobUploadError
from showroom.contracts.protocols import BlobStoreProtocol
from showroom.domain.value_objects import ExcelImageData

logger = logging.getLogger(__name__)

_NAME_ALPHABET = string.ascii_lowercase + string.digits


@dataclass
class RowUploadResult:
    """Public URLs (in image order) and per-image error strings for a row."""

    urls: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class ImageUploader:
    """Uploads a row's images with bounded retries and a per-attempt timeout.

    A 409 / "already exists" answer on a retry counts as success: the
    earlier attempt most likely landed before its response timed out.

    Attributes:
        blob_store: Destination store.
        folder: Path prefix inside the bucket.
        retries: Extra attempts after the first failure.
        backoff_seconds: Delay before the first retry; doubles per retry.
        timeout_seconds: Deadline for a single attempt.
    """

    blob_store: BlobStoreProtocol
    folder: str = "products"
    retries: int = 2
    backoff_seconds: float = 0.4
    timeout_seconds: float = 45.0
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], int] = lambda: int(time.time() * 1000)
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def object_path(self, slug: str, index: int, extension: str) -> str:
        suffix = "".join(self.rng.choice(_NAME_ALPHABET) for _ in range(6))
        return f"{self.folder}/{slug}-{index}-{self.clock()}-{suffix}.{extension}"

    async def upload_image(self, image: ExcelImageData, slug: str, index: int) -> str:
        """Upload one image and return its public URL.

        Raises:
            BlobUploadError: When every attempt failed.
        """
        path = self.object_path(slug, index, image.extension)
        last_error: BlobUploadError | None = None

        for attempt in range(self.retries + 1):
            if attempt:
                delay = self.backoff_seconds * (2 ** (attempt - 1))
                logger.warning(f"Retrying upload of {path} in {delay:.1f}s ({last_error})")
                await self.sleep(delay)
            try:
                await asyncio.wait_for(
                    self.blob_store.upload(path, image.data, image.content_type),
                    timeout=self.timeout_seconds,
                )
                return self.blob_store.public_url(path)
            except asyncio.TimeoutError:
                last_error = BlobUploadError(
                    f"업로드 시간 초과 ({self.timeout_seconds:g}초)", timed_out=True
                )
            except BlobUploadError as e:
                if attempt and e.is_already_exists:
                    logger.info(f"{path} already stored by an earlier attempt")
                    return self.blob_store.public_url(path)
                last_error = e
                if not e.is_retryable:
                    break

        raise last_error or BlobUploadError(f"upload failed: {path}")

    async def upload_row(
        self, images: Sequence[ExcelImageData], slug: str, row_index: int
    ) -> RowUploadResult:
        """Upload a row's images concurrently; failures become error strings."""
        outcomes = await asyncio.gather(
            *(
                self.upload_image(image, slug, position)
                for position, image in enumerate(images, start=1)
            ),
            return_exceptions=True,
        )

        result = RowUploadResult()
        for position, outcome in enumerate(outcomes, start=1):
            if isinstance(outcome, BlobUploadError):
                logger.warning(f"Row {row_index} image {position} failed: {outcome}")
                result.errors.append(f"행 {row_index}: 이미지 {position} 업로드 실패: {outcome}")
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                result.urls.append(outcome)
        return result
