"""Tests for image uploads with retries."""

from __future__ import annotations

import asyncio
import random

import pytest

from showroom.application.services import ImageUploader
from showroom.contracts.errors import BlobUploadError
from showroom.domain.value_objects import ExcelImageData
from showroom.infrastructure.memory import InMemoryBlobStore


class ScriptedBlobStore(InMemoryBlobStore):
    """Blob store that fails according to a script, then succeeds."""

    def __init__(self, *failures: BlobUploadError | None) -> None:
        super().__init__()
        self.failures = list(failures)
        self.calls = 0

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        self.calls += 1
        if self.failures:
            failure = self.failures.pop(0)
            if failure is not None:
                raise failure
        self.objects[path] = (data, content_type)


class SlowBlobStore(InMemoryBlobStore):
    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        await asyncio.sleep(1)


@pytest.fixture
def image() -> ExcelImageData:
    return ExcelImageData(b"\x89PNG", "png", 2, 7)


@pytest.fixture
def sleeps() -> list[float]:
    return []


def _uploader(store: InMemoryBlobStore, sleeps: list[float], **kwargs) -> ImageUploader:
    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    return ImageUploader(
        store,
        rng=random.Random(0),
        clock=lambda: 1000,
        sleep=fake_sleep,
        **kwargs,
    )


class TestUploadImage:
    """Tests for ImageUploader.upload_image."""

    @pytest.mark.asyncio
    async def test_success_returns_public_url(
        self, image: ExcelImageData, sleeps: list[float]
    ) -> None:
        store = ScriptedBlobStore()
        url = await _uploader(store, sleeps).upload_image(image, "책상", 1)

        assert url.startswith("memory://blobs/products/책상-1-1000-")
        assert url.endswith(".png")
        assert len(store.objects) == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_server_error_is_retried_with_backoff(
        self, image: ExcelImageData, sleeps: list[float]
    ) -> None:
        store = ScriptedBlobStore(BlobUploadError("boom", 500), BlobUploadError("boom", 503))
        url = await _uploader(store, sleeps).upload_image(image, "desk", 1)

        assert url.startswith("memory://blobs/")
        assert store.calls == 3
        assert sleeps == [pytest.approx(0.4), pytest.approx(0.8)]

    @pytest.mark.asyncio
    async def test_already_exists_on_retry_counts_as_success(
        self, image: ExcelImageData, sleeps: list[float]
    ) -> None:
        store = ScriptedBlobStore(
            BlobUploadError("timeout", timed_out=True), BlobUploadError("exists", 409)
        )
        url = await _uploader(store, sleeps).upload_image(image, "desk", 1)
        assert url.startswith("memory://blobs/products/desk-1-")
        assert store.calls == 2

    @pytest.mark.asyncio
    async def test_already_exists_on_first_attempt_fails(
        self, image: ExcelImageData, sleeps: list[float]
    ) -> None:
        store = ScriptedBlobStore(BlobUploadError("exists", 409))
        with pytest.raises(BlobUploadError):
            await _uploader(store, sleeps).upload_image(image, "desk", 1)
        assert store.calls == 1

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(
        self, image: ExcelImageData, sleeps: list[float]
    ) -> None:
        store = ScriptedBlobStore(BlobUploadError("bad mime", 400))
        with pytest.raises(BlobUploadError, match="bad mime"):
            await _uploader(store, sleeps).upload_image(image, "desk", 1)
        assert store.calls == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_gives_up_after_retries(
        self, image: ExcelImageData, sleeps: list[float]
    ) -> None:
        store = ScriptedBlobStore(*[BlobUploadError("boom", 500)] * 3)
        with pytest.raises(BlobUploadError):
            await _uploader(store, sleeps, retries=2).upload_image(image, "desk", 1)
        assert store.calls == 3

    @pytest.mark.asyncio
    async def test_timeout_becomes_upload_error(
        self, image: ExcelImageData, sleeps: list[float]
    ) -> None:
        uploader = _uploader(SlowBlobStore(), sleeps, retries=0, timeout_seconds=0.01)
        with pytest.raises(BlobUploadError) as exc_info:
            await uploader.upload_image(image, "desk", 1)
        assert exc_info.value.timed_out


class TestUploadRow:
    @pytest.mark.asyncio
    async def test_failed_image_becomes_row_error(self, sleeps: list[float]) -> None:
        store = ScriptedBlobStore(None, BlobUploadError("bad", 400))
        images = [
            ExcelImageData(b"a", "png", 2, 7),
            ExcelImageData(b"b", "jpeg", 2, 8),
        ]

        result = await _uploader(store, sleeps).upload_row(images, "desk", 2)

        assert len(result.urls) == 1
        assert result.urls[0].endswith(".png")
        assert result.errors == ["행 2: 이미지 2 업로드 실패: bad"]

    def test_object_path_shape(self, sleeps: list[float]) -> None:
        path = _uploader(InMemoryBlobStore(), sleeps, folder="items").object_path("desk", 3, "jpeg")
        prefix = "items/desk-3-1000-"
        assert path.startswith(prefix)
        assert path.endswith(".jpeg")
        assert len(path) == len(prefix) + 6 + len(".jpeg")
