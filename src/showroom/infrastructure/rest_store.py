"""REST clients for the hosted data and blob stores.

Both clients speak the PostgREST / storage HTTP APIs of the hosted backend
through httpx. They translate HTTP failures into ``StoreError`` and
``BlobUploadError`` so the application layer never sees transport types.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import httpx

from showroom.contracts.errors import BlobUploadError, StoreError

logger = logging.getLogger(__name__)


def _auth_headers(api_key: str) -> dict[str, str]:
    return {"apikey": api_key, "Authorization": f"Bearer {api_key}"}


def _filter_value(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


class RestDataStore:
    """PostgREST-backed implementation of DataStoreProtocol.

    Attributes:
        base_url: Project URL (e.g. https://xyz.supabase.co).
        api_key: Service or anon key sent as apikey and bearer token.
        timeout: Request timeout in seconds.

    Example:
        >>> store = RestDataStore("https://xyz.supabase.co", "key")
        >>> rows = await store.select("products", columns="slug", limit=1000)
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    @staticmethod
    def _error(response: httpx.Response) -> StoreError:
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        return StoreError.from_payload(payload, fallback=f"HTTP {response.status_code}")

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, str] = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = _filter_value(value)
        if order:
            params["order"] = order
        if offset:
            params["offset"] = str(offset)
        if limit is not None:
            params["limit"] = str(limit)

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self._url(table),
                    params=params,
                    headers=_auth_headers(self.api_key),
                    timeout=self.timeout,
                )
        except httpx.RequestError as e:
            raise StoreError(f"network error: {e}") from e

        if response.status_code >= 400:
            raise self._error(response)
        data = response.json()
        logger.debug(f"Selected {len(data)} rows from {table}")
        return data

    async def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> None:
        headers = _auth_headers(self.api_key) | {"Prefer": "return=minimal"}
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self._url(table),
                    json=[dict(row) for row in rows],
                    headers=headers,
                    timeout=self.timeout,
                )
        except httpx.RequestError as e:
            raise StoreError(f"network error: {e}") from e

        if response.status_code >= 400:
            error = self._error(response)
            logger.debug(f"Insert into {table} failed: code={error.code} {error.message}")
            raise error
        logger.debug(f"Inserted {len(rows)} rows into {table}")


class RestBlobStore:
    """Storage-API implementation of BlobStoreProtocol.

    One request per call; retry and backoff policy belong to the caller
    (see ImageUploader).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str = "product-images",
        timeout: float = 45.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket
        self.timeout = timeout

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{quote(path)}"
        headers = _auth_headers(self.api_key) | {
            "Content-Type": content_type,
            "x-upsert": "false",
        }
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    url, content=data, headers=headers, timeout=self.timeout
                )
        except httpx.TimeoutException as e:
            raise BlobUploadError(f"upload timed out: {path}", timed_out=True) from e
        except httpx.RequestError as e:
            raise BlobUploadError(f"network error: {e}") from e

        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            message = response.text
            status = response.status_code
            if isinstance(payload, dict):
                message = payload.get("message") or payload.get("error") or message
                # Duplicates come back as 400 with statusCode "409"
                if str(payload.get("statusCode")) == "409":
                    status = 409
            raise BlobUploadError(str(message), status_code=status)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{quote(path)}"
