"""Contracts module - protocols and the shared error taxonomy.

By depending on protocols rather than concrete stores, the application layer
stays testable with in-memory collaborators.

Example:
    ```python
    from showroom.contracts import DataStoreProtocol, StoreError

    async def count_products(store: DataStoreProtocol) -> int:
        return len(await store.select("products", columns="id"))
    ```
"""

from .errors import (
    BlobUploadError as BlobUploadError,
    ImportAbortedError as ImportAbortedError,
    InvalidInquiryError as InvalidInquiryError,
    ShowroomError as ShowroomError,
    SpreadsheetParseError as SpreadsheetParseError,
    StoreError as StoreError,
    UnsupportedFileError as UnsupportedFileError,
    user_message as user_message,
)
from .protocols import (
    BlobStoreProtocol as BlobStoreProtocol,
    DataStoreProtocol as DataStoreProtocol,
    InquirySubmitterProtocol as InquirySubmitterProtocol,
    ProgressCallback as ProgressCallback,
)
