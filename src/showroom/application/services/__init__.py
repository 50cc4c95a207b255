"""Application services used by the import and planner commands."""

from .batch_committer import (
    AttemptState,
    BatchCommitter,
    RowInsertAttempt,
    fetch_all_existing_slugs,
    fetch_column_values,
)
from .image_uploader import ImageUploader, RowUploadResult
from .interaction import CanvasInteraction, DragSession, ListenerRegistry, Scene3DView
from .layout import layout_from_store, store_from_layout

__all__ = [
    "AttemptState",
    "BatchCommitter",
    "CanvasInteraction",
    "DragSession",
    "ImageUploader",
    "ListenerRegistry",
    "RowInsertAttempt",
    "RowUploadResult",
    "Scene3DView",
    "fetch_all_existing_slugs",
    "fetch_column_values",
    "layout_from_store",
    "store_from_layout",
]
