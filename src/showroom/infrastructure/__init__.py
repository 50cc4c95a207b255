"""Infrastructure layer - file formats, storage clients and renderers."""

from .csv_reader import CsvReader
from .memory import InMemoryBlobStore, InMemoryDataStore, InquiryOutbox
from .product_exporter import ProductCsvExporter
from .rest_store import RestBlobStore, RestDataStore
from .scene_renderer import IsometricRenderer, TopDownRenderer
from .spreadsheet_reader import (
    SpreadsheetReader,
    is_csv_file,
    is_excel_file,
    normalize_header,
)
from .template_generator import ExcelTemplateGenerator

__all__ = [
    # Readers
    "CsvReader",
    "SpreadsheetReader",
    "is_csv_file",
    "is_excel_file",
    "normalize_header",
    # Stores
    "InMemoryBlobStore",
    "InMemoryDataStore",
    "InquiryOutbox",
    "RestBlobStore",
    "RestDataStore",
    # Output
    "ExcelTemplateGenerator",
    "IsometricRenderer",
    "ProductCsvExporter",
    "TopDownRenderer",
]
