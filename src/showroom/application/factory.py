"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .config.schema import ShowroomSettings

if TYPE_CHECKING:
    from showroom.application.commands import (
        BulkImportCommand,
        ConsultationCommand,
        PlannerCatalogQuery,
        PreParseCommand,
    )
    from showroom.contracts.protocols import (
        BlobStoreProtocol,
        DataStoreProtocol,
        InquirySubmitterProtocol,
        ProgressCallback,
    )
    from showroom.domain.services import PlacementStore, QuoteComposer
    from showroom.infrastructure import (
        ExcelTemplateGenerator,
        IsometricRenderer,
        ProductCsvExporter,
        TopDownRenderer,
    )


@dataclass
class ServiceFactory:
    """Creates stores, renderers and commands from one settings object.

    Stores are created lazily and cached so every command built by the same
    factory shares them. An empty ``storage.base_url`` selects in-memory
    stores, which is what dry runs and tests use.

    Example:
        ```python
        factory = ServiceFactory(settings_from_env(load_settings(path)))
        command = factory.create_bulk_import_command()
        result = await command.import_excel(content)
        ```
    """

    settings: ShowroomSettings = field(default_factory=ShowroomSettings)

    _data_store: "DataStoreProtocol | None" = field(default=None, init=False, repr=False)
    _blob_store: "BlobStoreProtocol | None" = field(default=None, init=False, repr=False)
    _inquiry_submitter: "InquirySubmitterProtocol | None" = field(
        default=None, init=False, repr=False
    )

    def get_data_store(self) -> "DataStoreProtocol":
        """Get or create the data store."""
        if self._data_store is None:
            storage = self.settings.storage
            if storage.is_remote:
                from showroom.infrastructure.rest_store import RestDataStore

                self._data_store = RestDataStore(storage.base_url, storage.api_key)
            else:
                from showroom.infrastructure.memory import InMemoryDataStore

                self._data_store = InMemoryDataStore()
        return self._data_store

    def get_blob_store(self) -> "BlobStoreProtocol":
        """Get or create the blob store."""
        if self._blob_store is None:
            storage = self.settings.storage
            if storage.is_remote:
                from showroom.infrastructure.rest_store import RestBlobStore

                self._blob_store = RestBlobStore(
                    storage.base_url,
                    storage.api_key,
                    bucket=storage.bucket,
                    timeout=storage.upload_timeout_seconds,
                )
            else:
                from showroom.infrastructure.memory import InMemoryBlobStore

                self._blob_store = InMemoryBlobStore()
        return self._blob_store

    def get_inquiry_submitter(self) -> "InquirySubmitterProtocol":
        if self._inquiry_submitter is None:
            from showroom.infrastructure.memory import InquiryOutbox

            self._inquiry_submitter = InquiryOutbox()
        return self._inquiry_submitter

    def get_quote_composer(self) -> "QuoteComposer":
        from showroom.domain.services import QuoteComposer

        return QuoteComposer(currency=self.settings.planner.currency_symbol)

    def get_top_down_renderer(self) -> "TopDownRenderer":
        from showroom.infrastructure.scene_renderer import TopDownRenderer

        return TopDownRenderer()

    def get_isometric_renderer(self) -> "IsometricRenderer":
        from showroom.infrastructure.scene_renderer import IsometricRenderer

        return IsometricRenderer()

    def get_template_generator(self) -> "ExcelTemplateGenerator":
        from showroom.infrastructure.template_generator import ExcelTemplateGenerator

        return ExcelTemplateGenerator()

    def get_product_exporter(self) -> "ProductCsvExporter":
        from showroom.infrastructure.product_exporter import ProductCsvExporter

        return ProductCsvExporter()

    def create_placement_store(self) -> "PlacementStore":
        """New empty planner session using the configured room and scale."""
        from showroom.domain.entities import PlannerState
        from showroom.domain.services import PlacementStore
        from showroom.domain.value_objects import RoomDimensions

        planner = self.settings.planner
        state = PlannerState(
            room=RoomDimensions(planner.default_room.width, planner.default_room.height),
            scale=planner.default_scale,
        )
        return PlacementStore(state=state, snap_threshold=planner.snap_threshold_px)

    def create_bulk_import_command(
        self, progress: "ProgressCallback | None" = None
    ) -> "BulkImportCommand":
        from showroom.application.commands import BulkImportCommand

        return BulkImportCommand(
            self.get_data_store(),
            self.get_blob_store(),
            settings=self.settings.importing,
            storage=self.settings.storage,
            progress=progress,
        )

    def create_pre_parse_command(self) -> "PreParseCommand":
        from showroom.application.commands import PreParseCommand

        return PreParseCommand(
            self.get_data_store(),
            settings=self.settings.importing,
            table=self.settings.storage.table,
        )

    def create_consultation_command(self) -> "ConsultationCommand":
        from showroom.application.commands import ConsultationCommand

        return ConsultationCommand(self.get_inquiry_submitter(), self.get_quote_composer())

    def create_catalog_query(self) -> "PlannerCatalogQuery":
        from showroom.application.commands import PlannerCatalogQuery

        return PlannerCatalogQuery(self.get_data_store(), table=self.settings.storage.table)
