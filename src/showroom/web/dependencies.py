"""FastAPI dependency injection for showroom services."""

from typing import Annotated

from fastapi import Depends, Request

from showroom.application import (
    BulkImportCommand,
    ConsultationCommand,
    PlannerCatalogQuery,
    PreParseCommand,
    ServiceFactory,
)
from showroom.application.config import ShowroomSettings


def get_service_factory(request: Request) -> ServiceFactory:
    """The factory created with the app; its stores live as long as the app."""
    return request.app.state.factory


def get_settings(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> ShowroomSettings:
    return factory.settings


def get_bulk_import_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> BulkImportCommand:
    """Dependency for BulkImportCommand."""
    return factory.create_bulk_import_command()


def get_pre_parse_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> PreParseCommand:
    """Dependency for PreParseCommand."""
    return factory.create_pre_parse_command()


def get_consultation_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> ConsultationCommand:
    return factory.create_consultation_command()


def get_catalog_query(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> PlannerCatalogQuery:
    return factory.create_catalog_query()


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
SettingsDep = Annotated[ShowroomSettings, Depends(get_settings)]
BulkImportCommandDep = Annotated[BulkImportCommand, Depends(get_bulk_import_command)]
PreParseCommandDep = Annotated[PreParseCommand, Depends(get_pre_parse_command)]
ConsultationCommandDep = Annotated[ConsultationCommand, Depends(get_consultation_command)]
CatalogQueryDep = Annotated[PlannerCatalogQuery, Depends(get_catalog_query)]
