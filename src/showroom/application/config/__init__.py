"""Settings schema and loading for the showroom tools.

Public API:
    - ShowroomSettings: Root settings model
    - PlannerSettings, ImportSettings, StorageSettings: Settings sections
    - PlannerLayoutConfig, LayoutItemConfig, RoomConfig: Layout file models
    - load_settings / load_settings_from_dict: Load and validate settings
    - settings_from_env: Overlay store credentials from the environment
    - load_layout / load_layout_from_dict: Load and validate a layout
    - ConfigError: Exception for settings and layout errors

Example:
    >>> from pathlib import Path
    >>> from showroom.application.config import load_settings, ConfigError
    >>>
    >>> try:
    ...     settings = load_settings(Path("showroom.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from .loader import (
    ConfigError,
    load_layout,
    load_layout_from_dict,
    load_settings,
    load_settings_from_dict,
    settings_from_env,
)
from .schema import (
    SUPPORTED_VERSIONS,
    ImportSettings,
    LayoutItemConfig,
    PlannerLayoutConfig,
    PlannerSettings,
    RoomConfig,
    ShowroomSettings,
    StorageSettings,
)

__all__ = [
    "ConfigError",
    "ImportSettings",
    "LayoutItemConfig",
    "PlannerLayoutConfig",
    "PlannerSettings",
    "RoomConfig",
    "SUPPORTED_VERSIONS",
    "ShowroomSettings",
    "StorageSettings",
    "load_layout",
    "load_layout_from_dict",
    "load_settings",
    "load_settings_from_dict",
    "settings_from_env",
]
