"""Settings and layout file loading with detailed error reporting.

JSON files are read, parsed and validated against the pydantic models in
``schema``. Each failure class gets its own ``error_type`` so the CLI and
web layer can report it precisely.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .schema import PlannerLayoutConfig, ShowroomSettings

ModelT = TypeVar("ModelT", bound=BaseModel)

ENV_STORE_URL = "SHOWROOM_STORE_URL"
ENV_STORE_KEY = "SHOWROOM_STORE_KEY"


class ConfigError(Exception):
    """Exception raised for settings and layout file errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the file (if applicable)
        details: Additional error details (line/column for JSON, validation errors)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("items", 0, "width"))
        'items[0].width'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _format_validation_error_message(details: list[dict[str, Any]], subject: str) -> str:
    lines = [f"{subject} validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def _read_json(path: Path, subject: str) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"{subject} file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading {subject.lower()} file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading {subject.lower()} file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in {subject.lower()} file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(model: type[ModelT], data: Any, subject: str, path: Path | None = None) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details, subject),
            error_type="validation",
            path=path,
            details=details,
        )


def load_settings(path: Path) -> ShowroomSettings:
    """Load and validate settings from a JSON file.

    Args:
        path: Path to the JSON settings file

    Returns:
        A validated ShowroomSettings instance

    Raises:
        ConfigError: If the file cannot be loaded or validated. The
            error_type attribute tells which step failed.

    Example:
        >>> try:
        ...     settings = load_settings(Path("showroom.json"))
        ... except ConfigError as e:
        ...     print(f"Error: {e}")
    """
    return _validate(ShowroomSettings, _read_json(path, "Settings"), "Settings", path)


def load_settings_from_dict(data: dict[str, Any]) -> ShowroomSettings:
    """Validate settings from a dictionary (e.g. an API payload)."""
    return _validate(ShowroomSettings, data, "Settings")


def settings_from_env(
    settings: ShowroomSettings | None = None,
    environ: Mapping[str, str] | None = None,
) -> ShowroomSettings:
    """Overlay store credentials from the environment.

    SHOWROOM_STORE_URL and SHOWROOM_STORE_KEY replace the storage base URL
    and API key when set.
    """
    settings = settings or ShowroomSettings()
    environ = os.environ if environ is None else environ

    overrides: dict[str, str] = {}
    if environ.get(ENV_STORE_URL):
        overrides["base_url"] = environ[ENV_STORE_URL].rstrip("/")
    if environ.get(ENV_STORE_KEY):
        overrides["api_key"] = environ[ENV_STORE_KEY]
    if not overrides:
        return settings
    storage = settings.storage.model_copy(update=overrides)
    return settings.model_copy(update={"storage": storage})


def load_layout(path: Path) -> PlannerLayoutConfig:
    """Load and validate a planner layout from a JSON file.

    Raises:
        ConfigError: If the file cannot be loaded or validated.
    """
    return _validate(PlannerLayoutConfig, _read_json(path, "Layout"), "Layout", path)


def load_layout_from_dict(data: dict[str, Any]) -> PlannerLayoutConfig:
    return _validate(PlannerLayoutConfig, data, "Layout")
