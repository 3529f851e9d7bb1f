"""Configuration resolution with environment and project-file precedence.

The resolver itself only ever receives an explicit
:class:`~pokesdk.models.ClientConfig`. This module builds one for the
command line (or for applications that want the same behaviour) by
merging, highest precedence first:

1. Explicit arguments (CLI flags)
2. Environment variables (``POKESDK_BASE_URL``, ``POKESDK_TIMEOUT``,
   ``POKESDK_CACHE_ENABLED``, ``POKESDK_CACHE_TTL``)
3. Project config (``./pokesdk.json``)
4. Model defaults

Configuration is read-only: nothing here writes to disk.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from pokesdk.exceptions import ConfigError
from pokesdk.models import ClientConfig

_PROJECT_CONFIG_FILENAME = "pokesdk.json"

_ENV_VARS = {
    "base_url": "POKESDK_BASE_URL",
    "timeout": "POKESDK_TIMEOUT",
    "cache_enabled": "POKESDK_CACHE_ENABLED",
    "cache_ttl": "POKESDK_CACHE_TTL",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``pokesdk.json``.

    Args:
        directory: Where to look. Defaults to the current working directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got '{raw}'")


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got '{raw}'") from None


def _env_overrides() -> dict[str, Any]:
    """Collect config fields set through ``POKESDK_*`` environment variables."""
    overrides: dict[str, Any] = {}
    for field, var in _ENV_VARS.items():
        raw = os.environ.get(var)
        if not raw:
            continue
        if field == "cache_enabled":
            overrides[field] = _parse_bool(var, raw)
        elif field in ("timeout", "cache_ttl"):
            overrides[field] = _parse_float(var, raw)
        else:
            overrides[field] = raw
    return overrides


def resolve_config(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    cache_enabled: Optional[bool] = None,
    cache_ttl: Optional[float] = None,
    project_dir: Optional[Path] = None,
) -> ClientConfig:
    """Resolve the effective :class:`~pokesdk.models.ClientConfig`.

    Arguments left as ``None`` fall through to the environment, then to
    ``pokesdk.json``, then to the model defaults.

    Raises:
        ConfigError: If any layer supplies an invalid value.
    """
    merged: dict[str, Any] = {}

    project = load_project_config(project_dir)
    if project is not None:
        merged.update({k: v for k, v in project.items() if k in _ENV_VARS})

    merged.update(_env_overrides())

    cli = {
        "base_url": base_url,
        "timeout": timeout,
        "cache_enabled": cache_enabled,
        "cache_ttl": cache_ttl,
    }
    merged.update({k: v for k, v in cli.items() if v is not None})

    try:
        return ClientConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
