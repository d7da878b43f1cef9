"""Configuration loading: optional TOML file, ``.env``, environment.

Precedence (later overrides earlier):
    1. Built-in defaults (Pydantic model defaults)
    2. TOML file passed as ``--config``
    3. ``SMARTLEAD_*`` environment variables (``.env`` is read first)
    4. Programmatic overrides (passed to ``load_config``)

Retry settings from the environment that are unparseable or zero are
ignored with a warning, so the default applies. The API key is required;
loading fails with :class:`ConfigError` when no layer provides one.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from smartlead_mcp.core.errors import ConfigError

from .schema import RetryConfig, SmartleadConfig

logger = logging.getLogger(__name__)

# env var -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "SMARTLEAD_API_KEY": ("api", "api_key"),
    "SMARTLEAD_API_URL": ("api", "base_url"),
    "SMARTLEAD_RETRY_MAX_ATTEMPTS": ("retry", "max_attempts"),
    "SMARTLEAD_RETRY_INITIAL_DELAY": ("retry", "initial_delay"),
    "SMARTLEAD_RETRY_MAX_DELAY": ("retry", "max_delay"),
    "SMARTLEAD_RETRY_BACKOFF_FACTOR": ("retry", "backoff_factor"),
    "SMARTLEAD_LOG_LEVEL": ("logging", "level"),
}


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _merge_sections(
    base: dict[str, Any], override: dict[str, Any]
) -> dict[str, Any]:
    """Merge two ``{section: {key: value}}`` mappings, *override* winning."""
    merged = {section: dict(values) for section, values in base.items()}
    for section, values in override.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def _usable_retry_value(var: str, key: str, raw: str) -> bool:
    """Whether an env retry setting is a non-zero value the model accepts."""
    try:
        usable = float(raw) != 0
        if usable:
            RetryConfig.model_validate({key: raw})
    except (ValueError, ValidationError):
        usable = False
    if not usable:
        logger.warning("Ignoring invalid %s=%r, using the default", var, raw)
    return usable


def _env_overrides() -> dict[str, Any]:
    """Collect ``SMARTLEAD_*`` overrides. Empty values are ignored."""
    overrides: dict[str, Any] = {}
    for var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(var, "").strip()
        if not value:
            continue
        if section == "retry" and not _usable_retry_value(var, key, value):
            continue
        overrides.setdefault(section, {})[key] = value
    return overrides


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
    *,
    require_api_key: bool = True,
) -> SmartleadConfig:
    """Load and validate configuration.

    Args:
        path: Optional TOML config file.
        overrides: Dict of overrides merged last (highest priority).
        require_api_key: Fail when no API key is configured.

    Returns:
        Validated SmartleadConfig instance.

    Raises:
        ConfigError: On a missing or invalid config file, validation
            failure, or a missing API key.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)

    merged: dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        if not p.is_file():
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        merged = _read_toml(p)

    merged = _merge_sections(merged, _env_overrides())
    if overrides:
        merged = _merge_sections(merged, overrides)

    # Pydantic coerces the string values that came from the environment
    try:
        config = SmartleadConfig.model_validate(merged)
    except ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

    if require_api_key and not config.api.api_key:
        msg = "SMARTLEAD_API_KEY environment variable is required"
        raise ConfigError(msg)

    return config
