"""Layered configuration loading for SOAP data sources (defaults, file, env, overrides)."""

import json
import os
from pathlib import Path
from typing import Any

from ._logging import get_logger, redact_config

LOGGER = get_logger("config")
_YAML_SUFFIXES = {".yaml", ".yml"}


def _read_prefixed_env(prefix: str) -> dict[str, Any]:
    """Collect <PREFIX>_* environment variables as lowercase config keys."""
    prefix_token = f"{prefix.upper()}_"
    values = {
        key.removeprefix(prefix_token).lower(): value
        for key, value in os.environ.items()
        if key.startswith(prefix_token)
    }
    LOGGER.debug("Read %s keys from environment prefix %s", len(values), prefix_token)
    return values


def read_config_file(file_path: str | Path) -> dict[str, Any]:
    """Parse a JSON or YAML config file whose root must be a mapping."""
    path = Path(file_path)
    if not path.exists():
        LOGGER.error("Config file not found: %s", path)
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    content = path.read_text(encoding="utf-8")

    if suffix == ".json":
        data = json.loads(content)
    elif suffix in _YAML_SUFFIXES:
        try:
            import yaml  # type: ignore
        except ImportError as exc:
            raise RuntimeError("PyYAML is not installed. Add it to requirements to use YAML config files.") from exc

        data = yaml.safe_load(content)
    else:
        raise ValueError("Unsupported config format. Use JSON (.json) or YAML (.yaml/.yml).")

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a key-value object at the root")

    LOGGER.info("Loaded config file %s", path)
    return data


def _drop_none(values: dict[str, Any] | None) -> dict[str, Any]:
    """Keep only explicit overrides so unset arguments never mask lower layers."""
    return {key: value for key, value in (values or {}).items() if value is not None}


def _missing_keys(config: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    return [key for key in required if config.get(key) in (None, "")]


def load_connection_config(
    config: dict[str, Any] | None = None,
    *,
    file_path: str | Path | None = None,
    env_prefix: str | None = None,
    required: tuple[str, ...] = (),
    defaults: dict[str, Any] | None = None,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge defaults < file < environment < config < overrides, last layer wins."""
    layers = [
        defaults or {},
        read_config_file(file_path) if file_path else {},
        _read_prefixed_env(env_prefix) if env_prefix else {},
        config or {},
        _drop_none(overrides),
    ]

    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)

    missing = _missing_keys(merged, required)
    if missing:
        joined = ", ".join(missing)
        LOGGER.error("Required config keys missing: %s", joined)
        raise ValueError(f"Missing required connection config keys: {joined}")

    LOGGER.info("Connection config resolved: %s", redact_config(merged))
    return merged
