"""Protocol-driven data source factory: ``protocol: soap`` resolves ``sources/soap/connector.py``."""

import importlib
import inspect
from pathlib import Path
from typing import Any

from .._config import read_config_file
from .._logging import get_logger, redact_config
from .base_source import BaseDataSource

logger = get_logger("sources.factory")
_SOURCES_PACKAGE = "soapsource.connections.sources"


def load_connector_config(config: dict[str, Any] | str | Path) -> dict[str, Any]:
    """Load a source definition from a dict, JSON file, or YAML file."""
    if isinstance(config, dict):
        return config
    return read_config_file(config)


def create_connector(config: dict[str, Any] | str | Path, **options: Any) -> BaseDataSource:
    """
    Instantiate the data source named by the ``protocol`` field.

    The remaining keys become the source configuration; ``options`` are passed to the
    constructor as is (for example ``autoconnect=False``).
    """
    resolved_config = load_connector_config(config)
    protocol = _normalize_protocol(resolved_config.get("protocol"))

    payload = dict(resolved_config)
    payload.pop("protocol", None)

    source_class = _resolve_source_class(protocol)
    logger.info("Creating data source protocol=%s class=%s config=%s", protocol, source_class.__name__, redact_config(payload))

    try:
        return source_class(config=payload, **options)
    except TypeError as exc:
        raise TypeError(
            f"Invalid parameters for protocol '{protocol}' using data source '{source_class.__name__}': {exc}"
        ) from exc


def _normalize_protocol(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Missing required 'protocol' field in data source configuration.")
    return value.strip().lower()


def _resolve_source_class(protocol: str) -> type[BaseDataSource]:
    source_class = _find_source_class(f"{_SOURCES_PACKAGE}.{protocol}.connector", protocol)
    if source_class is not None:
        return source_class

    raise ValueError(
        f"Unsupported protocol '{protocol}'. Add a '{protocol}' package with a connector module under '{_SOURCES_PACKAGE}'."
    )


def _find_source_class(module_name: str, protocol: str) -> type[BaseDataSource] | None:
    """Prefer <PROTOCOL>Source, fall back to the first data source defined in the module."""
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError:
        return None

    preferred_class_name = f"{protocol}source"
    fallback: type[BaseDataSource] | None = None

    for _, member in inspect.getmembers(module, inspect.isclass):
        if not issubclass(member, BaseDataSource) or member is BaseDataSource:
            continue
        if member.__module__ != module.__name__:
            continue

        if member.__name__.lower() == preferred_class_name:
            return member

        if fallback is None:
            fallback = member

    return fallback


__all__ = ["load_connector_config", "create_connector"]
