"""Public entrypoints for data source builders and connection tests."""

from .sources.factory import create_connector, load_connector_config
from .sources.soap import SOAPSource, get_soap_source, test_soap_connection

_SOAP_ALIASES = {"soap", "wsdl", "soap_source"}


def get_connection(source: str, **kwargs) -> SOAPSource:
    """Return a connected data source for the requested source alias."""
    source_key = source.strip().lower()

    if source_key in _SOAP_ALIASES:
        return get_soap_source(**kwargs)

    raise ValueError(f"Unsupported source '{source}'. Use one of: soap")


def test_connection(source: str, **kwargs) -> bool:
    """Run a lightweight connection health check for the requested source alias."""
    source_key = source.strip().lower()

    if source_key in _SOAP_ALIASES:
        return test_soap_connection(**kwargs)

    raise ValueError(f"Unsupported source '{source}'. Use one of: soap")


__all__ = [
    "get_connection",
    "test_connection",
    "create_connector",
    "load_connector_config",
    "get_soap_source",
    "test_soap_connection",
]
