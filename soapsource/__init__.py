"""SOAP web services exposed through a data-source interface."""

from .connections import create_connector, get_connection, test_connection
from .connections.sources import QueryResult, SOAPConfigurationError, SOAPFault, SOAPQueryError, SOAPSourceError
from .connections.sources.soap import RequestTemplate, SOAPSource, SOAPSourceConfig

__version__ = "0.1.0"

__all__ = [
    "SOAPSource",
    "SOAPSourceConfig",
    "RequestTemplate",
    "QueryResult",
    "SOAPSourceError",
    "SOAPFault",
    "SOAPConfigurationError",
    "SOAPQueryError",
    "create_connector",
    "get_connection",
    "test_connection",
]
