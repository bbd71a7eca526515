from .base_source import BaseDataSource
from .data_contract import QueryResult
from .exceptions import SOAPConfigurationError, SOAPFault, SOAPQueryError, SOAPSourceError
from .factory import create_connector, load_connector_config

__all__ = [
    "BaseDataSource",
    "QueryResult",
    "SOAPSourceError",
    "SOAPFault",
    "SOAPConfigurationError",
    "SOAPQueryError",
    "load_connector_config",
    "create_connector",
]
