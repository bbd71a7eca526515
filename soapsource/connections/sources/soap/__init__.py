from .config import RequestTemplate, SOAPSourceConfig
from .connector import GENERIC_API_ERROR, SOAPSource, get_soap_source, test_soap_connection
from .envelope import build_envelope

__all__ = [
    "RequestTemplate",
    "SOAPSourceConfig",
    "SOAPSource",
    "GENERIC_API_ERROR",
    "build_envelope",
    "get_soap_source",
    "test_soap_connection",
]
