from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..._config import load_connection_config
from ..._logging import get_logger, redact_config
from ..base_source import BaseDataSource
from ..data_contract import ErrorKind, QueryResult
from ..exceptions import SOAPConfigurationError, SOAPFault
from .config import SOAPSourceConfig
from .envelope import build_envelope

GENERIC_API_ERROR = "Could not retrieve message from API error object"
_MISSING_ZEEP = "zeep is not installed. Add it to requirements to enable SOAP support."
_MISSING_WSDL = "No WSDL configured. Set 'wsdl' to the service description URL or path."
_NOT_CONNECTED = "SOAP source is not connected. Call connect() first."

# The remote API reports error text under either spelling depending on its version.
_API_ERROR_MESSAGE_PATHS = (
    ("ErrorDetails", "ErrorMsg"),
    ("errorDetails", "errorMessage"),
)


def _dig(value: Any, *keys: str) -> Any:
    for key in keys:
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(key)
        else:
            value = getattr(value, key, None)
    return value


def _transaction_result(result: Any) -> Any:
    """
    Locate the block carrying ``resultCode``.

    zeep strips the response wrapper and, when the wrapper holds a single element, returns
    that element's value, so ``transactionResult`` may be the result itself.
    """
    nested = _dig(result, "transactionResult")
    if nested is not None:
        return nested
    if _dig(result, "resultCode") is not None:
        return result
    return None


def _fault_details(exc: Exception) -> tuple[str, str]:
    """Return (code, message) for zeep faults, transport errors and I/O errors alike."""
    code = getattr(exc, "code", None) or getattr(exc, "status_code", None) or type(exc).__name__
    message = getattr(exc, "message", None) or str(exc)
    return str(code), str(message)


def _is_success_code(result_code: Any, empty_set_code: int | str | None) -> bool:
    if result_code in (None, ""):
        return True
    if empty_set_code is not None and str(result_code) == str(empty_set_code):
        return True
    try:
        return int(result_code) == 0
    except (TypeError, ValueError):
        return False


class SOAPSource(BaseDataSource):
    description = "Soap Client DataSource"

    def __init__(
        self,
        wsdl: str | None = None,
        login: str | None = None,
        password: str | None = None,
        *,
        config: dict | None = None,
        file_path: str | Path | None = None,
        env_prefix: str = "SOAP",
        autoconnect: bool = True,
    ):
        merged_config = load_connection_config(
            config,
            file_path=file_path,
            env_prefix=env_prefix,
            overrides={
                "wsdl": wsdl,
                "login": login,
                "password": password,
            },
        )
        self.config = SOAPSourceConfig.model_validate(merged_config)
        self.logger = get_logger("sources.soap.connector")
        self.transaction_logger = get_logger("transaction")

        self.client = None
        self.service = None
        self.history = None
        self.connected = False
        self.error: str | None = None

        if autoconnect:
            try:
                connected = self.connect()
            except SOAPFault as fault:
                raise SOAPConfigurationError(fault.code, fault.message) from fault
            if not connected:
                raise SOAPConfigurationError(None, self.error or "SOAP client could not be created")

    def connect(self) -> bool:
        self._reset()
        self.logger.info("Connecting SOAP source with config=%s", redact_config(self.config.model_dump()))

        try:
            from requests import RequestException, Session
            from requests.auth import HTTPBasicAuth, HTTPDigestAuth
            from zeep import Client
            from zeep.exceptions import Error as ZeepError
            from zeep.plugins import HistoryPlugin
            from zeep.transports import Transport
        except ImportError:
            self.error = _MISSING_ZEEP
            self.show_error()
            return False

        if not self.config.wsdl:
            self.error = _MISSING_WSDL
            self.show_error()
            return False

        session = Session()
        if self.config.login:
            auth_class = HTTPDigestAuth if self.config.authentication == "digest" else HTTPBasicAuth
            session.auth = auth_class(self.config.login, self.config.password)

        history = HistoryPlugin() if self.config.trace_enabled else None
        transport = Transport(
            session=session,
            timeout=self.config.timeout_seconds,
            operation_timeout=self.config.timeout_seconds,
        )

        try:
            client = Client(
                wsdl=self.config.wsdl,
                transport=transport,
                plugins=[history] if history is not None else [],
            )
            service = self._bind_service(client)
        except (ZeepError, RequestException, OSError) as exc:
            code, message = _fault_details(exc)
            self.logger.error("SOAP client creation failed for wsdl=%s: [%s] %s", self.config.wsdl, code, message)
            raise SOAPFault(code, message) from exc

        self.client = client
        self.service = service
        self.history = history
        self.connected = self.client is not None
        self.logger.info("SOAP source connected")
        return self.connected

    def close(self) -> bool:
        self.logger.info("Closing SOAP source")
        self._reset()
        return True

    def list_sources(self) -> list[str]:
        self._require_client()

        signatures: list[str] = []
        for service in self.client.wsdl.services.values():
            for port in service.ports.values():
                for operation in port.binding._operations.values():
                    signature = str(operation)
                    if signature not in signatures:
                        signatures.append(signature)
        return signatures

    def query(self, method: str, payload: Any = None, command: str | None = None) -> QueryResult:
        self.error = None

        if not self.connected:
            return self._failure(method, "not_connected", _NOT_CONNECTED)

        if not method or not payload:
            return self._failure(method, "invalid_arguments", "query needs a SOAP method name and a non-empty payload.")

        from requests import RequestException
        from zeep.exceptions import Error as ZeepError
        from zeep.helpers import serialize_object

        envelope = build_envelope(self.config, payload, command)
        self.transaction_logger.info("API query data before sending: %s", redact_config(envelope))

        try:
            operation = getattr(self.service, method)
        except AttributeError:
            return self._failure(method, "invalid_arguments", f"SOAP method '{method}' not found in WSDL service.")

        try:
            response = operation(**envelope)
        except (ZeepError, RequestException) as exc:
            code, message = _fault_details(exc)
            self._log_exchange()
            return self._failure(method, "transport", message, result_code=code)
        except (TypeError, ValueError) as exc:
            # zeep rejects envelope keys the WSDL signature does not declare
            return self._failure(method, "invalid_arguments", str(exc))

        self._log_exchange()
        result = serialize_object(response, target_cls=dict)

        result_code = _dig(_transaction_result(result), "resultCode")
        if not _is_success_code(result_code, self.config.empty_set_code):
            return self._failure(
                method,
                "application",
                self._api_error_message(result),
                result_code=result_code,
                payload=result,
            )

        return QueryResult(
            method=method,
            success=True,
            payload=result,
            result_code=result_code,
            metadata=self._metadata(method, command),
        )

    def get_request(self) -> str | None:
        self._require_client()
        return self._traced_envelope("last_sent")

    def get_response(self) -> str | None:
        self._require_client()
        return self._traced_envelope("last_received")

    def get_request_headers(self) -> dict | None:
        self._require_client()
        sent = self._traced_entry("last_sent")
        return dict(sent["http_headers"]) if sent else None

    def show_error(self, result: Any = None) -> None:
        if not self.config.debug:
            return
        if self.error:
            self.logger.warning("SOAP Error: %s", self.error)
        if result:
            self.logger.warning("Result: %s", result)

    def _bind_service(self, client: Any) -> Any:
        if not self.config.location:
            return client.service

        binding_name = self.config.uri or next(iter(client.wsdl.bindings), None)
        if binding_name is None:
            raise SOAPFault("Client", "WSDL defines no binding to attach the service location to")

        self.logger.info("Binding %s to location %s", binding_name, self.config.location)
        return client.create_service(binding_name, self.config.location)

    def _reset(self) -> None:
        self.client = None
        self.service = None
        self.history = None
        self.connected = False

    def _require_client(self) -> None:
        if self.client is None:
            raise RuntimeError(_NOT_CONNECTED)

    def _traced_entry(self, attribute: str) -> dict | None:
        if self.history is None:
            return None
        try:
            return getattr(self.history, attribute)
        except IndexError:
            # HistoryPlugin indexes an empty buffer before the first call
            return None

    def _traced_envelope(self, attribute: str) -> str | None:
        entry = self._traced_entry(attribute)
        if not entry:
            return None

        from lxml import etree

        return etree.tostring(entry["envelope"], encoding="unicode")

    def _log_exchange(self) -> None:
        headers = self.get_request_headers()
        self.transaction_logger.debug("SOAP Last Request: %s", self.get_request())
        self.transaction_logger.debug("SOAP Last Response: %s", self.get_response())
        self.transaction_logger.debug("SOAP Last Request Headers: %s", redact_config(headers) if headers else headers)

    def _api_error_message(self, result: Any) -> str:
        transaction_result = _transaction_result(result)
        for path in _API_ERROR_MESSAGE_PATHS:
            message = _dig(transaction_result, *path)
            if message:
                return str(message)
        return GENERIC_API_ERROR

    def _metadata(self, method: str | None, command: str | None = None) -> dict[str, str | None]:
        return {
            "wsdl": self.config.wsdl,
            "location": self.config.location or None,
            "method": method or None,
            "command": command,
        }

    def _failure(
        self,
        method: str | None,
        kind: ErrorKind,
        message: str,
        *,
        result_code: int | str | None = None,
        payload: Any = None,
    ) -> QueryResult:
        self.error = message
        self.logger.warning("SOAP query method=%s failed (%s): %s", method, kind, message)
        self.show_error(payload)
        return QueryResult(
            method=method or None,
            success=False,
            payload=payload,
            result_code=result_code,
            error_kind=kind,
            error_message=message,
            metadata=self._metadata(method),
        )


def get_soap_source(**kwargs) -> SOAPSource:
    """Return a connected SOAP source; configuration failures raise SOAPConfigurationError."""
    return SOAPSource(**kwargs)


def test_soap_connection(*, raise_on_error: bool = False, **kwargs) -> bool:
    """Connect, read the WSDL operations and close again."""
    source = SOAPSource(autoconnect=False, **kwargs)
    try:
        return source.connect() and bool(source.list_sources())
    except SOAPFault:
        if raise_on_error:
            raise
        return False
    finally:
        source.close()
