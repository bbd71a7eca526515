"""Exceptions raised by the SOAP data source."""


class SOAPSourceError(RuntimeError):
    pass


class SOAPFault(SOAPSourceError):
    """A SOAP or transport fault while creating the client."""

    def __init__(self, code: str | None, message: str):
        super().__init__(f"{code}: {message}" if code else message)
        self.code = code
        self.message = message


class SOAPConfigurationError(SOAPSourceError):
    """The source could not be set up from its configuration; the instance is unusable."""

    def __init__(self, fault_code: str | None, fault_message: str):
        super().__init__(f"SOAP FAULT - Fault Code: {fault_code}, Fault String: {fault_message}")
        self.fault_code = fault_code
        self.fault_message = fault_message


class SOAPQueryError(SOAPSourceError):
    def __init__(self, message: str, code: int | str | None = None, kind: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
