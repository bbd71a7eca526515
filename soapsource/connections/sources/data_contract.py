from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import SOAPQueryError

ErrorKind = Literal["not_connected", "invalid_arguments", "transport", "application"]


class QueryResult(BaseModel):
    """Outcome of one data-source query: the payload on success, a tagged error otherwise."""

    model_config = ConfigDict(extra="ignore")

    method: str | None = None
    success: bool
    payload: Any = None
    result_code: int | str | None = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    metadata: dict[str, str | int | float | bool | None] = Field(default_factory=dict)

    def raise_for_error(self) -> "QueryResult":
        if not self.success:
            raise SOAPQueryError(self.error_message or "SOAP query failed", code=self.result_code, kind=self.error_kind)
        return self
