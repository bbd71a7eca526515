from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RequestTemplate(BaseModel):
    """Field names of the parameter envelope the remote API expects on every call."""

    model_config = ConfigDict(extra="ignore")

    login_field: str = "loginName"
    password_field: str = "loginPassword"
    org_field: str = "orgName"
    transaction_field: str = "transaction"
    wait_field: str = "wait"
    version_field: str = "version"
    id_field: str = "id"
    transaction_id: str = "test"
    command_path: tuple[str, ...] = Field(default=("TransactionCommandList", "TransactionCommand"), min_length=1)
    extra_fields: dict[str, Any] = Field(default_factory=dict)


class SOAPSourceConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    wsdl: str | None = None
    location: str = ""
    uri: str = ""
    login: str = ""
    password: str = ""
    authentication: Literal["basic", "digest"] = "basic"

    org_name: str | None = Field(default=None, alias="orgName")
    wait: bool | str | None = None
    version: str | None = None

    debug: bool = False
    trace: bool | None = None
    empty_set_code: int | str | None = None
    timeout_seconds: int = Field(default=30, ge=1)
    request_template: RequestTemplate = Field(default_factory=RequestTemplate)

    @field_validator("org_name", "version", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        # YAML/JSON configs often write `version: 2.1` unquoted
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _check_credentials(self) -> "SOAPSourceConfig":
        if self.login and not self.password:
            raise ValueError("Provide a password together with login for SOAP authentication.")
        return self

    @property
    def trace_enabled(self) -> bool:
        return self.debug if self.trace is None else self.trace
