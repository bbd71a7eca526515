"""Build the parameter envelope sent with every SOAP query."""

from typing import Any

from .config import RequestTemplate, SOAPSourceConfig


def _nest(path: tuple[str, ...], value: Any) -> dict[str, Any]:
    for key in reversed(path[1:]):
        value = {key: value}
    return {path[0]: value}


def build_envelope(config: SOAPSourceConfig, payload: Any, command: str | None = None) -> dict[str, Any]:
    """
    Apply the configured request template to one call.

    With a command the payload is keyed by it inside the command map, otherwise the
    payload itself becomes the command map.
    """
    template: RequestTemplate = config.request_template
    commands = payload if command is None else {command: payload}

    transaction = {
        template.wait_field: config.wait,
        template.version_field: config.version,
        template.id_field: template.transaction_id,
    }
    transaction.update(_nest(template.command_path, commands))

    envelope = dict(template.extra_fields)
    envelope[template.login_field] = config.login
    envelope[template.password_field] = config.password
    envelope[template.org_field] = config.org_name
    envelope[template.transaction_field] = transaction
    return envelope
