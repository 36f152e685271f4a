"""Bridge between inbound trigger requests and the debounce registry."""

import json
from collections.abc import Iterable

from app.logger import logger
from app.models import TriggerResponse, WebhookTarget
from app.registry import DebounceRegistry


def make_request_key(method: str, url: str, request_id: str | None = None) -> str:
    return request_id or f"{method} {url}"


def format_seconds(seconds: float) -> str:
    """Render a duration as configured: whole numbers without a fraction."""
    if float(seconds).is_integer():
        return str(int(seconds))
    return repr(float(seconds))


def parse_headers(params: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Collect forwarded headers from query parameters.

    Accepts ``headers[Name]=value`` pairs and a plain ``headers`` parameter
    holding a JSON object. Later values win.
    """
    headers: dict[str, str] = {}
    for name, value in params:
        if name.startswith("headers[") and name.endswith("]"):
            header = name[len("headers["):-1]
            if header:
                headers[header] = value
        elif name == "headers" and value:
            try:
                decoded = json.loads(value)
            except json.JSONDecodeError:
                logger.warning(f"Ignoring malformed headers parameter: {value!r}")
                continue
            if not isinstance(decoded, dict):
                logger.warning(f"Ignoring non-object headers parameter: {value!r}")
                continue
            headers.update({str(k): str(v) for k, v in decoded.items()})
    return headers


def handle_trigger(
    registry: DebounceRegistry,
    url: str | None,
    method: str | None,
    headers: dict[str, str] | None = None,
    request_id: str | None = None,
    now: float | None = None,
) -> TriggerResponse:
    if not url:
        return TriggerResponse(success=False, message="url is required")
    if not method:
        return TriggerResponse(success=False, message="method is required")

    target = WebhookTarget(url=url, method=method, headers=headers or {})
    key = make_request_key(method, url, request_id)
    sent_now = registry.register_trigger(key, target, now=now)

    message = f"Sending request in {format_seconds(registry.window)}s"
    if sent_now:
        message += " and just now"
    return TriggerResponse(success=True, message=message)
