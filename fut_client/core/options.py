"""Per-call request options.

The remote API only accepts POST; the semantic verb travels in the
``X-HTTP-Method-Override`` header and the server applies it.
"""

from __future__ import annotations

from typing import Any, Mapping, TypedDict

METHOD_OVERRIDE_HEADER = "X-HTTP-Method-Override"
TRANSPORT_METHOD = "POST"


class RequestOptions(TypedDict, total=False):
    """Options accepted by ``Client.api``.

    ``method_override`` and ``override_limiter`` are consumed by the client;
    the remaining keys are forwarded to the HTTP transport.
    """

    method_override: str
    headers: dict[str, str]
    override_limiter: bool
    params: dict[str, Any]
    json: Any
    content: bytes | str
    data: dict[str, Any]
    timeout: float


DEFAULT_OPTIONS: RequestOptions = {
    "method_override": "GET",
    "headers": {},
}

# Options interpreted by the client and never sent to the transport.
CLIENT_OPTION_KEYS = frozenset({"method_override", "override_limiter"})


def merged_options(
    defaults: Mapping[str, Any],
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge caller options over defaults without mutating either.

    Headers are merged key by key; every other option is replaced.

    Examples:
        >>> merged_options(DEFAULT_OPTIONS, {"method_override": "PUT"})
        {'method_override': 'PUT', 'headers': {}}
        >>> merged_options({"headers": {"A": "1"}}, {"headers": {"B": "2"}})
        {'headers': {'A': '1', 'B': '2'}}
    """
    overrides = overrides or {}
    result = {**defaults, **overrides}
    result["headers"] = {**defaults.get("headers", {}), **(overrides.get("headers") or {})}
    return result


def build_transport_request(url: str, options: Mapping[str, Any]) -> dict[str, Any]:
    """Turn merged options into the request actually sent.

    The transport verb is forced to POST and the semantic verb moves into
    the method override header, replacing any caller-supplied variant of it.
    """
    headers = {
        name: value
        for name, value in options.get("headers", {}).items()
        if name.lower() != METHOD_OVERRIDE_HEADER.lower()
    }
    headers[METHOD_OVERRIDE_HEADER] = options.get("method_override", DEFAULT_OPTIONS["method_override"])

    request = {k: v for k, v in options.items() if k not in CLIENT_OPTION_KEYS}
    request.update(url=url, method=TRANSPORT_METHOD, headers=headers)
    return request
