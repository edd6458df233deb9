"""Response classification.

The remote API reports failures two ways: a non-2xx HTTP status, or a 2xx
response whose body carries an error ``code``. Both become exceptions here;
anything else is returned untouched.
"""

from __future__ import annotations

from typing import Any, Mapping

from fut_client.adapters.session.base import TransportResponse
from fut_client.core.errors import ApplicationError, OriginalRequest, TransportError

ERROR_MARKER = "code"


def is_api_error(body: Any) -> bool:
    """Return True when a response body encodes an application error.

    Examples:
        >>> is_api_error({"code": "458", "reason": "Captcha Triggered"})
        True
        >>> is_api_error({"credits": 1200})
        False
        >>> is_api_error("plain text")
        False
    """
    return isinstance(body, Mapping) and body.get(ERROR_MARKER) is not None


def parse_error_code(value: Any) -> int | None:
    """Parse the error marker as an integer; None when it is not one.

    Examples:
        >>> parse_error_code("458")
        458
        >>> parse_error_code("458.0")
        458
        >>> parse_error_code("458.5") is None
        True
    """
    if isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def classify_response(response: TransportResponse, original_request: OriginalRequest) -> Any:
    """Return the body of a successful response or raise the matching error.

    Args:
        response: Status and parsed body of the HTTP response.
        original_request: URL and options the request was made with.

    Returns:
        The response body, verbatim.

    Raises:
        TransportError: If the status code is not 2xx.
        ApplicationError: If the body carries the error marker.
    """
    if not str(response.status_code).startswith("2"):
        raise TransportError(
            code="transport_error",
            message=f"API http error: {response.status_code} {response.status_message}",
            status_code=response.status_code,
            status_message=response.status_message,
            body=response.body,
            original_request=original_request,
        )

    body = response.body
    if is_api_error(body):
        code = parse_error_code(body[ERROR_MARKER])
        reason = body.get("reason") or body.get("message") or ""
        raise ApplicationError(
            code=code,
            message=f"API error {body[ERROR_MARKER]}: {reason}".rstrip(": "),
            body=body,
            original_request=original_request,
        )

    return body
