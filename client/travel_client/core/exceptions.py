"""Client-side exceptions for the travel booking API.

Error bodies are accepted in either of the two shapes the backend emits: the
API envelope (``{"success": false, "message": ..., "errors": [...]}``) or
RFC 9457 Problem Details (``{"title": ..., "detail": ..., "status": ...}``).

https://tools.ietf.org/rfc/rfc9457.txt
"""

from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as SchemaValidationError

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


class ApiError(Exception):
    """
    Base exception for every failure surfaced by the API client.

    Carries the same fields as a Problem Details object so callers can
    inspect a failure without caring which body shape the server used.
    """

    def __init__(
        self,
        title: str,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        errors: Optional[List[str]] = None,
        body: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the API error.

        Args:
            title: Short, human-readable summary of the problem type
            detail: Human-readable explanation specific to this occurrence
            status_code: HTTP status code, if a response was received
            errors: Individual validation or application messages
            body: Decoded response body, if any
        """
        self.title = title
        self.detail = detail
        self.status_code = status_code
        self.errors = errors or []
        self.body = body or {}
        super().__init__(detail or title)

    @property
    def message(self) -> str:
        """Return the most specific human-readable message available."""
        return self.detail or self.title


class TransportError(ApiError):
    """Exception for network or transport failures (no usable response)."""

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(title="Network Error", detail=detail)
        self.cause = cause


class ApplicationError(ApiError):
    """Exception for ``success: false`` envelopes returned with a 2xx status."""

    def __init__(self, detail: str, status_code: Optional[int] = None, errors: Optional[List[str]] = None):
        super().__init__(
            title="Request Failed",
            detail=detail,
            status_code=status_code,
            errors=errors,
        )


class ValidationError(ApiError):
    """Exception for request validation errors (400/422)."""


class AuthenticationError(ApiError):
    """Exception for missing or rejected credentials (401)."""


class AuthorizationError(ApiError):
    """Exception for insufficient permissions (403)."""


class NotFoundError(ApiError):
    """Exception for resource not found errors (404)."""


class ConflictError(ApiError):
    """Exception for resource conflict errors (409)."""


class RateLimitError(ApiError):
    """Exception for rate limit errors (429)."""

    def __init__(self, *args: Any, retry_after: Optional[int] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.retry_after = retry_after


class ServerError(ApiError):
    """Exception for 5xx responses."""


_STATUS_EXCEPTIONS = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}

_STATUS_TITLES = {
    400: "Validation Error",
    401: "Authentication Required",
    403: "Access Forbidden",
    404: "Resource Not Found",
    409: "Resource Conflict",
    422: "Validation Error",
    429: "Rate Limit Exceeded",
}


def _decode_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def error_from_response(response: httpx.Response) -> ApiError:
    """
    Build the exception matching a non-2xx response.

    Args:
        response: httpx response with an error status

    Returns:
        ApiError: The most specific subclass for the status code
    """
    status_code = response.status_code
    body = _decode_body(response)

    title = body.get("title") or _STATUS_TITLES.get(status_code)
    if not title:
        title = "Server Error" if status_code >= 500 else "API Request Failed"

    detail = body.get("message") or body.get("detail")
    if not isinstance(detail, str):
        detail = None

    errors = body.get("errors")
    if not isinstance(errors, list):
        # Problem Details carries field errors as violations
        violations = body.get("violations") or []
        errors = [v.get("message", "") for v in violations if isinstance(v, dict)]
    errors = [str(e) for e in errors]

    if status_code >= 500:
        return ServerError(title=title, detail=detail, status_code=status_code, errors=errors, body=body)

    exc_class = _STATUS_EXCEPTIONS.get(status_code, ApiError)
    if exc_class is RateLimitError:
        retry_after = response.headers.get("Retry-After")
        return RateLimitError(
            title=title,
            detail=detail,
            status_code=status_code,
            errors=errors,
            body=body,
            retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
        )
    return exc_class(title=title, detail=detail, status_code=status_code, errors=errors, body=body)


def extract_error_message(error: BaseException) -> str:
    """
    Normalize any exception into a user-facing message.

    Preference order: the envelope ``message``, the problem ``detail``,
    the exception text, then a generic fallback. Pydantic validation
    errors are flattened to ``Invalid <Model>: <field>: <problem>; ...``.
    """
    if isinstance(error, ApiError):
        message = error.body.get("message")
        if isinstance(message, str) and message:
            return message
        if error.detail:
            return error.detail
        return error.title or DEFAULT_ERROR_MESSAGE

    if isinstance(error, SchemaValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in e['loc']) or 'value'}: {e['msg']}" for e in error.errors()
        )
        return f"Invalid {error.title}: {problems}"

    text = str(error)
    return text if text else DEFAULT_ERROR_MESSAGE
