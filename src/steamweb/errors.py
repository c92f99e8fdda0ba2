"""Error taxonomy for the Steam Web API client.

Every failure raised by this package derives from ``SteamWebError`` so callers
can branch on category. Transport failures (``requests.RequestException``) and
JSON decode errors are not wrapped; they reach the caller unchanged.
"""

from typing import Any, Dict, Optional


class SteamWebError(Exception):
    """Base exception for all steamweb errors.

    Attributes:
        message: Human-readable error message
        error_code: Short code for programmatic handling
        context: Additional context information
    """

    error_code = "steamweb_error"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class RequiredParamError(SteamWebError, ValueError):
    """A mandatory request parameter is missing (raised before any network call)."""

    error_code = "required_param"

    def __init__(self, param: str) -> None:
        super().__init__(f"param is required: {param}", context={"param": param})
        self.param = param


class ConfigUndefinedParamError(SteamWebError, ValueError):
    """A configuration parameter needed by an enabled client is not defined."""

    error_code = "config_undefined_param"

    def __init__(self, param: str) -> None:
        super().__init__(f"config param is not defined: {param}", context={"param": param})
        self.param = param


class WrongStatusCodeError(SteamWebError):
    """The remote endpoint answered with a non-200 status."""

    error_code = "wrong_status_code"

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(
            f"wrong status code: {status_code} {reason}".rstrip(),
            context={"status_code": status_code, "reason": reason},
        )
        self.status_code = status_code
        self.reason = reason


class EmptyResponseError(SteamWebError):
    """The transport returned no response object."""

    error_code = "empty_response"

    def __init__(self, uri: Optional[str] = None) -> None:
        super().__init__("empty response", context={"uri": uri} if uri else None)
