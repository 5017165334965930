from typing import Any, Dict, Optional


class ApiError(Exception):
    """Error that maps to a JSON response of the form ``{"error": ...}``."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
        **extra: Any,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.headers = dict(headers or {})
        self.extra = extra

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class ValidationError(ApiError):
    status_code = 400


class ConfigurationError(ApiError):
    status_code = 500


class UpstreamError(ApiError):
    status_code = 502


class ServerError(ApiError):
    status_code = 500
