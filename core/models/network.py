from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from core.constants import UNKNOWN_ERROR_MESSAGE


class AuthFailure(StrEnum):
    """Terminal outcomes of the authenticated request flow; all of them mean "go log in"."""

    NO_TOKEN = "NO_TOKEN"
    TOKEN_REFRESH_FAILED = "TOKEN_REFRESH_FAILED"
    TOKEN_STILL_INVALID = "TOKEN_STILL_INVALID"


@dataclass
class RequestState:
    timestamp: float  # Time when the request completed
    success: bool
    data: Any = None  # Decoded JSON body, for successes and application errors alike
    error: dict | None = None  # Error information when failed
    status_code: int | None = None  # None when the server was never reached
    auth_failure: AuthFailure | None = None

    @property
    def is_auth_failure(self) -> bool:
        """Failures that must redirect to login instead of showing an error."""
        return self.auth_failure is not None

    def error_message(self, fallback: str = UNKNOWN_ERROR_MESSAGE) -> str:
        if self.success:
            return ""
        if not self.error:
            return fallback
        if self.error.get("message"):
            return self.error["message"]
        if self.error.get("detail"):
            return self.error["detail"]
        return fallback

    def payload(self) -> Any:
        """Unwrap the `{success, data}` envelope, returning the body itself when it has none."""
        if isinstance(self.data, dict) and "data" in self.data:
            return self.data["data"]
        return self.data
