from core.models.network import AuthFailure, RequestState


class APIError(Exception):
    """A request to the portal API failed (transport, parse or application error)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @classmethod
    def from_state(cls, state: RequestState, fallback: str) -> "APIError":
        """
        Build the exception matching a failed request state.

        Args:
            state: The failed request
            fallback: Message to use when the server sent none

        Returns:
            AuthenticationRequired for terminal auth failures, APIError otherwise
        """
        if state.auth_failure is not None:
            return AuthenticationRequired(state.auth_failure)
        return cls(state.error_message(fallback), state.status_code)


class AuthenticationRequired(APIError):
    """The authenticated flow ended on a terminal tag; the user must log in again."""

    def __init__(self, tag: AuthFailure) -> None:
        super().__init__(tag.value)
        self.tag = tag
