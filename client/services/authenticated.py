"""
Authenticated requests with a single refresh-and-retry on expired credentials.

The flow is a small state machine so the bounds can be checked by reading
the transitions:

    FIRST_ATTEMPT --auth failure--> REFRESHING --ok--> SECOND_ATTEMPT
    REFRESHING --failed--> TERMINAL(TOKEN_REFRESH_FAILED)
    SECOND_ATTEMPT --auth failure--> TERMINAL(TOKEN_STILL_INVALID)
    FIRST_ATTEMPT / SECOND_ATTEMPT --anything else--> return the response

and a missing access token goes straight to TERMINAL(NO_TOKEN).
At most two network attempts and one refresh per call.
"""

import logging
import time
from enum import Enum, auto
from typing import Any

from client.services.base import ServiceBase
from core.models.network import AuthFailure, RequestState
from core.types import HTTPMethod

logger = logging.getLogger(__name__)


class AttemptPhase(Enum):
    FIRST_ATTEMPT = auto()
    REFRESHING = auto()
    SECOND_ATTEMPT = auto()


class AuthenticatedRequester(ServiceBase):
    """Bearer-authenticated calls for mutations and admin reads."""

    def is_auth_failure(self, state: RequestState) -> bool:
        return state.status_code in self.app.settings.auth_failure_status_codes

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod = "GET",
        data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> RequestState:
        """
        Do an authenticated request, recovering once from an expired token.

        Args:
            endpoint: API endpoint
            method: HTTP method
            data: JSON body to send
            params: Query string parameters

        Returns:
            The response state unchanged (success or application error), or a
            failed state tagged with the terminal AuthFailure
        """
        token = self.app.token_store.access_token
        if not token:
            return self._terminal(AuthFailure.NO_TOKEN)

        phase = AttemptPhase.FIRST_ATTEMPT

        while True:
            if phase is AttemptPhase.FIRST_ATTEMPT:
                result = await self.app.api_client.request(
                    endpoint, method, data, params, token=token
                )
                if not self.is_auth_failure(result):
                    return result
                phase = AttemptPhase.REFRESHING

            elif phase is AttemptPhase.REFRESHING:
                logger.info(f"Access token rejected on {method} {endpoint}, refreshing")
                credentials = await self.app.auth_service.refresh()
                if credentials is None:
                    return self._terminal(AuthFailure.TOKEN_REFRESH_FAILED)
                token = credentials.access_token
                phase = AttemptPhase.SECOND_ATTEMPT

            elif phase is AttemptPhase.SECOND_ATTEMPT:
                result = await self.app.api_client.request(
                    endpoint, method, data, params, token=token
                )
                if self.is_auth_failure(result):
                    return self._terminal(AuthFailure.TOKEN_STILL_INVALID)
                return result

    def _terminal(self, tag: AuthFailure) -> RequestState:
        self.app.auth_service.notify_auth_required(tag)
        return RequestState(
            timestamp=time.time(),
            success=False,
            error={"message": tag.value},
            auth_failure=tag,
        )
