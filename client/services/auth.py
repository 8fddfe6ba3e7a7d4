from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from client.services.base import ServiceBase
from core.models.auth import CredentialPair, LoginRequest, RefreshRequest, RefreshResponse
from core.models.network import AuthFailure

logger = logging.getLogger(__name__)


class AuthService(ServiceBase):
    """Gerencia login, logout e refresh das credenciais do portal."""

    def __init__(self, *args) -> None:
        super().__init__(*args)
        self.errors: dict[str, str | None] = {
            "login": None,
            "refresh": None,
        }
        self.on_login_success_callbacks: list[Callable[[CredentialPair], Any]] = []
        self.on_login_error_callbacks: list[Callable[[str], Any]] = []
        self.on_logout_callbacks: list[Callable[[], Any]] = []
        self.on_auth_required_callbacks: list[Callable[[AuthFailure], Any]] = []

    def register_login_success_callback(self, cb: Callable[[CredentialPair], Any]) -> None:
        self.on_login_success_callbacks.append(cb)

    def register_login_error_callback(self, cb: Callable[[str], Any]) -> None:
        self.on_login_error_callbacks.append(cb)

    def register_logout_callback(self, cb: Callable[[], Any]) -> None:
        self.on_logout_callbacks.append(cb)

    def register_auth_required_callback(self, cb: Callable[[AuthFailure], Any]) -> None:
        """`cb` receives the terminal tag and is expected to navigate to the login surface."""
        self.on_auth_required_callbacks.append(cb)

    @property
    def is_logged_in(self) -> bool:
        return self.app.token_store.access_token is not None

    # ——— Métodos de ação ———
    async def login(self, username: str, password: str) -> bool:
        self.errors["login"] = None
        status = await self.app.api_client.request(
            self.app.settings.auth_login_path,
            "POST",
            LoginRequest(username=username, password=password).model_dump(),
        )
        if not status.success:
            self._handle_failed_login(status.error_message("Login failed"))
            return False

        try:
            credentials = CredentialPair.model_validate(status.payload())
        except ValidationError as e:
            logger.error(f"Login response without a credential pair: {e}")
            self._handle_failed_login("Malformed login response")
            return False

        self.app.token_store.set_token(credentials)
        self._notify(self.on_login_success_callbacks, credentials)
        return True

    async def logout(self) -> None:
        token = self.app.token_store.access_token
        self.app.token_store.clear()
        if token:
            status = await self.app.api_client.request(
                self.app.settings.auth_logout_path, "POST", token=token
            )
            if not status.success:
                # the session is gone locally either way
                logger.warning(f"Server-side logout failed: {status.error_message()}")
        self._notify(self.on_logout_callbacks)

    async def refresh(self) -> CredentialPair | None:
        """
        Exchange the stored refresh token for a new pair.

        One network call at most; on success the new pair replaces the stored one,
        on failure the store is left untouched.

        Returns:
            The new credential pair, or None if the refresh failed
        """
        self.errors["refresh"] = None
        refresh_token = self.app.token_store.refresh_token
        if not refresh_token:
            self.errors["refresh"] = "No refresh token available"
            return None

        status = await self.app.api_client.request(
            self.app.settings.auth_refresh_path,
            "POST",
            RefreshRequest(refresh_token=refresh_token).model_dump(by_alias=True),
        )
        if not status.success:
            self.errors["refresh"] = status.error_message("Token refresh failed")
            logger.warning(f"Token refresh rejected: {self.errors['refresh']}")
            return None

        try:
            refreshed = RefreshResponse.model_validate(status.payload())
        except ValidationError as e:
            self.errors["refresh"] = "Malformed refresh response"
            logger.error(f"Refresh response without an access token: {e}")
            return None

        credentials = CredentialPair(
            access_token=refreshed.access_token,
            refresh_token=refreshed.refresh_token or refresh_token,
        )
        self.app.token_store.set_token(credentials)
        return credentials

    def notify_auth_required(self, tag: AuthFailure) -> None:
        logger.warning(f"Authentication required: {tag}")
        self._notify(self.on_auth_required_callbacks, tag)

    # ——— Erros ———
    def get_login_error(self) -> str | None:
        return self.errors["login"]

    def _handle_failed_login(self, msg: str) -> None:
        self.errors["login"] = msg
        self._notify(self.on_login_error_callbacks, msg)

    @staticmethod
    def _notify(callbacks: list[Callable[..., Any]], *args: Any) -> None:
        for cb in callbacks:
            try:
                cb(*args)
            except Exception as e:
                logger.error(f"Error in auth callback {cb!r}: {e}")
