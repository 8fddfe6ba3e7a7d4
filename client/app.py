"""
Portal client - application factory
"""

import httpx

from client.api import APIClient
from client.services import (
    AuthenticatedRequester,
    AuthService,
    BusinessService,
    GalleryService,
    GeneralInfoService,
    NewsService,
)
from client.session import TokenStore
from core.config import Settings, get_settings


class PortalClient:
    """Wires the HTTP client, the credential store and the resource services together."""

    api_client: APIClient
    token_store: TokenStore
    auth_service: AuthService
    requester: AuthenticatedRequester
    businesses: BusinessService
    news: NewsService
    gallery: GalleryService
    general_info: GeneralInfoService

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.api_client = APIClient.from_settings(self.settings, transport=transport)
        self.token_store = TokenStore(self.settings.session_file)
        self.auth_service = AuthService(self)
        self.requester = AuthenticatedRequester(self)

        self.businesses = BusinessService(self)
        self.news = NewsService(self)
        self.gallery = GalleryService(self)
        self.general_info = GeneralInfoService(self)

    async def aclose(self) -> None:
        await self.api_client.aclose()

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
