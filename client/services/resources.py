"""
Resource hooks: bind the list controller and the authenticated layer to one portal resource.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

from client.services.base import ServiceBase
from client.services.list_sync import ListSyncController
from core.constants import (
    BUSINESSES_ENDPOINT,
    GALLERY_ENDPOINT,
    GENERAL_INFO_ENDPOINT,
    LATEST_ITEMS_LIMIT,
    NEWS_ENDPOINT,
)
from core.exceptions import APIError
from core.models.network import RequestState
from core.models.pagination import PagePayload, PageRequest, PageResult
from core.models.resources import Business, GalleryItem, GeneralInfo, News, ResourceItem
from core.types import GeneralInfoKind, HTTPMethod

logger = logging.getLogger(__name__)


class ResourceService[ItemT: ResourceItem](ServiceBase):
    """Public reads and authenticated mutations for one list resource."""

    endpoint: ClassVar[str]
    item_model: ClassVar[type[ResourceItem]]
    label: ClassVar[str]
    page_size_setting: ClassVar[str]

    def __init__(self, app) -> None:
        super().__init__(app)
        self.mutation_error: str | None = None
        self._mutations_in_flight = 0

    @property
    def default_page_size(self) -> int:
        return getattr(self.app.settings, self.page_size_setting)

    @property
    def is_mutating(self) -> bool:
        return self._mutations_in_flight > 0

    # ——— Leituras públicas ———
    def list_controller(
        self, page_size: int | None = None, auto_load: bool = True
    ) -> ListSyncController[ItemT]:
        """
        Create a list controller for this resource.

        Call `await controller.initialize()` once the list is mounted.

        Args:
            page_size: Items per page, defaults to the configured size
            auto_load: Whether `initialize` loads the first page
        """
        return ListSyncController(
            self.fetch_page,
            page_size or self.default_page_size,
            auto_load=auto_load,
            name=self.label,
        )

    async def fetch_page(self, page: PageRequest) -> PageResult[ItemT]:
        status = await self.app.api_client.request(self.endpoint, "GET", params=page.to_params())
        if not status.success:
            raise APIError.from_state(status, f"Failed to fetch {self.label}")
        try:
            return PagePayload.from_body(status.payload()).to_result(self.item_model)  # type: ignore[return-value]
        except ValidationError as e:
            raise APIError(f"Malformed {self.label} response: {e.error_count()} invalid field(s)") from e

    async def get_by_id(self, item_id: str) -> ItemT:
        status = await self.app.api_client.request(self.endpoint, "GET", params={"id": item_id})
        if not status.success:
            raise APIError.from_state(status, f"{self.label} not found")
        return self._parse_item(status.payload())

    async def latest(self, limit: int = LATEST_ITEMS_LIMIT) -> list[ItemT]:
        """First page only, without accumulation (home page widgets)."""
        page = await self.fetch_page(PageRequest(page_size=limit))
        return page.items

    # ——— Mutações autenticadas ———
    async def create(self, data: BaseModel | dict[str, Any]) -> RequestState:
        return await self._mutate("POST", data=self._dump(data))

    async def update(self, item_id: str, data: BaseModel | dict[str, Any]) -> RequestState:
        return await self._mutate("PUT", data=self._dump(data), params={"id": item_id})

    async def delete(
        self, item_id: str, sync: ListSyncController[ItemT] | None = None
    ) -> RequestState:
        """
        Delete an item, then reload `sync` from the first page if it succeeded.

        Args:
            item_id: ID of the item
            sync: List showing this resource, if any
        """
        status = await self._mutate("DELETE", params={"id": item_id})
        if status.success and sync is not None:
            await sync.refresh()
        return status

    async def _mutate(
        self,
        method: HTTPMethod,
        data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> RequestState:
        self.mutation_error = None
        self._mutations_in_flight += 1
        try:
            status = await self.app.requester.request(self.endpoint, method, data, params)
        finally:
            self._mutations_in_flight -= 1

        # auth terminal tags trigger the login redirect instead of an error message
        if not status.success and not status.is_auth_failure:
            self.mutation_error = status.error_message(f"Failed to {method.lower()} {self.label}")
            logger.error(f"Error on {method} {self.label}: {self.mutation_error}")
        return status

    def _parse_item(self, raw: Any) -> ItemT:
        try:
            return self.item_model.model_validate(raw)  # type: ignore[return-value]
        except ValidationError as e:
            raise APIError(f"Malformed {self.label} response: {e.error_count()} invalid field(s)") from e

    @staticmethod
    def _dump(data: BaseModel | dict[str, Any]) -> Any:
        if isinstance(data, BaseModel):
            return data.model_dump(by_alias=True, exclude_none=True)
        return data


class BusinessService(ResourceService[Business]):
    endpoint = BUSINESSES_ENDPOINT
    item_model = Business
    label = "umkm"
    page_size_setting = "businesses_page_size"


class NewsService(ResourceService[News]):
    endpoint = NEWS_ENDPOINT
    item_model = News
    label = "berita"
    page_size_setting = "news_page_size"


class GalleryService(ResourceService[GalleryItem]):
    endpoint = GALLERY_ENDPOINT
    item_model = GalleryItem
    label = "galeri"
    page_size_setting = "gallery_page_size"


class GeneralInfoService(ResourceService[GeneralInfo]):
    """General info entries are keyed by kind (`jenis`) rather than by id."""

    endpoint = GENERAL_INFO_ENDPOINT
    item_model = GeneralInfo
    label = "umum"
    page_size_setting = "general_info_page_size"

    async def get_by_kind(self, kind: GeneralInfoKind) -> GeneralInfo:
        status = await self.app.api_client.request(self.endpoint, "GET", params={"jenis": kind})
        if not status.success:
            raise APIError.from_state(status, f"{kind} not found")
        return self._parse_item(status.payload())

    async def replace_all(self, items: list[GeneralInfo] | list[dict[str, Any]]) -> RequestState:
        return await self._mutate("POST", data=[self._dump(item) for item in items])

    async def update_by_kind(
        self, kind: GeneralInfoKind, data: BaseModel | dict[str, Any]
    ) -> RequestState:
        return await self._mutate("PUT", data=self._dump(data), params={"jenis": kind})

    async def delete_by_kind(self, kind: GeneralInfoKind) -> RequestState:
        return await self._mutate("DELETE", params={"jenis": kind})

    async def infographic(self) -> GeneralInfo:
        return await self.get_by_kind("infografi")

    async def population(self) -> GeneralInfo:
        return await self.get_by_kind("penduduk")

    async def education_facilities(self) -> GeneralInfo:
        return await self.get_by_kind("saranaPendidikan")

    async def health_facilities(self) -> GeneralInfo:
        return await self.get_by_kind("saranaKesehatan")
