from client.services.auth import AuthService
from client.services.authenticated import AuthenticatedRequester
from client.services.list_sync import ListSnapshot, ListSyncController
from client.services.resources import (
    BusinessService,
    GalleryService,
    GeneralInfoService,
    NewsService,
    ResourceService,
)

__all__ = [
    "AuthService",
    "AuthenticatedRequester",
    "BusinessService",
    "GalleryService",
    "GeneralInfoService",
    "ListSnapshot",
    "ListSyncController",
    "NewsService",
    "ResourceService",
]
