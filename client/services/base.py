from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from client.app import PortalClient


class ServiceBase:
    def __init__(self, app: "PortalClient") -> None:
        self.app = app
