"""
Incremental cursor-paginated list synchronization.

One controller per rendered list. Pages are appended in server order
("load more"), and every fetch is stamped with an epoch so that a refresh
issued while an older fetch is still in flight is never overwritten by it.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from core.exceptions import APIError
from core.models.pagination import PageRequest, PageResult
from core.types import Cursor

logger = logging.getLogger(__name__)

type PageFetcher[T] = Callable[[PageRequest], Awaitable[PageResult[T]]]


@dataclass(frozen=True)
class ListSnapshot[T]:
    """Read-only projection for rendering."""

    items: tuple[T, ...]
    loading: bool
    error: str | None
    has_more: bool


class ListSyncController[T]:
    """Fetch, accumulate and refresh one cursor-paginated list."""

    def __init__(
        self,
        fetch_page: PageFetcher[T],
        page_size: int,
        auto_load: bool = True,
        name: str = "list",
    ) -> None:
        """
        Initialize a new instance of the ListSyncController class.

        Args:
            fetch_page: Fetches one page; failures of any kind end up in `error`
            page_size: Items per page, must be positive
            auto_load: Whether `initialize` loads the first page
            name: Label used in log messages
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")

        self.fetch_page = fetch_page
        self.page_size = page_size
        self.auto_load = auto_load
        self.name = name

        self._items: list[T] = []
        self._loading = False
        self._error: str | None = None
        self._has_more = True
        self._cursor: Cursor | None = None
        self._epoch = 0
        self._closed = False

    async def initialize(self) -> None:
        """Run the initial load when the controller was built with `auto_load`."""
        if self.auto_load:
            await self.load_more()

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def cursor(self) -> Cursor | None:
        return self._cursor

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> ListSnapshot[T]:
        return ListSnapshot(
            items=tuple(self._items),
            loading=self._loading,
            error=self._error,
            has_more=self._has_more,
        )

    async def load_more(self) -> None:
        """Append the next page. No-op while loading, once exhausted, or after close."""
        if self._closed or self._loading or not self._has_more:
            return
        await self._fetch(self._cursor)

    async def refresh(self) -> None:
        """
        Drop everything accumulated and load the first page again.

        Runs even if a load is in flight; that load's response becomes stale.
        Items are cleared before the request, so a failed refresh shows an
        empty list with the error.
        """
        if self._closed:
            return
        self._cursor = None
        self._items = []
        self._has_more = True
        await self._fetch(None)

    def close(self) -> None:
        """Tear down: responses still in flight will not touch the state."""
        self._closed = True

    async def _fetch(self, cursor: Cursor | None) -> None:
        self._epoch += 1
        epoch = self._epoch
        self._loading = True
        self._error = None

        try:
            page = await self.fetch_page(PageRequest(page_size=self.page_size, cursor=cursor))
        except APIError as e:
            self._fail(epoch, e.message)
            return
        except Exception as e:
            self._fail(epoch, str(e) or f"Failed to fetch {self.name}")
            return
        except asyncio.CancelledError:
            # the caller went away mid-fetch; the list must stay loadable
            if self._is_current(epoch):
                self._loading = False
            raise

        if not self._is_current(epoch):
            return

        self._items.extend(page.items)
        self._has_more = page.has_more
        self._cursor = page.next_cursor
        self._loading = False

    def _fail(self, epoch: int, message: str) -> None:
        if not self._is_current(epoch):
            return
        logger.error(f"Error fetching {self.name}: {message}")
        self._error = message
        self._loading = False

    def _is_current(self, epoch: int) -> bool:
        if self._closed:
            logger.debug(f"Dropping {self.name} response after close")
            return False
        if epoch != self._epoch:
            logger.debug(f"Dropping stale {self.name} response (epoch {epoch} < {self._epoch})")
            return False
        return True
