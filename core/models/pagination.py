"""Cursor pagination shapes shared by every list resource."""

import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.types import Cursor


@dataclass(frozen=True)
class PageRequest:
    page_size: int
    cursor: Cursor | None = None  # None means "from the beginning"

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    def to_params(self) -> dict[str, str | int]:
        params: dict[str, str | int] = {"pageSize": self.page_size}
        if self.cursor is not None:
            params["cursor"] = self.cursor
        return params


@dataclass(frozen=True)
class PageResult[T]:
    items: list[T] = field(default_factory=list)
    has_more: bool = False
    next_cursor: Cursor | None = None  # absent iff has_more is False

    def __post_init__(self) -> None:
        if self.has_more != (self.next_cursor is not None):
            raise ValueError("next_cursor must be present exactly when has_more is set")


class PagePayload(BaseModel):
    """The `data` member of a list response: `{data, hasMore, lastDoc}`."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[dict[str, Any]] = Field(default_factory=list)
    has_more: bool = Field(default=False, alias="hasMore")
    last_doc: Any = Field(default=None, alias="lastDoc")

    @classmethod
    def from_body(cls, body: Any) -> "PagePayload":
        """
        Parse the unwrapped envelope body.

        A bare list is accepted as a single, complete page.

        Args:
            body: The value of the envelope's `data` member

        Returns:
            The parsed payload
        """
        if isinstance(body, list):
            return cls(data=body)
        if body is None:
            return cls()
        return cls.model_validate(body)

    def next_cursor(self) -> Cursor | None:
        """Serialize `lastDoc` into the opaque cursor sent back as `?cursor=`."""
        if not self.has_more or self.last_doc is None:
            return None
        return json.dumps(self.last_doc, separators=(",", ":"))

    def to_result[T: BaseModel](self, item_model: type[T]) -> PageResult[T]:
        cursor = self.next_cursor()
        items = [item_model.model_validate(raw) for raw in self.data]
        # hasMore without a lastDoc cannot be continued; treat it as the end
        return PageResult(items=items, has_more=cursor is not None, next_cursor=cursor)
