"""Paginated list state kept in sync with a paginated backend endpoint.

One :class:`PaginatedListController` backs one list view. It owns the items
currently shown plus a :class:`PaginationState`, and only talks to the backend
through the ``fetch`` callable it was built with.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import ApiError, SessionExpiredError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# fetch(page=..., size=..., filters=...) -> raw response body
PageFetcher = Callable[..., Any]


@dataclass(frozen=True)
class PaginationState:
    current_page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_previous: bool = False

    def page_numbers(self) -> range:
        return range(self.total_pages)


def _int_or(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool_or(value: Any, default: bool) -> bool:
    if value is None:
        return default
    return bool(value)


def page_arg(source: Mapping[str, Any], name: str = "page") -> int:
    """Page number from a query string or form; anything unusable is page 0."""
    try:
        return max(int(source.get(name, 0)), 0)
    except (TypeError, ValueError):
        return 0


def normalize(
    payload: Any,
    requested_page: int,
    requested_page_size: int,
    *,
    items_key: str = "items",
) -> tuple[list, PaginationState]:
    """Split a paginated response into raw items and a PaginationState.

    Fields missing from the response fall back to values derived from what was
    requested and what came back. Flags the server did send are kept as-is.
    A bare list is accepted as a response without pagination metadata.
    """
    if isinstance(payload, list):
        body: Mapping[str, Any] = {}
        raw_items = payload
    else:
        body = payload or {}
        raw_items = body.get(items_key)
        if raw_items is None:
            raw_items = body.get("items") or []

    items = list(raw_items)
    state = PaginationState(
        current_page=_int_or(body.get("currentPage"), requested_page),
        page_size=_int_or(body.get("pageSize"), requested_page_size),
        total_items=_int_or(body.get("totalItems"), len(items)),
        total_pages=_int_or(body.get("totalPages"), 1 if items else 0),
        has_next=_bool_or(body.get("hasNext"), False),
        has_previous=_bool_or(body.get("hasPrevious"), False),
    )
    return items, state


class PaginatedListController(Generic[T]):
    """Items + pagination for one list view.

    Navigation requests are guarded: ``next_page`` needs ``has_next``,
    ``previous_page`` needs ``has_previous`` and ``go_to`` needs a page inside
    ``[0, total_pages)``. A refused request returns False and changes nothing.

    Views build a fresh controller per request and start it with
    ``open_page``. ``dispose`` is for callers that keep a controller
    alive across requests (a background refresh, a long-lived client).
    """

    def __init__(
        self,
        fetch: PageFetcher,
        *,
        items_key: str = "items",
        parse_item: Optional[Callable[[Mapping[str, Any]], T]] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        filters: Optional[Mapping[str, Optional[str]]] = None,
        error_message: str = "Failed to load items",
    ):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self._fetch = fetch
        self._items_key = items_key
        self._parse_item = parse_item
        self._error_message = error_message
        self._disposed = False

        self.items: list[T] = []
        self.pagination = PaginationState(page_size=page_size)
        self.filters: dict[str, Optional[str]] = dict(filters or {})
        self.error: Optional[str] = None

    @property
    def page_size(self) -> int:
        return self.pagination.page_size

    @property
    def active_filters(self) -> dict[str, str]:
        return {k: v for k, v in self.filters.items() if v}

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Detach the view; responses arriving afterwards are dropped."""
        self._disposed = True

    # -- loading -----------------------------------------------------------

    def fetch_page(self, page: int) -> tuple[list[T], PaginationState]:
        """Fetch and normalize one page without touching controller state."""
        payload = self._fetch(page=page, size=self.page_size, filters=self.active_filters)
        raw_items, state = normalize(payload, page, self.page_size, items_key=self._items_key)
        if self._parse_item is not None:
            items = [self._parse_item(raw) for raw in raw_items]
        else:
            items = list(raw_items)
        return items, state

    def apply(self, items: Iterable[T], state: PaginationState) -> bool:
        if self._disposed:
            logger.debug("Dropping page %s for a disposed list", state.current_page)
            return False
        self.items = list(items)
        self.pagination = state
        self.error = None
        return True

    def fail(self, message: Optional[str] = None) -> None:
        if not self._disposed:
            self.error = message or self._error_message

    def load(self, page: int) -> bool:
        try:
            items, state = self.fetch_page(page)
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.warning("Loading page %s failed: %s", page, e.message)
            self.fail(self._error_message)
            return False
        return self.apply(items, state)

    def open_page(self, page: int) -> bool:
        """First load for a page number taken from a link.

        Page 0 always exists, so it is fetched first; any other page then
        goes through ``go_to`` and is only requested when it exists.
        """
        if not self.load(0):
            return False
        if page > 0:
            self.go_to(page)
        return self.error is None

    def reload(self) -> bool:
        return self.load(self.pagination.current_page)

    # -- navigation --------------------------------------------------------

    def next_page(self) -> bool:
        if not self.pagination.has_next:
            return False
        return self.load(self.pagination.current_page + 1)

    def previous_page(self) -> bool:
        if not self.pagination.has_previous:
            return False
        return self.load(self.pagination.current_page - 1)

    def go_to(self, page: int) -> bool:
        if not 0 <= page < self.pagination.total_pages:
            return False
        return self.load(page)

    # -- filters -----------------------------------------------------------

    def set_filter(self, name: str, value: Optional[str]) -> bool:
        return self.set_filters({name: value})

    def set_filters(self, changes: Mapping[str, Optional[str]]) -> bool:
        """Apply filter changes; the result set changed so start again at page 0."""
        for name, value in changes.items():
            self.filters[name] = value or None
        self.pagination = replace(self.pagination, current_page=0)
        return self.load(0)

    # -- mutations ---------------------------------------------------------

    def page_after_delete(self) -> int:
        page = self.pagination.current_page
        if len(self.items) == 1 and page > 0:
            return page - 1
        return page

    def reload_after_delete(self) -> bool:
        """Reload once an item of the current page has been deleted.

        Removing the only item of a page other than the first moves back one
        page so the view does not land on an empty page.
        """
        return self.load(self.page_after_delete())
