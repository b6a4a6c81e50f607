"""Paginated, searchable, mutable list of one entity type.

One ``ListController`` backs one list screen. It owns a single ``ListState``
and is the only thing that writes to it; observers get immutable snapshots
through ``subscribe``.

Protocol
--------
    load(reset=True)   restart from page 0, replace items (always proceeds)
    load_more()        next page, append; no-op while loading or when exhausted
    search(text)       set search text, then reset load
    refresh()          reset load flagged as ``is_refreshing``
    delete(entity)     needs ``entity.id``; removes it locally or reloads
    save(entity)       upsert, then reset load
    clear_error()

Every load stamps a generation number. Only the response of the latest
generation is applied, so a superseded request (or one that resolves after
``close()``) never touches state.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, Protocol, TypeVar

from polis_client.exceptions import PolisClientError
from polis_client.schemas.common import Pagination, RespSingle, RespSlice, SimpleStringFilter

logger = logging.getLogger(__name__)

DELETE_STRATEGIES = ("remove", "reload")
MISSING_ID_MESSAGE = "This item has not been saved yet and cannot be deleted."


class Identified(Protocol):
    id: int | None


E = TypeVar("E", bound=Identified)

FilterOp = Callable[[SimpleStringFilter], Awaitable[RespSlice[Any]]]
GetOp = Callable[[int], Awaitable[RespSingle[Any]]]
UpsertOp = Callable[[Any], Awaitable[RespSingle[Any]]]
DeleteOp = Callable[[int], Awaitable[Any]]


@dataclass(frozen=True)
class ListState(Generic[E]):
    items: tuple[E, ...] = ()
    current_page: int = 0
    has_next: bool = True
    is_loading: bool = False
    is_refreshing: bool = False
    search_text: str = ""
    error: str | None = None

    @property
    def is_idle(self) -> bool:
        return not self.is_loading and not self.is_refreshing

    @property
    def is_loading_more(self) -> bool:
        return self.is_loading and self.current_page > 0


Listener = Callable[[ListState], None]


class ListController(Generic[E]):
    def __init__(
        self,
        filter_op: FilterOp,
        get_op: GetOp,
        upsert_op: UpsertOp,
        delete_op: DeleteOp,
        *,
        page_size: int = 20,
        delete_strategy: str = "remove",
        name: str = "list",
    ):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        if delete_strategy not in DELETE_STRATEGIES:
            raise ValueError(f"delete_strategy must be one of {DELETE_STRATEGIES}")

        self._filter = filter_op
        self._get = get_op
        self._upsert = upsert_op
        self._delete = delete_op
        self.page_size = page_size
        self.delete_strategy = delete_strategy
        self.name = name

        self._state: ListState[E] = ListState()
        self._listeners: list[Listener] = []
        self._generation = 0
        self._load_kind: str | None = None  # "loading" / "refreshing" while a load is pending
        self._saves = 0  # upserts in flight
        self._deleted_ids: set[int] = set()
        self._closed = False

    @classmethod
    def for_service(cls, service, *, page_size: int = 20, delete_strategy: str = "remove") -> "ListController":
        """Build a controller from an ``EntityService``."""
        return cls(
            service.filter,
            service.get,
            service.upsert,
            service.delete,
            page_size=page_size,
            delete_strategy=delete_strategy,
            name=service.resource,
        )

    # ── State & observers ────────────────────────────────────

    @property
    def state(self) -> ListState[E]:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes) -> None:
        if self._closed:
            return
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def _load_flags(self) -> dict[str, bool]:
        return {
            "is_loading": self._load_kind == "loading" or self._saves > 0,
            "is_refreshing": self._load_kind == "refreshing",
        }

    # ── Loading ──────────────────────────────────────────────

    async def load(self, reset: bool = False, *, refreshing: bool = False) -> None:
        if self._closed:
            return
        if not reset and (
            self._state.is_loading or self._state.is_refreshing or not self._state.has_next
        ):
            return

        self._generation += 1
        generation = self._generation
        self._load_kind = "refreshing" if refreshing else "loading"

        if reset:
            self._update(items=(), current_page=0, has_next=True, **self._load_flags())
        else:
            self._update(**self._load_flags())

        query = SimpleStringFilter(
            filter=self._state.search_text,
            pagination=Pagination(page_number=self._state.current_page, page_size=self.page_size),
        )
        logger.debug(
            f"[{self.name}] load page {query.pagination.page_number} (reset={reset})",
            extra={"generation": generation},
        )

        try:
            response = await self._filter(query)
        except PolisClientError as e:
            if generation != self._generation:
                return
            self._load_kind = None
            self._update(error=e.message, **self._load_flags())
            return
        except asyncio.CancelledError:
            if generation == self._generation:
                self._load_kind = None
                self._update(**self._load_flags())
            raise

        if generation != self._generation:
            logger.debug(f"[{self.name}] dropped stale page (generation {generation})")
            return

        content = tuple(
            item for item in response.content if item.id is None or item.id not in self._deleted_ids
        )
        self._load_kind = None
        self._update(
            items=content if reset else self._state.items + content,
            has_next=response.has_next,
            current_page=self._state.current_page + 1,
            error=None,
            **self._load_flags(),
        )

    async def load_more(self) -> None:
        await self.load(reset=False)

    async def refresh(self) -> None:
        await self.load(reset=True, refreshing=True)

    async def search(self, text: str) -> None:
        if self._closed:
            return
        self._update(search_text=text)
        await self.load(reset=True)

    # ── Single-item operations ───────────────────────────────

    async def get(self, entity_id: int) -> E | None:
        if self._closed:
            return None
        try:
            response = await self._get(entity_id)
        except PolisClientError as e:
            self._update(error=e.message)
            return None
        return response.data

    async def save(self, entity: E) -> E | None:
        """Create or update ``entity``; reloads the list on success."""
        if self._closed:
            return None

        self._saves += 1
        self._update(**self._load_flags())
        try:
            response = await self._upsert(entity)
        except PolisClientError as e:
            self._update(error=e.message)
            return None
        finally:
            self._saves -= 1
            self._update(**self._load_flags())

        await self.load(reset=True)
        return response.data

    async def delete(self, entity: E) -> bool:
        if self._closed:
            return False
        if entity.id is None:
            self._update(error=MISSING_ID_MESSAGE)
            return False

        try:
            await self._delete(entity.id)
        except PolisClientError as e:
            self._update(error=e.message)
            return False

        self._deleted_ids.add(entity.id)
        if self.delete_strategy == "reload":
            await self.load(reset=True)
        else:
            self._update(items=tuple(item for item in self._state.items if item.id != entity.id))
        return True

    def clear_error(self) -> None:
        self._update(error=None)

    # ── Lifetime ─────────────────────────────────────────────

    def close(self) -> None:
        """End the controller's lifetime; pending responses are discarded."""
        self._closed = True
        self._generation += 1
        self._load_kind = None
        self._listeners.clear()
