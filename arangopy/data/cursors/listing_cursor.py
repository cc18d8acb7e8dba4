# Copyright DataStax, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import logging
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    List,
    Optional,
    Tuple,
    TypeVar,
    cast,
)

from arangopy.exceptions import CursorException, NoMoreItemsException

# A cursor reads raw items (dictionaries) and maps them to T.
T = TypeVar("T")

logger = logging.getLogger(__name__)

# given the page state (None for the first page), return the items and
# the state for the next page (None when there are no more pages)
PageFetcher = Callable[[Optional[str]], Tuple[List[Any], Optional[str]]]
AsyncPageFetcher = Callable[
    [Optional[str]], Awaitable[Tuple[List[Any], Optional[str]]]
]


class CursorState(Enum):
    """
    This enum expresses the possible states for a listing cursor.

    Values:
        IDLE: Iteration over results has not started yet (alive=T, started=F)
        STARTED: Iteration has started, *can* still yield results (alive=T, started=T)
        CLOSED: Finished/forcibly stopped. Won't return more items (alive=F)
    """

    # Iteration over results has not started yet (alive=T, started=F)
    IDLE = "idle"
    # Iteration has started, *can* still yield results (alive=T, started=T)
    STARTED = "started"
    # Finished/forcibly stopped. Won't return more items (alive=F)
    CLOSED = "closed"


class _ListingCursorBase(Generic[T]):
    """
    State and bookkeeping common to the sync and async listing cursors.

    The remote fetch is deferred to the first read (or `has_next` call).
    A cursor is forward-only: once CLOSED it never restarts, and a fresh
    cursor must be obtained by calling the listing method again.
    """

    _state: CursorState
    _buffer: list[Any]
    _pages_retrieved: int
    _consumed: int
    _next_page_state: str | None

    def __init__(
        self,
        *,
        mapper: Callable[[Any], T] | None = None,
        description: str = "",
    ) -> None:
        self._mapper = mapper
        self._description = description
        self._state = CursorState.IDLE
        self._buffer = []
        self._pages_retrieved = 0
        self._consumed = 0
        self._next_page_state = None

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}("{self._description}", '
            f"{self._state.value}, consumed so far: {self._consumed})"
        )

    def _ensure_alive(self) -> None:
        if self._state == CursorState.CLOSED:
            raise CursorException(
                text="Cursor is stopped.",
                cursor_state=self._state.value,
            )

    def _needs_page(self) -> bool:
        return (
            self._state != CursorState.CLOSED
            and not self._buffer
            and (self._next_page_state is not None or self._pages_retrieved == 0)
        )

    def _store_page(self, items: list[Any], next_page_state: str | None) -> None:
        self._next_page_state = next_page_state
        self._pages_retrieved += 1
        self._buffer = list(items)

    def _pop_item(self) -> T:
        # consume one item from buffer
        traw0, rest_buffer = self._buffer[0], self._buffer[1:]
        self._buffer = rest_buffer
        self._consumed += 1
        self._state = CursorState.STARTED
        return cast(T, self._mapper(traw0) if self._mapper is not None else traw0)

    @property
    def state(self) -> CursorState:
        """
        The current state of this cursor.

        Returns:
            a value in `arangopy.cursors.CursorState`.
        """

        return self._state

    @property
    def consumed(self) -> int:
        """The number of items the cursor has yielded so far."""

        return self._consumed

    @property
    def buffered_count(self) -> int:
        """
        The number of items currently held in the client-side buffer.
        Reading this property never triggers a request to the server.
        """

        return len(self._buffer)

    def close(self) -> None:
        """
        Close the cursor, regardless of its state, discarding any item
        not yet consumed.
        """

        self._state = CursorState.CLOSED
        self._buffer = []


class ListingCursor(_ListingCursorBase[T]):
    """
    A lazy, forward-only cursor over the result of a listing operation
    (e.g. `list_views`, `list_analyzers`, `list_collections`).

    This class is not meant to be instantiated by the user: it is returned
    by the listing methods of `Database` and `ServerAdmin`.

    Items are handed out one at a time, either by `read()`, which raises
    `NoMoreItemsException` when no items are left, or by regular iteration.

    Example:
        >>> cursor = my_db.list_views()
        >>> cursor.read()
        ArangoSearchView(name="products_view", ...)
        >>> for view in cursor:
        ...     print(view.name)
        ...
        articles_view
        >>> cursor.read()
        Traceback (most recent call last):
            ...
        arangopy.exceptions.arango_exceptions.NoMoreItemsException: ...
    """

    def __init__(
        self,
        page_fetcher: PageFetcher,
        *,
        mapper: Callable[[Any], T] | None = None,
        description: str = "",
    ) -> None:
        super().__init__(mapper=mapper, description=description)
        self._page_fetcher = page_fetcher

    def _try_ensure_fill_buffer(self) -> None:
        """
        If buffer is empty, try to fill it with the next non-empty page, if any.
        If not possible, silently do nothing.
        This method never changes the cursor state.
        """

        while self._needs_page():
            logger.debug(f"fetching page {self._pages_retrieved} for {self}")
            new_buffer, next_page_state = self._page_fetcher(self._next_page_state)
            self._store_page(new_buffer, next_page_state)

    def __iter__(self) -> ListingCursor[T]:
        self._ensure_alive()
        return self

    def __next__(self) -> T:
        if self._state == CursorState.CLOSED:
            raise StopIteration
        self._try_ensure_fill_buffer()
        if not self._buffer:
            self._state = CursorState.CLOSED
            raise StopIteration
        return self._pop_item()

    def read(self) -> T:
        """
        Return the next item of the listing.

        Raises:
            NoMoreItemsException: if the listing is exhausted (or the cursor
                has been closed).
        """

        try:
            return self.__next__()
        except StopIteration:
            raise NoMoreItemsException(
                f"No more items in the listing ({self._consumed} items were read)."
            )

    def has_next(self) -> bool:
        """
        Whether the cursor actually has more items to return.

        Calling `has_next` on an IDLE cursor triggers the first fetch, but the
        cursor stays in the IDLE state until actual consumption starts.
        A CLOSED cursor always returns False.
        """

        if self._state == CursorState.CLOSED:
            return False
        self._try_ensure_fill_buffer()
        return len(self._buffer) > 0

    def to_list(self) -> list[T]:
        """Consume all remaining items and return them as a list."""

        self._ensure_alive()
        return list(self)


class AsyncListingCursor(_ListingCursorBase[T]):
    """
    A lazy, forward-only cursor over the result of a listing operation, for
    use with async code (e.g. `AsyncDatabase.list_views`).

    Items are handed out one at a time, either by `await read()`, which raises
    `NoMoreItemsException` when no items are left, or by `async for`.

    Example:
        >>> cursor = my_async_db.list_analyzers()
        >>> async for analyzer in cursor:
        ...     print(analyzer.name)
        ...
        _system::text_en
        _system::identity
    """

    def __init__(
        self,
        page_fetcher: AsyncPageFetcher,
        *,
        mapper: Callable[[Any], T] | None = None,
        description: str = "",
    ) -> None:
        super().__init__(mapper=mapper, description=description)
        self._page_fetcher = page_fetcher

    async def _try_ensure_fill_buffer(self) -> None:
        """
        If buffer is empty, try to fill it with the next non-empty page, if any.
        If not possible, silently do nothing.
        This method never changes the cursor state.
        """

        while self._needs_page():
            logger.debug(f"fetching page {self._pages_retrieved} for {self}")
            new_buffer, next_page_state = await self._page_fetcher(
                self._next_page_state
            )
            self._store_page(new_buffer, next_page_state)

    def __aiter__(self) -> AsyncListingCursor[T]:
        self._ensure_alive()
        return self

    async def __anext__(self) -> T:
        if self._state == CursorState.CLOSED:
            raise StopAsyncIteration
        await self._try_ensure_fill_buffer()
        if not self._buffer:
            self._state = CursorState.CLOSED
            raise StopAsyncIteration
        return self._pop_item()

    async def read(self) -> T:
        """
        Return the next item of the listing.

        Raises:
            NoMoreItemsException: if the listing is exhausted (or the cursor
                has been closed).
        """

        try:
            return await self.__anext__()
        except StopAsyncIteration:
            raise NoMoreItemsException(
                f"No more items in the listing ({self._consumed} items were read)."
            )

    async def has_next(self) -> bool:
        """
        Whether the cursor actually has more items to return.

        Calling `has_next` on an IDLE cursor triggers the first fetch, but the
        cursor stays in the IDLE state until actual consumption starts.
        A CLOSED cursor always returns False.
        """

        if self._state == CursorState.CLOSED:
            return False
        await self._try_ensure_fill_buffer()
        return len(self._buffer) > 0

    async def to_list(self) -> list[T]:
        """Consume all remaining items and return them as a list."""

        self._ensure_alive()
        return [item async for item in self]

