"""Publish/subscribe channel for live contact queries.

A store owns one ChangeNotifier and calls notify() after every write. Each
LiveQuery with at least one subscriber re-runs its fetch on the event loop and
pushes the full result list to all of its listeners.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from contactavatar.application.ports import ContactsListener
from contactavatar.domain import Contact

logger = logging.getLogger(__name__)

Fetch = Callable[[], Awaitable[list[Contact]]]


class ChangeNotifier:
    """Fans out write notifications to the active live queries of one store."""

    def __init__(self) -> None:
        self._queries: set["LiveQuery"] = set()

    def register(self, query: "LiveQuery") -> None:
        self._queries.add(query)

    def unregister(self, query: "LiveQuery") -> None:
        self._queries.discard(query)

    @property
    def active_count(self) -> int:
        return len(self._queries)

    def notify(self) -> None:
        for query in list(self._queries):
            query.refresh()


class LiveSubscription:
    def __init__(self, query: "LiveQuery", token: int) -> None:
        self._query = query
        self._token = token

    def unsubscribe(self) -> None:
        self._query._remove(self._token)


class LiveQuery:
    """One query, many listeners. Must be subscribed from inside a running event loop."""

    def __init__(self, fetch: Fetch, notifier: ChangeNotifier, *, description: str = "") -> None:
        self._fetch = fetch
        self._notifier = notifier
        self._description = description
        self._listeners: dict[int, ContactsListener] = {}
        self._next_token = 0
        self._generation = 0
        self._delivered_generation = 0
        self._latest: list[Contact] | None = None
        self._tasks: set[asyncio.Task] = set()

    def __repr__(self) -> str:
        return f"LiveQuery({self._description!r}, listeners={len(self._listeners)})"

    def subscribe(self, listener: ContactsListener) -> LiveSubscription:
        loop = asyncio.get_running_loop()
        token = self._next_token
        self._next_token += 1
        first = not self._listeners
        self._listeners[token] = listener
        if first:
            self._notifier.register(self)
            self.refresh()
        elif self._latest is not None:
            loop.call_soon(self._deliver_latest, token, self._delivered_generation)
        # Otherwise the first fetch is still in flight and will reach this listener too.
        return LiveSubscription(self, token)

    def refresh(self) -> None:
        """Re-run the query and push the result to every listener."""
        if not self._listeners:
            return
        self._generation += 1
        task = asyncio.get_running_loop().create_task(self._run(self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, generation: int) -> None:
        try:
            contacts = await self._fetch()
        except Exception:
            logger.exception("Live query %s failed to refresh", self._description)
            return
        if generation != self._generation:
            return  # a newer fetch is pending
        self._delivered_generation = generation
        self._latest = contacts
        for listener in list(self._listeners.values()):
            self._call(listener, contacts)

    def _deliver_latest(self, token: int, generation: int) -> None:
        listener = self._listeners.get(token)
        if listener is None or self._latest is None or generation != self._delivered_generation:
            return
        self._call(listener, self._latest)

    def _call(self, listener: ContactsListener, contacts: list[Contact]) -> None:
        try:
            listener(list(contacts))
        except Exception:
            logger.exception("Listener of live query %s raised", self._description)

    def _remove(self, token: int) -> None:
        if self._listeners.pop(token, None) is None:
            return
        if not self._listeners:
            self._notifier.unregister(self)
            self._latest = None
