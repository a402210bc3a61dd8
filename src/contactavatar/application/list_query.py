"""Contact list: debounced search combined with the persisted sort order.

The engine holds the latest value of two inputs (settled search query, sort
order) and republishes a sorted list whenever the data source emits or the
sort order changes. Only the search input is debounced.
"""

import asyncio
import logging
from collections.abc import Callable

from contactavatar.application.contact_repository import ContactRepository
from contactavatar.application.ports import ContactsListener, PreferenceStore, Subscription
from contactavatar.domain import Contact, SortOrder

logger = logging.getLogger(__name__)

SORT_ORDER_KEY = "sort_order"
DEFAULT_DEBOUNCE_SECONDS = 0.3


def _name_key(contact: Contact) -> str:
    return contact.name.casefold()


def sort_contacts(contacts: list[Contact], order: SortOrder) -> list[Contact]:
    """Stable sort: contacts with equal keys keep the order the store gave them."""
    if order is SortOrder.NAME_DESC:
        return sorted(contacts, key=_name_key, reverse=True)
    if order is SortOrder.RECENTLY_ADDED:
        return sorted(contacts, key=lambda c: c.created_at, reverse=True)
    return sorted(contacts, key=_name_key)


def load_sort_order(preferences: PreferenceStore) -> SortOrder:
    return SortOrder.from_name(preferences.get(SORT_ORDER_KEY))


def save_sort_order(preferences: PreferenceStore, order: SortOrder) -> None:
    preferences.set(SORT_ORDER_KEY, order.name)


class _EngineSubscription:
    def __init__(self, remove: Callable[[], None]) -> None:
        self._remove = remove

    def unsubscribe(self) -> None:
        self._remove()


class ListQueryEngine:
    """Sorted, filtered view of the contact book. Use from inside a running event loop."""

    def __init__(
        self,
        repository: ContactRepository,
        preferences: PreferenceStore,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._repo = repository
        self._prefs = preferences
        self._debounce_seconds = debounce_seconds
        self._sort_order = load_sort_order(preferences)
        self._query = ""
        self._timer: asyncio.TimerHandle | None = None
        self._source: Subscription | None = None
        self._source_generation = 0
        self._source_contacts: list[Contact] | None = None
        self._results: list[Contact] = []
        self._listeners: dict[int, ContactsListener] = {}
        self._next_token = 0
        self._started = False
        self._closed = False

    @property
    def sort_order(self) -> SortOrder:
        return self._sort_order

    @property
    def query(self) -> str:
        """Last settled (debounced) search query."""
        return self._query

    @property
    def results(self) -> list[Contact]:
        return list(self._results)

    def subscribe(self, listener: ContactsListener) -> _EngineSubscription:
        """Receive every published list; the current one right away if there is one."""
        token = self._next_token
        self._next_token += 1
        self._listeners[token] = listener
        if self._source_contacts is not None:
            self._call(listener)
        return _EngineSubscription(lambda: self._listeners.pop(token, None))

    def start(self) -> None:
        """Attach to the data source for the current query (all contacts at first)."""
        if self._started or self._closed:
            return
        self._started = True
        self._switch_source(self._query)

    def set_search_query(self, query: str) -> None:
        """Debounced: only the last value of a burst is applied, once typing pauses."""
        if self._closed:
            return
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_seconds, self._settle, query or "")

    def set_sort_order(self, order: SortOrder) -> None:
        if self._closed:
            return
        self._sort_order = order
        save_sort_order(self._prefs, order)
        if self._source_contacts is not None:
            self._recompute()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._source is not None:
            self._source.unsubscribe()
            self._source = None
        self._listeners.clear()

    def _settle(self, query: str) -> None:
        self._timer = None
        if self._closed or query == self._query:
            return
        self._query = query
        self._started = True
        self._switch_source(query)

    def _switch_source(self, query: str) -> None:
        if self._source is not None:
            self._source.unsubscribe()
        self._source_generation += 1
        generation = self._source_generation
        needle = query.strip()
        if needle:
            logger.debug("Searching contacts for %r", needle)
            live = self._repo.observe_search(needle)
        else:
            live = self._repo.observe_all()
        self._source = live.subscribe(lambda contacts: self._on_source(generation, contacts))

    def _on_source(self, generation: int, contacts: list[Contact]) -> None:
        if self._closed or generation != self._source_generation:
            return  # emission from an abandoned source
        self._source_contacts = contacts
        self._recompute()

    def _recompute(self) -> None:
        self._results = sort_contacts(self._source_contacts or [], self._sort_order)
        for listener in list(self._listeners.values()):
            self._call(listener)

    def _call(self, listener: ContactsListener) -> None:
        try:
            listener(list(self._results))
        except Exception:
            logger.exception("Contact list listener raised")
