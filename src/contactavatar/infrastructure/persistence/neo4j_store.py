"""Neo4j implementation of ContactStore.
Graph: one (:Contact) node per contact, scoped by book_id, plus one
(:ContactSequence {book_id}) node that hands out integer ids.
The driver is synchronous; every call runs in a worker thread so the event loop never blocks.
"""

import asyncio

from neo4j.exceptions import DriverError, Neo4jError

from contactavatar.application.ports import StoreError
from contactavatar.domain import Contact
from contactavatar.infrastructure.live_query import ChangeNotifier, LiveQuery

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT contact_book_id_unique IF NOT EXISTS
FOR (c:Contact) REQUIRE (c.book_id, c.id) IS NODE UNIQUE
"""

_SEQUENCE_CONSTRAINT_QUERY = """
CREATE CONSTRAINT contact_sequence_book_unique IF NOT EXISTS
FOR (s:ContactSequence) REQUIRE s.book_id IS UNIQUE
"""

_INSERT_NEW_QUERY = """
MERGE (seq:ContactSequence {book_id: $book_id})
ON CREATE SET seq.value = 0
SET seq._lock = true
WITH seq
SET seq.value = seq.value + 1
WITH seq
CREATE (c:Contact {book_id: $book_id, id: seq.value})
SET c += $props
RETURN c.id AS id
"""

_INSERT_REPLACE_QUERY = """
MERGE (c:Contact {book_id: $book_id, id: $id})
SET c = $props
WITH c
MERGE (seq:ContactSequence {book_id: $book_id})
ON CREATE SET seq.value = 0
SET seq._lock = true
WITH seq
SET seq.value = CASE WHEN seq.value < $id THEN $id ELSE seq.value END
RETURN c.id AS id
"""

_UPDATE_QUERY = """
MATCH (c:Contact {book_id: $book_id, id: $id})
SET c += $props
RETURN c.id AS id
"""

_DELETE_QUERY = """
MATCH (c:Contact {book_id: $book_id, id: $id})
DELETE c
RETURN count(c) AS deleted
"""

_DELETE_ALL_QUERY = """
MATCH (c:Contact {book_id: $book_id})
DETACH DELETE c
"""

_GET_QUERY = """
MATCH (c:Contact {book_id: $book_id, id: $id})
RETURN c
"""

_COUNT_QUERY = """
MATCH (c:Contact {book_id: $book_id})
RETURN count(c) AS total
"""

_LIST_QUERY = """
MATCH (c:Contact {book_id: $book_id})
RETURN c
ORDER BY c.name, c.id
"""

_SEARCH_QUERY = """
MATCH (c:Contact {book_id: $book_id})
WHERE toLower(c.name) CONTAINS $needle OR toLower(c.phone) CONTAINS $needle
RETURN c
ORDER BY c.name, c.id
"""

# Fields an update may change. id, book_id and created_at are fixed at creation.
_MUTABLE_FIELDS = (
    "name",
    "phone",
    "email",
    "address",
    "date_of_birth",
    "avatar_ref",
    "avatar_locator",
)


def ensure_contact_constraint(driver: object) -> None:
    """Create the contact and id-sequence uniqueness constraints if missing. Idempotent."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)
        session.run(_SEQUENCE_CONSTRAINT_QUERY)


def _mutable_props(contact: Contact) -> dict:
    return {name: getattr(contact, name) for name in _MUTABLE_FIELDS}


class Neo4jContactStore:
    """Stores contacts in Neo4j, scoped by book_id."""

    def __init__(self, driver: object, book_id: str = "default") -> None:
        self._driver = driver
        self._book_id = book_id
        self._notifier = ChangeNotifier()
        # One writer at a time per store; the sequence node lock covers other processes.
        self._write_lock = asyncio.Lock()

    async def insert(self, contact: Contact) -> int:
        async with self._write_lock:
            contact_id = await self._call(self._insert, contact)
        self._notifier.notify()
        return contact_id

    async def update(self, contact: Contact) -> None:
        async with self._write_lock:
            updated = await self._call(self._update, contact)
        if updated:
            self._notifier.notify()

    async def delete(self, contact: Contact) -> None:
        async with self._write_lock:
            deleted = await self._call(self._delete, contact.id)
        if deleted:
            self._notifier.notify()

    async def delete_all(self) -> None:
        async with self._write_lock:
            await self._call(self._delete_all)
        self._notifier.notify()

    async def get_by_id(self, contact_id: int) -> Contact | None:
        return await self._call(self._get_by_id, contact_id)

    async def count(self) -> int:
        return await self._call(self._count)

    def observe_all(self) -> LiveQuery:
        async def fetch() -> list[Contact]:
            return await self._call(self._list, _LIST_QUERY, {})

        return LiveQuery(fetch, self._notifier, description="all")

    def observe_search(self, query: str) -> LiveQuery:
        params = {"needle": (query or "").lower()}

        async def fetch() -> list[Contact]:
            return await self._call(self._list, _SEARCH_QUERY, params)

        return LiveQuery(fetch, self._notifier, description=f"search:{query}")

    async def _call(self, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except (Neo4jError, DriverError) as e:
            raise StoreError(f"Neo4j contact store failed: {e}") from e

    def _insert(self, contact: Contact) -> int:
        props = _mutable_props(contact)
        props["created_at"] = contact.created_at
        with self._driver.session() as session:
            if contact.id == 0:
                result = session.run(_INSERT_NEW_QUERY, book_id=self._book_id, props=props)
            else:
                props["book_id"] = self._book_id
                props["id"] = contact.id
                result = session.run(
                    _INSERT_REPLACE_QUERY,
                    book_id=self._book_id,
                    id=contact.id,
                    props=props,
                )
            record = result.single()
        return record["id"]

    def _update(self, contact: Contact) -> bool:
        with self._driver.session() as session:
            result = session.run(
                _UPDATE_QUERY,
                book_id=self._book_id,
                id=contact.id,
                props=_mutable_props(contact),
            )
            return result.single() is not None

    def _delete(self, contact_id: int) -> bool:
        with self._driver.session() as session:
            record = session.run(_DELETE_QUERY, book_id=self._book_id, id=contact_id).single()
        return bool(record and record["deleted"])

    def _delete_all(self) -> None:
        with self._driver.session() as session:
            session.run(_DELETE_ALL_QUERY, book_id=self._book_id)

    def _get_by_id(self, contact_id: int) -> Contact | None:
        with self._driver.session() as session:
            record = session.run(_GET_QUERY, book_id=self._book_id, id=contact_id).single()
        if not record:
            return None
        return _node_to_contact(record["c"])

    def _count(self) -> int:
        with self._driver.session() as session:
            record = session.run(_COUNT_QUERY, book_id=self._book_id).single()
        return record["total"]

    def _list(self, query: str, params: dict) -> list[Contact]:
        with self._driver.session() as session:
            result = session.run(query, book_id=self._book_id, **params)
            return [_node_to_contact(rec["c"]) for rec in result]


def _node_to_contact(node) -> Contact:
    # Neo4j drops null properties, so every optional field may be missing.
    values = {name: node.get(name) for name in _MUTABLE_FIELDS}
    values["name"] = values["name"] or ""
    values["phone"] = values["phone"] or ""
    return Contact(id=node["id"], created_at=node["created_at"], **values)
