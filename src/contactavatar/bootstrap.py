"""Wire the contact book once at process start and hand the pieces to the host."""

import logging
from dataclasses import dataclass, field

from neo4j import GraphDatabase

from contactavatar.application import (
    AvatarResolver,
    ContactDetails,
    ContactRepository,
    EditSession,
    ListQueryEngine,
    PreferenceStore,
)
from contactavatar.application.ports import AvatarCapabilities, ContactStore
from contactavatar.config import STORAGE_NEO4J, Settings
from contactavatar.infrastructure import (
    InMemoryContactStore,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    LocalAvatarCapabilities,
    Neo4jContactStore,
    ensure_contact_constraint,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, level.upper(), logging.INFO))


def get_driver(settings: Settings):
    return GraphDatabase.driver(settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password))


@dataclass
class ContactBook:
    """Everything a host needs; built by create_contact_book()."""

    settings: Settings
    repository: ContactRepository
    preferences: PreferenceStore
    driver: object | None = field(default=None, repr=False)

    def new_list_engine(self) -> ListQueryEngine:
        return ListQueryEngine(
            self.repository,
            self.preferences,
            debounce_seconds=self.settings.search_debounce_seconds,
        )

    def new_edit_session(self) -> EditSession:
        return EditSession(self.repository)

    def new_details(self) -> ContactDetails:
        return ContactDetails(self.repository)

    def close(self) -> None:
        if self.driver is not None:
            self.driver.close()
            self.driver = None


def create_contact_book(
    settings: Settings | None = None,
    *,
    store: ContactStore | None = None,
    capabilities: AvatarCapabilities | None = None,
    preferences: PreferenceStore | None = None,
) -> ContactBook:
    """Build store, resolver, repository and preference store. Explicit arguments override settings."""
    settings = settings or Settings.from_env()
    driver = None
    if store is None:
        if settings.storage == STORAGE_NEO4J:
            driver = get_driver(settings)
            ensure_contact_constraint(driver)
            store = Neo4jContactStore(driver, book_id=settings.book_id)
        else:
            store = InMemoryContactStore()
    if capabilities is None:
        capabilities = LocalAvatarCapabilities(base_dir=settings.avatar_dir)
    if preferences is None:
        if settings.preferences_path is not None:
            preferences = JsonFilePreferenceStore(settings.preferences_path)
        else:
            preferences = InMemoryPreferenceStore()

    repository = ContactRepository(store, AvatarResolver(capabilities))
    logger.info("Contact book ready (storage=%s, book=%s)", type(store).__name__, settings.book_id)
    return ContactBook(settings=settings, repository=repository, preferences=preferences, driver=driver)
