"""Settings from the environment (and a .env file at the repo root or cwd)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

STORAGE_MEMORY = "memory"
STORAGE_NEO4J = "neo4j"

_REPO_ROOT = Path(__file__).resolve().parent.parent.parent


def load_env_file() -> None:
    """Load the first .env found (repo root, then cwd). Existing variables win."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            break


def _env(environ, name: str, default: str) -> str:
    return (environ.get(name) or default).strip()


@dataclass(frozen=True)
class Settings:
    storage: str = STORAGE_MEMORY
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    book_id: str = "default"
    preferences_path: Path | None = None
    avatar_dir: Path | None = None
    search_debounce_ms: int = 300
    log_level: str = "INFO"

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000

    @classmethod
    def from_env(cls, environ=None, *, load_file: bool = True) -> "Settings":
        """Read CONTACTS_* and NEO4J_* variables. Malformed values raise ValueError."""
        if environ is None:
            if load_file:
                load_env_file()
            environ = os.environ

        storage = _env(environ, "CONTACTS_STORAGE", STORAGE_MEMORY).lower()
        if storage not in (STORAGE_MEMORY, STORAGE_NEO4J):
            raise ValueError(f"CONTACTS_STORAGE must be 'memory' or 'neo4j', got {storage!r}")

        raw_debounce = _env(environ, "CONTACTS_SEARCH_DEBOUNCE_MS", "300")
        try:
            debounce_ms = int(raw_debounce)
        except ValueError:
            raise ValueError(f"CONTACTS_SEARCH_DEBOUNCE_MS must be an integer, got {raw_debounce!r}") from None
        if debounce_ms < 0:
            raise ValueError("CONTACTS_SEARCH_DEBOUNCE_MS must not be negative")

        prefs = _env(environ, "CONTACTS_PREFERENCES_PATH", "")
        avatar_dir = _env(environ, "CONTACTS_AVATAR_DIR", "")
        return cls(
            storage=storage,
            neo4j_uri=_env(environ, "NEO4J_URI", cls.neo4j_uri),
            neo4j_user=_env(environ, "NEO4J_USER", cls.neo4j_user),
            neo4j_password=_env(environ, "NEO4J_PASSWORD", cls.neo4j_password),
            book_id=_env(environ, "CONTACTS_BOOK_ID", cls.book_id),
            preferences_path=Path(prefs) if prefs else None,
            avatar_dir=Path(avatar_dir) if avatar_dir else None,
            search_debounce_ms=debounce_ms,
            log_level=_env(environ, "CONTACTS_LOG_LEVEL", cls.log_level).upper(),
        )
