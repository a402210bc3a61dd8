"""Host avatar capabilities for a local install: bundled catalogue + readable files."""

from pathlib import Path
from urllib.parse import unquote, urlparse

from contactavatar.domain import BUILTIN_AVATAR_REFS


def _locator_path(locator: str, base_dir: Path | None) -> Path:
    parsed = urlparse(locator)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ValueError(f"Unsupported avatar locator scheme: {parsed.scheme}")
    path = Path(locator)
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


class LocalAvatarCapabilities:
    """
    resource_exists: the reference is one of the bundled avatars.
    locator_accessible: the locator is a file path or file: URI that opens and has at least one byte.
    Relative paths resolve against base_dir when given.
    """

    def __init__(
        self,
        *,
        builtin_refs: tuple[int, ...] = BUILTIN_AVATAR_REFS,
        base_dir: Path | str | None = None,
    ) -> None:
        self._builtin_refs = frozenset(builtin_refs)
        self._base_dir = Path(base_dir) if base_dir is not None else None

    def resource_exists(self, ref: int) -> bool:
        return ref in self._builtin_refs

    def locator_accessible(self, locator: str) -> bool:
        if not locator or not locator.strip():
            return False
        try:
            path = _locator_path(locator.strip(), self._base_dir)
            with path.open("rb") as stream:
                return stream.read(1) != b""
        except (OSError, ValueError):
            # Deleted file, revoked permission or unsupported scheme.
            return False
