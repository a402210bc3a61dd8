"""Avatar selection: a bundled avatar or an external image, never both."""

from contactavatar.application.dto import AvatarSelection
from contactavatar.domain import BUILTIN_AVATAR_REFS, DEFAULT_AVATAR_REF


class AvatarPicker:
    def __init__(
        self,
        initial_ref: int | None = None,
        initial_locator: str | None = None,
        *,
        available: tuple[int, ...] = BUILTIN_AVATAR_REFS,
    ) -> None:
        self._initial = AvatarSelection(ref=initial_ref, locator=initial_locator)
        self._selection = self._initial
        self._available = available

    @property
    def available(self) -> tuple[int, ...]:
        return self._available

    @property
    def selection(self) -> AvatarSelection:
        return self._selection

    @property
    def has_changes(self) -> bool:
        return self._selection != self._initial

    @property
    def has_custom_locator(self) -> bool:
        return bool(self._selection.locator)

    def display_ref(self) -> int:
        return self._selection.ref if self._selection.ref is not None else DEFAULT_AVATAR_REF

    def select_builtin(self, ref: int) -> None:
        if ref not in self._available:
            raise ValueError(f"Unknown built-in avatar: {ref}")
        self._selection = AvatarSelection(ref=ref)

    def select_custom(self, locator: str | None) -> None:
        """Use an external image. A missing locator resets to the default avatar."""
        if not locator:
            self.reset_to_default()
            return
        self._selection = AvatarSelection(locator=locator)

    def reset_to_default(self) -> None:
        self._selection = AvatarSelection(ref=DEFAULT_AVATAR_REF)
