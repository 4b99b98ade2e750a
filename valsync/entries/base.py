# Valsync Entry Base
# Named, typed, editable property with a dirty flag

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional

from valsync.errors import EntryReadError

Validator = Callable[[str], bool]


class EntryKind(str, Enum):
    """Closed set of entry kinds."""

    TEXT = "text"
    TOGGLE = "toggle"
    SWITCH = "switch"
    SLIDER = "slider"


@dataclass(eq=False)
class Entry:
    """
    A single named property participating in synchronization.

    The name is the synchronization key; the label is for presentation
    only. Subclasses define ``value`` and the kind-specific conversion
    hooks.

    Dirty state is set by local edits (``parse``, ``set_value`` and the
    kind-specific widget actions) and cleared only through ``mark_clean``.
    Reading a received value never touches it.
    """

    kind: ClassVar[EntryKind]

    name: str
    display_name: Optional[str] = None
    validator: Optional[Validator] = field(default=None, repr=False)
    _dirty: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Entry name must not be empty")

    @property
    def label(self) -> str:
        """Human-readable label, falling back to the name."""
        return self.display_name or self.name

    @property
    def dirty(self) -> bool:
        """True if the value was edited locally since the last clean."""
        return self._dirty

    def mark_clean(self) -> None:
        """Clear dirty state after the owner confirmed delivery."""
        self._dirty = False

    def display(self) -> str:
        """Render the current value as text for an editor field."""
        return str(self.value)

    def accepts(self, text: str) -> bool:
        """Check whether ``text`` would be accepted by ``parse``."""
        if not self._check_text(text):
            return False
        return self.validator is None or bool(self.validator(text))

    def parse(self, text: str) -> bool:
        """
        Update the value from editor text.

        Args:
            text: Candidate text from the editor.

        Returns:
            True if the value was updated, False if the text was rejected.
            A rejected parse leaves value and dirty state untouched.
        """
        if not self.accepts(text):
            return False
        self.value = self._from_text(text)
        self._dirty = True
        return True

    def set_value(self, value: Any) -> None:
        """Programmatic local edit. Raises ValueError for invalid values."""
        try:
            self.value = self._coerce(value)
        except TypeError as e:
            raise ValueError(str(e)) from e
        self._dirty = True

    def write(self, sink: dict[str, Any]) -> None:
        """Write the value alone into a data region."""
        sink["value"] = self.value

    def read(self, source: Mapping[str, Any]) -> None:
        """
        Read the value from a data region.

        Raises:
            EntryReadError: If the data is missing or has the wrong shape.
                The entry is left unchanged in that case.
        """
        if not isinstance(source, Mapping):
            raise EntryReadError(self.name, "data region is not a mapping")
        if "value" not in source:
            raise EntryReadError(self.name, "data region has no 'value'")
        try:
            value = self._coerce(source["value"])
        except (TypeError, ValueError) as e:
            raise EntryReadError(self.name, str(e)) from e
        self.value = value

    def _check_text(self, text: str) -> bool:
        return True

    def _from_text(self, text: str) -> Any:
        raise NotImplementedError

    def _coerce(self, raw: Any) -> Any:
        raise NotImplementedError
