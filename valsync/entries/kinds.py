# Valsync Entry Kinds
# Text, toggle, switch and slider entries

import math
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from valsync.entries.base import Entry, EntryKind

TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
FALSE_WORDS = frozenset({"false", "no", "off", "0"})


@dataclass(eq=False)
class TextEntry(Entry):
    """Free text entry."""

    kind: ClassVar[EntryKind] = EntryKind.TEXT

    value: str = ""
    max_length: Optional[int] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        self.value = self._coerce(self.value)

    def _check_text(self, text: str) -> bool:
        return self.max_length is None or len(text) <= self.max_length

    def _from_text(self, text: str) -> str:
        return text

    def _coerce(self, raw: Any) -> str:
        if not isinstance(raw, str):
            raise TypeError(f"expected text, got {type(raw).__name__}")
        if self.max_length is not None and len(raw) > self.max_length:
            raise ValueError(f"text longer than {self.max_length} characters")
        return raw


@dataclass(eq=False)
class ToggleEntry(Entry):
    """Boolean on/off entry."""

    kind: ClassVar[EntryKind] = EntryKind.TOGGLE

    value: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        self.value = self._coerce(self.value)

    def display(self) -> str:
        return "true" if self.value else "false"

    def toggle(self) -> None:
        """Flip the value, as a click on a toggle button would."""
        self.value = not self.value
        self._dirty = True

    def _check_text(self, text: str) -> bool:
        return text.strip().lower() in TRUE_WORDS | FALSE_WORDS

    def _from_text(self, text: str) -> bool:
        return text.strip().lower() in TRUE_WORDS

    def _coerce(self, raw: Any) -> bool:
        if not isinstance(raw, bool):
            raise TypeError(f"expected boolean, got {type(raw).__name__}")
        return raw


@dataclass(eq=False)
class SwitchEntry(Entry):
    """Enumerated choice entry. The value is one of ``choices``."""

    kind: ClassVar[EntryKind] = EntryKind.SWITCH

    value: Optional[str] = None
    choices: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.choices:
            raise ValueError(f"Switch entry '{self.name}' needs at least one choice")
        if len(set(self.choices)) != len(self.choices):
            raise ValueError(f"Switch entry '{self.name}' has duplicate choices")
        self.value = self.choices[0] if self.value is None else self._coerce(self.value)

    def cycle(self) -> None:
        """Advance to the next choice, wrapping around."""
        index = self.choices.index(self.value)
        self.value = self.choices[(index + 1) % len(self.choices)]
        self._dirty = True

    def _check_text(self, text: str) -> bool:
        return text in self.choices

    def _from_text(self, text: str) -> str:
        return text

    def _coerce(self, raw: Any) -> str:
        if not isinstance(raw, str):
            raise TypeError(f"expected choice name, got {type(raw).__name__}")
        if raw not in self.choices:
            raise ValueError(f"'{raw}' is not one of {', '.join(self.choices)}")
        return raw


@dataclass(eq=False)
class SliderEntry(Entry):
    """
    Bounded numeric entry.

    Values are clamped to ``[minimum, maximum]`` on every edit and read.
    Integral sliders round to the nearest int.
    """

    kind: ClassVar[EntryKind] = EntryKind.SLIDER

    value: float = 0.0
    minimum: float = 0.0
    maximum: float = 1.0
    integral: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.minimum > self.maximum:
            raise ValueError(f"Slider entry '{self.name}' has minimum above maximum")
        self.value = self._coerce(self.value)

    def display(self) -> str:
        if self.integral:
            return str(int(self.value))
        return f"{self.value:g}"

    def _check_text(self, text: str) -> bool:
        try:
            number = float(text.strip())
        except ValueError:
            return False
        return math.isfinite(number)

    def _from_text(self, text: str) -> float:
        return self._coerce(float(text.strip()))

    def _coerce(self, raw: Any) -> float:
        # bool is an int subclass
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise TypeError(f"expected number, got {type(raw).__name__}")
        try:
            finite = math.isfinite(raw)
        except OverflowError as e:
            raise ValueError("number out of range") from e
        if not finite:
            raise ValueError("number is not finite")
        clamped = min(max(raw, self.minimum), self.maximum)
        if self.integral:
            return int(round(clamped))
        return float(clamped)


ENTRY_TYPES: dict[EntryKind, type[Entry]] = {
    EntryKind.TEXT: TextEntry,
    EntryKind.TOGGLE: ToggleEntry,
    EntryKind.SWITCH: SwitchEntry,
    EntryKind.SLIDER: SliderEntry,
}


def create_entry(kind: EntryKind | str, name: str, **fields: Any) -> Entry:
    """
    Create an entry of the given kind.

    Args:
        kind: Entry kind or its string value.
        name: Entry name.
        **fields: Kind-specific dataclass fields.

    Returns:
        The new entry, clean.
    """
    entry_type = ENTRY_TYPES[EntryKind(kind)]
    return entry_type(name=name, **fields)
