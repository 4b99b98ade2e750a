# Valsync Entries Module
# Entry abstraction and the closed set of entry kinds

from valsync.entries.base import Entry, EntryKind, Validator
from valsync.entries.kinds import (
    ENTRY_TYPES,
    SliderEntry,
    SwitchEntry,
    TextEntry,
    ToggleEntry,
    create_entry,
)

__all__ = [
    # Base
    "Entry",
    "EntryKind",
    "Validator",
    # Kinds
    "TextEntry",
    "ToggleEntry",
    "SwitchEntry",
    "SliderEntry",
    "ENTRY_TYPES",
    "create_entry",
]
