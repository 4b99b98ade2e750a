# Valsync Editor
# Applying user edits to materialized entries

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from valsync.codec import ErrorKind, FieldError
from valsync.container import index_entries
from valsync.entries import Entry, SwitchEntry, ToggleEntry

if TYPE_CHECKING:
    from valsync.output.console import Console


def parse_assignments(assignments: Sequence[str]) -> dict[str, str]:
    """
    Split ``NAME=VALUE`` strings into a mapping.

    Raises:
        ValueError: If an assignment has no '=' or an empty name.
    """
    edits: dict[str, str] = {}
    for assignment in assignments:
        name, sep, text = assignment.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected NAME=VALUE, got '{assignment}'")
        edits[name.strip()] = text
    return edits


def apply_edits(entries: Sequence[Entry], edits: Mapping[str, str]) -> list[FieldError]:
    """
    Parse editor text into entries by name.

    Args:
        entries: Materialized entries of a container.
        edits: Entry name to editor text.

    Returns:
        Errors for unknown names and rejected text. Accepted edits mark
        their entries dirty.
    """
    index = index_entries(entries)
    errors: list[FieldError] = []

    for name, text in edits.items():
        entry = index.get(name)
        if entry is None:
            errors.append(FieldError(name, ErrorKind.UNKNOWN_ENTRY_NAME, "not a declared entry"))
        elif not entry.parse(text):
            errors.append(FieldError(name, ErrorKind.VALIDATION_REJECTED, f"rejected '{text}'"))

    return errors


def prompt_entries(entries: Sequence[Entry], console: "Console") -> list[str]:
    """
    Interactively edit entries, one prompt per entry.

    Each prompt is seeded with the current display text. Rejected input
    is reported and asked again.

    Returns:
        Names of the entries that were changed.
    """
    changed: list[str] = []

    for entry in entries:
        if isinstance(entry, ToggleEntry):
            answer = console.confirm(entry.label, default=entry.value)
            if answer != entry.value:
                entry.toggle()
                changed.append(entry.name)
            continue

        choices = entry.choices if isinstance(entry, SwitchEntry) else None
        while True:
            current = entry.display()
            text = console.ask(entry.label, default=current, choices=choices)
            if text == current:
                break
            if entry.parse(text):
                changed.append(entry.name)
                break
            console.print_warning(f"'{text}' is not a valid value for {entry.label}")

    return changed
