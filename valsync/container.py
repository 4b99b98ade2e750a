# Valsync Container
# Capability interface for owners of an entry set

from collections.abc import Hashable, Iterable
from typing import Optional, Protocol, runtime_checkable

from valsync.entries import Entry
from valsync.errors import DuplicateEntryNameError

Location = Hashable


@runtime_checkable
class ValueContainer(Protocol):
    """
    Owner of an entry set for a given location.

    Any object providing these three methods can take part in
    synchronization; no base class is required.
    """

    def get_entries(self, location: Location) -> list[Entry]:
        """
        Materialize the current entries for a location.

        Two calls without an intervening state change must return entries
        with the same names in the same order.
        """
        ...

    def get_title(self, location: Location) -> Optional[str]:
        """Return the title, or None to let the caller pick a default."""
        ...

    def read_entries(self, location: Location, entries: dict[str, Entry]) -> None:
        """Receive one batch of entries whose values were applied by a decode."""
        ...


def index_entries(entries: Iterable[Entry]) -> dict[str, Entry]:
    """
    Index entries by name.

    Raises:
        DuplicateEntryNameError: If two entries share a name.
    """
    index: dict[str, Entry] = {}
    for entry in entries:
        if entry.name in index:
            raise DuplicateEntryNameError(entry.name)
        index[entry.name] = entry
    return index


def resolve_title(container: ValueContainer, location: Location, default: str) -> str:
    """Get the container title, substituting ``default`` when it has none."""
    title = container.get_title(location)
    return title if title is not None else default
