# Valsync Declared Container
# Canonical-state owner built from a container declaration and stored values

import logging
from collections.abc import Callable, Iterable
from typing import Any, Optional

from valsync.config.schema import ContainerSchema, EntrySpec
from valsync.container import Location
from valsync.entries import Entry
from valsync.errors import SchemaError
from valsync.state import StateManager

logger = logging.getLogger(__name__)

AppliedCallback = Callable[[Location, dict[str, Entry]], None]


class DeclaredContainer:
    """
    Container whose entries come from a ContainerSchema.

    Entries are rebuilt from the declarations and the stored values on
    every ``get_entries`` call, so state changes are visible right away.
    Applied batches are written back to the state store.
    """

    def __init__(
        self,
        name: str,
        schema: ContainerSchema,
        state_manager: StateManager,
        on_applied: Optional[AppliedCallback] = None,
    ):
        """
        Initialize container.

        Args:
            name: Container name from the configuration.
            schema: Entry declarations.
            state_manager: Store holding the values per location.
            on_applied: Optional callback run after each applied batch.
        """
        self.name = name
        self.schema = schema
        self.state_manager = state_manager
        self.on_applied = on_applied

    def get_entries(self, location: Location) -> list[Entry]:
        stored = self.state_manager.get_values(location)
        return [self._build_entry(spec, stored.get(spec.name)) for spec in self.schema.entries_for(location)]

    def get_title(self, location: Location) -> Optional[str]:
        return self.schema.title

    def read_entries(self, location: Location, entries: dict[str, Entry]) -> None:
        values = {name: entry.value for name, entry in entries.items()}
        self.state_manager.update_values(location, values)
        logger.info("Applied %d entries to %s at %s", len(values), self.name, location)
        if self.on_applied is not None:
            self.on_applied(location, entries)

    def store_edits(self, location: Location, entries: Iterable[Entry]) -> list[str]:
        """
        Persist the values of locally edited entries.

        Dirty state is left as is; it is cleared only once a payload is
        acknowledged.

        Returns:
            Names of the stored entries.
        """
        values: dict[str, Any] = {entry.name: entry.value for entry in entries if entry.dirty}
        if values:
            self.state_manager.update_values(location, values)
        return list(values)

    def _build_entry(self, spec: EntrySpec, value: Any) -> Entry:
        if value is None:
            return spec.to_entry()
        try:
            return spec.to_entry(value)
        except SchemaError:
            logger.warning("Stored value for '%s' in %s is invalid, using default", spec.name, self.name)
            return spec.to_entry()
