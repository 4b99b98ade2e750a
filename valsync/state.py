# Valsync State
# Persistence of canonical entry values per location

import json
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml


def location_key(location: Hashable) -> str:
    """Stable string form of a location, used as the storage key."""
    return str(location)


@dataclass
class LocationState:
    """Stored values for a single location."""

    location: str
    values: dict[str, Any] = field(default_factory=dict)
    updated: Optional[str] = None  # ISO format datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {"values": dict(self.values)}
        if self.updated is not None:
            data["updated"] = self.updated
        return data

    @classmethod
    def from_dict(cls, location: str, data: dict[str, Any]) -> "LocationState":
        """Create from dictionary."""
        return cls(
            location=location,
            values=dict(data.get("values") or {}),
            updated=data.get("updated"),
        )


@dataclass
class ValueState:
    """Stored values for all locations."""

    version: str = "1.0"
    last_update: Optional[str] = None  # ISO format datetime
    locations: dict[str, LocationState] = field(default_factory=dict)

    def get_values(self, location: Hashable) -> dict[str, Any]:
        """Get a copy of the stored values for a location."""
        state = self.locations.get(location_key(location))
        return dict(state.values) if state else {}

    def set_values(self, location: Hashable, values: Mapping[str, Any]) -> LocationState:
        """Merge values into a location's stored values."""
        key = location_key(location)
        state = self.locations.get(key)
        if state is None:
            state = LocationState(location=key)
            self.locations[key] = state
        state.values.update(values)
        state.updated = datetime.now().isoformat()
        return state

    def remove_location(self, location: Hashable) -> bool:
        """Remove a location's stored values."""
        key = location_key(location)
        if key in self.locations:
            del self.locations[key]
            return True
        return False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "version": self.version,
            "last_update": self.last_update,
            "locations": {key: state.to_dict() for key, state in self.locations.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValueState":
        """Create from dictionary."""
        locations = {}
        for key, state_data in (data.get("locations") or {}).items():
            locations[str(key)] = LocationState.from_dict(str(key), state_data or {})

        return cls(
            version=data.get("version", "1.0"),
            last_update=data.get("last_update"),
            locations=locations,
        )


class StateManager:
    """
    Manages value state persistence.

    Handles loading, saving, and updating stored values.
    """

    def __init__(self, state_path: Optional[Path] = None):
        """
        Initialize state manager.

        Args:
            state_path: Path to state file. Defaults to ~/.config/valsync/state.yaml
        """
        if state_path is None:
            state_path = Path.home() / ".config" / "valsync" / "state.yaml"
        self.state_path = state_path
        self._state: Optional[ValueState] = None

    @property
    def state(self) -> ValueState:
        """Get current state, loading if necessary."""
        if self._state is None:
            self._state = self.load()
        return self._state

    def load(self) -> ValueState:
        """Load state from file."""
        if not self.state_path.exists():
            return ValueState()

        try:
            with open(self.state_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                if data is None:
                    return ValueState()
                return ValueState.from_dict(data)
        except yaml.YAMLError:
            # Older state files may be plain JSON
            try:
                with open(self.state_path, encoding="utf-8") as f:
                    return ValueState.from_dict(json.load(f))
            except json.JSONDecodeError:
                return ValueState()

    def save(self) -> None:
        """Save state to file."""
        self.state_path.parent.mkdir(parents=True, exist_ok=True)

        state = self.state
        state.last_update = datetime.now().isoformat()

        with open(self.state_path, "w", encoding="utf-8") as f:
            yaml.dump(state.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def get_values(self, location: Hashable) -> dict[str, Any]:
        """Get stored values for a location."""
        return self.state.get_values(location)

    def update_values(self, location: Hashable, values: Mapping[str, Any]) -> LocationState:
        """Update stored values for a location and save."""
        location_state = self.state.set_values(location, values)
        self.save()
        return location_state

    def clear_location(self, location: Hashable) -> bool:
        """Remove a location's values and save."""
        result = self.state.remove_location(location)
        if result:
            self.save()
        return result

    def reset(self) -> None:
        """Reset state to empty."""
        self._state = ValueState()
        self.save()
