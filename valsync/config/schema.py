# Valsync Configuration Schema
# Pydantic models for YAML container declarations

import logging
import re
from collections.abc import Hashable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from valsync.entries import Entry, EntryKind, Validator, create_entry
from valsync.errors import SchemaError


def pattern_validator(pattern: str) -> Validator:
    """Build a validator accepting text that fully matches ``pattern``."""
    compiled = re.compile(pattern)

    def validate(text: str) -> bool:
        return compiled.fullmatch(text) is not None

    return validate


class EntrySpec(BaseModel):
    """Declaration of a single entry."""

    name: str = Field(min_length=1, description="Synchronization key, unique within a container")
    kind: EntryKind = Field(description="Entry kind: text, toggle, switch or slider")
    label: str | None = Field(default=None, description="Display label (defaults to name)")
    default: Any = Field(default=None, description="Initial value when no state is stored")
    choices: list[str] | None = Field(default=None, description="Choices for switch entries")
    minimum: float | None = Field(default=None, description="Lower bound for slider entries")
    maximum: float | None = Field(default=None, description="Upper bound for slider entries")
    integral: bool = Field(default=False, description="Round slider values to integers")
    max_length: int | None = Field(default=None, ge=0, description="Maximum length for text entries")
    pattern: str | None = Field(default=None, description="Regex the whole editor text must match")
    locations: list[str] | None = Field(
        default=None,
        description="Locations exposing this entry. None = all locations.",
    )

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, v: str | None) -> str | None:
        """Ensure the validator pattern compiles."""
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"Invalid pattern: {e}") from e
        return v

    @model_validator(mode="after")
    def check_kind_fields(self) -> "EntrySpec":
        """Ensure the kind-specific fields describe a buildable entry."""
        if self.kind == EntryKind.SWITCH and not self.choices:
            raise ValueError("switch entries need 'choices'")
        if self.kind == EntryKind.SLIDER and (self.minimum is None or self.maximum is None):
            raise ValueError("slider entries need 'minimum' and 'maximum'")
        self.to_entry()
        return self

    def exposed_at(self, location: Hashable) -> bool:
        """Check if this entry is declared at a location."""
        return self.locations is None or str(location) in self.locations

    def to_entry(self, value: Any = None) -> Entry:
        """
        Build a clean entry from this declaration.

        Args:
            value: Stored value. The declared default is used when None.

        Raises:
            SchemaError: If the declaration or value does not fit the kind.
        """
        fields: dict[str, Any] = {"display_name": self.label}
        if self.pattern is not None:
            fields["validator"] = pattern_validator(self.pattern)

        if self.kind == EntryKind.TEXT:
            fields["max_length"] = self.max_length
        elif self.kind == EntryKind.SWITCH:
            fields["choices"] = list(self.choices or [])
        elif self.kind == EntryKind.SLIDER:
            fields["minimum"] = self.minimum
            fields["maximum"] = self.maximum
            fields["integral"] = self.integral
            if value is None and self.default is None:
                fields["value"] = self.minimum

        current = self.default if value is None else value
        if current is not None:
            fields["value"] = current
        try:
            return create_entry(self.kind, self.name, **fields)
        except (TypeError, ValueError) as e:
            raise SchemaError(f"Entry '{self.name}': {e}") from e


class ContainerSchema(BaseModel):
    """Declaration of a container's entries."""

    title: str | None = Field(default=None, description="Editor title. None = caller default.")
    description: str = Field(default="", description="Human-readable description")
    entries: list[EntrySpec] = Field(default_factory=list, description="Entry declarations in display order")

    @field_validator("entries")
    @classmethod
    def check_unique_names(cls, v: list[EntrySpec]) -> list[EntrySpec]:
        """Entry names must be pairwise distinct."""
        seen: set[str] = set()
        for spec in v:
            if spec.name in seen:
                raise ValueError(f"Duplicate entry name: '{spec.name}'")
            seen.add(spec.name)
        return v

    def entries_for(self, location: Hashable) -> list[EntrySpec]:
        """Return the declarations exposed at a location, in order."""
        return [spec for spec in self.entries if spec.exposed_at(location)]


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    log_level: str = Field(default="WARNING", description="Logging level for library messages")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class ValsyncConfig(BaseModel):
    """Root configuration model for valsync."""

    state_file: str = Field(
        default="~/.config/valsync/state.yaml",
        description="Path to the stored entry values",
    )
    containers: dict[str, ContainerSchema] = Field(default_factory=dict, description="Container declarations")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("state_file")
    @classmethod
    def expand_state_file(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())

    def get_container(self, name: str) -> ContainerSchema | None:
        """Get a container declaration by name."""
        return self.containers.get(name)
