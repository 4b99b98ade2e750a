# Valsync Codec
# Sparse dirty-entry payloads with per-field fault isolation

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from valsync.container import Location, ValueContainer, index_entries
from valsync.entries import Entry
from valsync.errors import PayloadFormatError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Kinds of recoverable per-field failures."""

    VALIDATION_REJECTED = "validation_rejected"
    ENCODE_ENTRY_FAILED = "encode_entry_failed"
    UNKNOWN_ENTRY_NAME = "unknown_entry_name"
    DECODE_ENTRY_FAILED = "decode_entry_failed"


@dataclass(frozen=True)
class FieldError:
    """A failure isolated to a single named field."""

    name: str
    kind: ErrorKind
    message: str = ""

    def __str__(self) -> str:
        if self.message:
            return f"{self.name}: {self.kind.value} ({self.message})"
        return f"{self.name}: {self.kind.value}"


@dataclass(frozen=True)
class PayloadField:
    """One named data region of a payload."""

    name: str
    data: Any


@dataclass
class Payload:
    """
    Sparse diff of dirty entries.

    Serialized shape::

        {"entries": [{"name": "volume", "data": {"value": 75}}]}
    """

    fields: list[PayloadField] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[PayloadField]:
        return iter(self.fields)

    @property
    def names(self) -> list[str]:
        """Field names in payload order."""
        return [f.name for f in self.fields]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"entries": [{"name": f.name, "data": f.data} for f in self.fields]}

    @classmethod
    def from_dict(cls, data: Any) -> "Payload":
        """
        Create from dictionary.

        Fields with a missing name or malformed data are kept so that
        decoding reports them individually.

        Raises:
            PayloadFormatError: If the top-level structure is invalid.
        """
        if not isinstance(data, Mapping):
            raise PayloadFormatError("Payload must be a mapping")
        raw_fields = data.get("entries", [])
        if not isinstance(raw_fields, list):
            raise PayloadFormatError("Payload 'entries' must be a list")

        fields = []
        for raw in raw_fields:
            if not isinstance(raw, Mapping):
                raise PayloadFormatError("Payload field must be a mapping")
            name = raw.get("name", "")
            fields.append(PayloadField(name=name if isinstance(name, str) else "", data=raw.get("data", {})))
        return cls(fields=fields)

    def dumps(self) -> bytes:
        """Serialize to JSON bytes for a transport."""
        return json.dumps(self.to_dict(), ensure_ascii=False).encode("utf-8")

    @classmethod
    def loads(cls, raw: bytes | str) -> "Payload":
        """
        Deserialize from JSON bytes.

        Raises:
            PayloadFormatError: If the bytes are not a valid payload.
        """
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise PayloadFormatError(f"Invalid payload JSON: {e}") from e
        return cls.from_dict(data)


@dataclass
class EncodeResult:
    """Result of encoding an entry list."""

    payload: Payload
    errors: list[FieldError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if every dirty entry was written."""
        return not self.errors


@dataclass
class DecodeResult:
    """Result of decoding a payload into a container."""

    applied: dict[str, Entry] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)
    notified: bool = False

    @property
    def success(self) -> bool:
        """Check if every field was applied."""
        return not self.errors


def encode(entries: Iterable[Entry]) -> EncodeResult:
    """
    Encode the dirty entries of a list into a payload.

    Clean entries are omitted. An entry whose ``write`` fails is reported
    and left out without stopping the others. Dirty state is not changed.

    Args:
        entries: Entries in traversal order.

    Returns:
        EncodeResult with the payload and any per-entry errors.
    """
    result = EncodeResult(payload=Payload())

    for entry in entries:
        if not entry.dirty:
            continue
        data: dict[str, Any] = {}
        try:
            entry.write(data)
        except Exception as e:
            logger.warning("Failed to encode entry '%s'", entry.name, exc_info=True)
            result.errors.append(FieldError(entry.name, ErrorKind.ENCODE_ENTRY_FAILED, str(e)))
            continue
        result.payload.fields.append(PayloadField(name=entry.name, data=data))

    return result


def decode(container: ValueContainer, location: Location, payload: Payload) -> DecodeResult:
    """
    Apply a payload to the entries a container declares at a location.

    Fields naming an undeclared entry, and fields whose ``read`` fails,
    are reported and skipped. If at least one field applied, the container
    receives a single ``read_entries`` call with all applied entries.

    Args:
        container: Receiving container.
        location: Location passed through to the container.
        payload: Payload to apply.

    Returns:
        DecodeResult with applied entries and per-field errors.
    """
    declared = index_entries(container.get_entries(location))
    result = DecodeResult()

    for payload_field in payload:
        name = payload_field.name
        entry = declared.get(name)
        if entry is None:
            logger.warning("Expected to decode '%s', but it is not a declared entry", name)
            result.errors.append(FieldError(name, ErrorKind.UNKNOWN_ENTRY_NAME, "not a declared entry"))
            continue
        try:
            entry.read(payload_field.data)
        except Exception as e:
            logger.warning("Failed to decode entry '%s'", name, exc_info=True)
            result.errors.append(FieldError(name, ErrorKind.DECODE_ENTRY_FAILED, str(e)))
            continue
        result.applied[name] = entry

    if result.applied:
        container.read_entries(location, dict(result.applied))
        result.notified = True

    return result


def acknowledge(entries: Iterable[Entry], payload: Payload) -> list[str]:
    """
    Mark entries clean once the transport confirmed a payload.

    Args:
        entries: Entries the payload was encoded from.
        payload: The confirmed payload.

    Returns:
        Names of the entries that were cleared.
    """
    sent = set(payload.names)
    cleared = []
    for entry in entries:
        if entry.name in sent and entry.dirty:
            entry.mark_clean()
            cleared.append(entry.name)
    return cleared
