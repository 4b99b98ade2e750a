"""valsync - named-entry state synchronization.

Keeps a small set of named, typed, user-editable entries consistent
between a canonical-state owner and a mirrored side by sending only the
entries that changed.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "Entry",
    "EntryKind",
    "TextEntry",
    "ToggleEntry",
    "SwitchEntry",
    "SliderEntry",
    "create_entry",
    "ValueContainer",
    "DeclaredContainer",
    "Payload",
    "PayloadField",
    "EncodeResult",
    "DecodeResult",
    "ErrorKind",
    "FieldError",
    "encode",
    "decode",
    "acknowledge",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("Entry", "EntryKind", "TextEntry", "ToggleEntry", "SwitchEntry", "SliderEntry", "create_entry"):
        from valsync import entries

        return getattr(entries, name)
    if name == "ValueContainer":
        from valsync.container import ValueContainer

        return ValueContainer
    if name == "DeclaredContainer":
        from valsync.declared import DeclaredContainer

        return DeclaredContainer
    if name in (
        "Payload",
        "PayloadField",
        "EncodeResult",
        "DecodeResult",
        "ErrorKind",
        "FieldError",
        "encode",
        "decode",
        "acknowledge",
    ):
        from valsync import codec

        return getattr(codec, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
