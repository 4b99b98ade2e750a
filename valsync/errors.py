# Valsync Errors
# Exception hierarchy shared by entries, containers and the codec


class ValsyncError(Exception):
    """Base class for all valsync errors."""


class EntryReadError(ValsyncError, ValueError):
    """An entry could not read its value from a data region."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"{name}: {message}")


class PayloadFormatError(ValsyncError, ValueError):
    """A payload is not structurally valid."""


class DuplicateEntryNameError(ValsyncError, ValueError):
    """Two entries in one container share a name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate entry name: '{name}'")


class SchemaError(ValsyncError, ValueError):
    """A container declaration cannot be turned into entries."""
