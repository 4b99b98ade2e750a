# Valsync Output Module
# Rich console output

from valsync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
