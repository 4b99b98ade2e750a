# Valsync Console Output
# Rich-based console output for entries and codec results

from collections.abc import Sequence
from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from valsync.codec import DecodeResult, EncodeResult, ErrorKind, FieldError
from valsync.config.schema import ContainerSchema
from valsync.entries import Entry


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for entries and sync results.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True, stderr: bool = False):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            stderr: Write to stderr, keeping stdout free for payloads.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=not colored, stderr=stderr)

    @property
    def rich(self) -> RichConsole:
        """The underlying Rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def print_entries(self, title: str, entries: Sequence[Entry]) -> None:
        """
        Print a container's entries as a table.

        Args:
            title: Resolved container title.
            entries: Materialized entries in display order.
        """
        if not entries:
            self._console.print(f"[bold]{title}[/bold]")
            self._console.print("  [dim]No entries[/dim]")
            return

        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Name", style="cyan")
        table.add_column("Label")
        table.add_column("Kind", style="magenta")
        table.add_column("Value")
        table.add_column("Dirty", justify="center")

        for entry in entries:
            dirty = "[yellow]●[/yellow]" if entry.dirty else "[dim]○[/dim]"
            table.add_row(entry.name, escape(entry.label), entry.kind.value, escape(entry.display()), dirty)

        self._console.print(table)

    def print_encode_result(self, result: EncodeResult) -> None:
        """Print the fields written to a payload and any encode errors."""
        if len(result.payload) == 0 and result.success:
            self.print_info("No changed entries to send")
            return

        if len(result.payload) > 0:
            self.print_success(f"Encoded {len(result.payload)} entries: {', '.join(result.payload.names)}")
        self._print_field_errors(result.errors)

    def print_decode_result(self, result: DecodeResult) -> None:
        """Print applied entries and per-field decode errors."""
        if result.applied:
            names = ", ".join(result.applied)
            self.print_success(f"Applied {len(result.applied)} entries: {names}")
        elif result.success:
            self.print_info("Payload contained no entries")

        if self.verbose:
            for name, entry in result.applied.items():
                self._console.print(f"    [green]✓[/green] {name} = {escape(entry.display())}")

        self._print_field_errors(result.errors)

    def _print_field_errors(self, errors: Sequence[FieldError]) -> None:
        """Print per-field errors with a hint per kind."""
        hints = {
            ErrorKind.UNKNOWN_ENTRY_NAME: "not declared by this container",
            ErrorKind.DECODE_ENTRY_FAILED: "data could not be read",
            ErrorKind.ENCODE_ENTRY_FAILED: "value could not be written",
            ErrorKind.VALIDATION_REJECTED: "value rejected",
        }
        for error in errors:
            hint = hints.get(error.kind, error.kind.value)
            detail = f" [dim]({error.message})[/dim]" if self.verbose and error.message else ""
            self._console.print(f"    [red]✗[/red] {error.name or '<unnamed>'}: {hint}{detail}")

    def print_containers(self, containers: dict[str, ContainerSchema]) -> None:
        """Print declared containers."""
        if not containers:
            self._console.print("[dim]No containers declared[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Container", style="cyan")
        table.add_column("Title")
        table.add_column("Entries", justify="right")
        table.add_column("Description", style="dim")

        for name, schema in sorted(containers.items()):
            table.add_row(name, schema.title or "[dim]default[/dim]", str(len(schema.entries)), schema.description)

        self._console.print(table)

    def print_config_summary(self, config_path: str, containers_count: int) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {config_path}\n" f"Containers: {containers_count}",
                title="valsync Configuration",
                border_style="blue",
            )
        )

    def ask(self, message: str, *, default: str = "", choices: Optional[list[str]] = None) -> str:
        """Ask for a line of text."""
        return Prompt.ask(message, console=self._console, default=default, choices=choices)

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask for a yes/no answer."""
        return Confirm.ask(message, console=self._console, default=default)


def create_console(*, verbose: bool = False, colored: bool = True, stderr: bool = False) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.
        stderr: Write to stderr instead of stdout.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored, stderr=stderr)
