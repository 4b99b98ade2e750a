"""Click-based CLI for valsync."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.logging import RichHandler
from rich.markup import escape

from valsync import __version__
from valsync.codec import Payload, decode, encode
from valsync.config import (
    ValsyncConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from valsync.container import resolve_title
from valsync.declared import DeclaredContainer
from valsync.editor import apply_edits, parse_assignments, prompt_entries
from valsync.errors import PayloadFormatError
from valsync.output.console import Console, create_console
from valsync.state import StateManager

DEFAULT_LOCATION = "default"


def _setup_logging(console: Console, level: str) -> None:
    """Route library log records through Rich."""
    handler = RichHandler(console=console.rich, show_time=False, show_path=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def _load(ctx: click.Context, *, stderr: bool = False) -> tuple[ValsyncConfig, Console]:
    """
    Load configuration and create the console, exiting on errors.

    Commands that print a payload to stdout pass ``stderr=True`` so that
    diagnostics and log records stay out of it.
    """
    verbose = ctx.obj["verbose"]
    try:
        config = load_config(ctx.obj["config_path"])
    except FileNotFoundError as e:
        create_console(verbose=verbose, stderr=stderr).print_error(str(e))
        sys.exit(1)
    except ValidationError as e:
        create_console(verbose=verbose, stderr=stderr).print_error(f"Invalid configuration:\n{escape(str(e))}")
        sys.exit(1)

    console = create_console(
        verbose=verbose or config.output.verbose,
        colored=config.output.colored,
        stderr=stderr,
    )
    _setup_logging(console, "INFO" if verbose else config.output.log_level)
    return config, console


def _get_container(config: ValsyncConfig, name: str, console: Console) -> DeclaredContainer:
    """Build the named container, exiting if it is not declared."""
    schema = config.get_container(name)
    if schema is None:
        console.print_error(f"Container '{name}' not found in configuration")
        sys.exit(1)
    return DeclaredContainer(name, schema, StateManager(Path(config.state_file)))


def _write_payload(payload: Payload, output: Optional[Path]) -> None:
    """Write an encoded payload to a file, or stdout if none given."""
    if output is None:
        click.echo(payload.dumps().decode("utf-8"))
    else:
        output.write_bytes(payload.dumps())


location_option = click.option(
    "--location",
    "-l",
    default=DEFAULT_LOCATION,
    show_default=True,
    help="Location key of the container instance",
)


@click.group()
@click.version_option(version=__version__, prog_name="valsync")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Configuration file (default: ~/.config/valsync/config.yaml or $VALSYNC_CONFIG)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """valsync - synchronize named, typed entries between two sides.

    \b
    Edit entries on one side, send the changed ones as a payload,
    and apply the payload on the other side.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


@cli.command("list")
@click.pass_context
def list_containers(ctx: click.Context) -> None:
    """List declared containers."""
    config, console = _load(ctx)
    console.print_containers(config.containers)


@cli.command()
@click.argument("container_name")
@location_option
@click.pass_context
def show(ctx: click.Context, container_name: str, location: str) -> None:
    """Show the entries of a container."""
    config, console = _load(ctx)
    container = _get_container(config, container_name, console)

    title = resolve_title(container, location, default=f"{container_name} @ {location}")
    console.print_entries(title, container.get_entries(location))


@cli.command("set")
@click.argument("container_name")
@click.argument("assignments", nargs=-1, required=True)
@location_option
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the payload to a file")
@click.pass_context
def set_entries(
    ctx: click.Context,
    container_name: str,
    assignments: tuple[str, ...],
    location: str,
    output: Optional[Path],
) -> None:
    """Edit entries and encode the changed ones.

    \b
    Example:
        valsync set speaker volume=75 label=kitchen -o payload.json
    """
    config, console = _load(ctx, stderr=output is None)
    container = _get_container(config, container_name, console)

    try:
        edits = parse_assignments(assignments)
    except ValueError as e:
        console.print_error(str(e))
        sys.exit(1)

    entries = container.get_entries(location)
    edit_errors = apply_edits(entries, edits)
    for error in edit_errors:
        console.print_error(escape(str(error)))

    result = encode(entries)
    _write_payload(result.payload, output)
    container.store_edits(location, entries)

    if output is not None:
        console.print_encode_result(result)

    if edit_errors or not result.success:
        sys.exit(1)


@cli.command()
@click.argument("container_name")
@location_option
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the payload to a file")
@click.pass_context
def edit(ctx: click.Context, container_name: str, location: str, output: Optional[Path]) -> None:
    """Edit entries interactively and encode the changed ones."""
    config, console = _load(ctx, stderr=output is None)
    container = _get_container(config, container_name, console)

    title = resolve_title(container, location, default=f"{container_name} @ {location}")
    entries = container.get_entries(location)
    console.print_entries(title, entries)

    changed = prompt_entries(entries, console)
    if not changed:
        console.print_info("Nothing changed")
        return

    result = encode(entries)
    _write_payload(result.payload, output)
    container.store_edits(location, entries)

    if output is not None:
        console.print_encode_result(result)

    if not result.success:
        sys.exit(1)


@cli.command()
@click.argument("container_name")
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@location_option
@click.option("--strict", is_flag=True, help="Exit with an error if any field failed to apply")
@click.pass_context
def apply(ctx: click.Context, container_name: str, payload_file: Path, location: str, strict: bool) -> None:
    """Apply a payload file to a container."""
    config, console = _load(ctx)
    container = _get_container(config, container_name, console)

    try:
        payload = Payload.loads(payload_file.read_bytes())
    except PayloadFormatError as e:
        console.print_error(str(e))
        sys.exit(1)

    result = decode(container, location, payload)
    console.print_decode_result(result)

    if strict and not result.success:
        sys.exit(1)


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration file commands."""
    pass


@config.command("init")
@click.pass_context
def config_init(ctx: click.Context) -> None:
    """Create a default configuration file."""
    console = create_console()
    config_path, created = ensure_config_exists(ctx.obj["config_path"])
    if created:
        console.print_success(f"Created configuration: {config_path}")
    else:
        console.print_info(f"Configuration already exists: {config_path}")


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show configuration summary."""
    config, console = _load(ctx)
    config_path = ctx.obj["config_path"] or get_config_path()
    console.print_config_summary(str(config_path), len(config.containers))


@config.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the configuration file."""
    console = create_console()
    is_valid, errors = validate_config_file(ctx.obj["config_path"])
    if is_valid:
        console.print_success("Configuration is valid")
        return

    for error in errors:
        console.print_error(error)
    sys.exit(1)
