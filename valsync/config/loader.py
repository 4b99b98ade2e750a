# Valsync Configuration Loader
# Reads container declarations from YAML and checks them

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from valsync.config.defaults import DEFAULT_CONFIG, generate_default_config
from valsync.config.schema import ValsyncConfig

CONFIG_ENV_VAR = "VALSYNC_CONFIG"
CONFIG_FILENAME = "config.yaml"


def get_config_dir() -> Path:
    """Directory holding the valsync config and state files."""
    return Path.home() / ".config" / "valsync"


def get_config_path() -> Path:
    """
    Locate the configuration file.

    ``$VALSYNC_CONFIG`` wins over ``~/.config/valsync/config.yaml``.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / CONFIG_FILENAME


def _resolve(config_path: Optional[Path]) -> Path:
    return get_config_path() if config_path is None else config_path


def _read_yaml(config_path: Path) -> Optional[dict[str, Any]]:
    """Parse a YAML file; None for an empty document."""
    text = config_path.read_text(encoding="utf-8")
    return yaml.safe_load(text)


def load_config(config_path: Optional[Path] = None) -> ValsyncConfig:
    """
    Load and validate the container declarations.

    Args:
        config_path: Config file to read. Defaults to get_config_path().

    Returns:
        ValsyncConfig with defaults filled in for missing sections.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValidationError: If a declaration is inconsistent.
    """
    path = _resolve(config_path)
    if not path.is_file():
        raise FileNotFoundError(
            f"Configuration file not found: {path}\nRun 'valsync config init' to create one."
        )

    data = _read_yaml(path) or {}
    if isinstance(data, dict):
        data = _merge_with_defaults(data)
    return ValsyncConfig.model_validate(data)


def save_config(config: ValsyncConfig, config_path: Optional[Path] = None) -> Path:
    """
    Write a configuration back to YAML.

    Entry kinds are written as their plain string values.

    Returns:
        The path written to.
    """
    path = _resolve(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    dumped = yaml.dump(
        config.model_dump(exclude_none=True, mode="json"),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    path.write_text(dumped, encoding="utf-8")
    return path


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Create the commented default config unless one is already there.

    Returns:
        Tuple of (config_path, created).
    """
    path = _resolve(config_path)
    if path.exists():
        return path, False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_default_config(), encoding="utf-8")
    return path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Check a config file and collect readable problems.

    Unlike load_config, nothing is raised and no defaults are merged in,
    so a file missing its containers section is reported.

    Returns:
        Tuple of (is_valid, messages).
    """
    path = _resolve(config_path)
    if not path.is_file():
        return False, [f"Configuration file not found: {path}"]

    try:
        data = _read_yaml(path)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]
    if data is None:
        return False, ["Configuration file is empty"]

    try:
        config = ValsyncConfig.model_validate(data)
    except ValidationError as e:
        return False, [_format_error(error) for error in e.errors()]

    if not config.containers:
        return False, ["No containers defined"]

    problems = [
        f"Container '{name}' declares no entries"
        for name, schema in config.containers.items()
        if not schema.entries
    ]
    return not problems, problems


def _format_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "<root>"
    return f"{location}: {error['msg']}"


def _merge_with_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Fill missing top-level sections from DEFAULT_CONFIG."""
    merged = dict(data)
    merged.setdefault("state_file", DEFAULT_CONFIG["state_file"])
    merged["containers"] = data.get("containers") or {}
    merged["output"] = {**DEFAULT_CONFIG["output"], **(data.get("output") or {})}
    return merged
