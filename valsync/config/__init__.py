# Valsync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from valsync.config.defaults import DEFAULT_CONFIG, generate_default_config, get_default_config
from valsync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from valsync.config.schema import (
    ContainerSchema,
    EntrySpec,
    OutputConfig,
    ValsyncConfig,
    pattern_validator,
)

__all__ = [
    # Schema
    "ValsyncConfig",
    "ContainerSchema",
    "EntrySpec",
    "OutputConfig",
    "pattern_validator",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
    "get_default_config",
]
