# Valsync Default Configuration
# Default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "state_file": "~/.config/valsync/state.yaml",
    "containers": {
        # Example container mirroring a speaker block
        "speaker": {
            "title": "Speaker Settings",
            "description": "Volume, label and playback mode of a speaker",
            "entries": [
                {
                    "name": "volume",
                    "kind": "slider",
                    "label": "Volume",
                    "minimum": 0,
                    "maximum": 100,
                    "integral": True,
                    "default": 50,
                    "pattern": "[0-9]+",
                },
                {
                    "name": "label",
                    "kind": "text",
                    "label": "Label",
                    "default": "",
                    "max_length": 32,
                },
                {
                    "name": "muted",
                    "kind": "toggle",
                    "label": "Muted",
                    "default": False,
                },
                {
                    "name": "mode",
                    "kind": "switch",
                    "label": "Mode",
                    "choices": ["once", "loop", "shuffle"],
                },
            ],
        },
    },
    "output": {
        "verbose": False,
        "colored": True,
        "log_level": "WARNING",
    },
}


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# valsync configuration
#
# Each container declares the entries it exposes, in display order.
#
# Entry kinds:
#   - text:   free text (optional max_length)
#   - toggle: true/false
#   - switch: one of 'choices'
#   - slider: number clamped to [minimum, maximum] (optional integral)
#
# 'pattern' is a regex the whole editor text must match before a value
# is accepted. 'locations' restricts an entry to specific locations.

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)


def get_default_config() -> dict[str, Any]:
    """Get a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)
