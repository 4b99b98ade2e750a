# Valsync Test Fixtures
# Pytest fixtures for valsync tests

import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Optional

import pytest
import yaml

from valsync.container import Location
from valsync.entries import Entry, SliderEntry, SwitchEntry, TextEntry, ToggleEntry


class RecordingContainer:
    """Container holding fixed entry factories and recording applied batches."""

    def __init__(self, factory, title: Optional[str] = None):
        self.factory = factory
        self.title = title
        self.batches: list[tuple[Location, dict[str, Entry]]] = []

    def get_entries(self, location: Location) -> list[Entry]:
        return self.factory(location)

    def get_title(self, location: Location) -> Optional[str]:
        return self.title

    def read_entries(self, location: Location, entries: dict[str, Entry]) -> None:
        self.batches.append((location, entries))


def speaker_entries() -> list[Entry]:
    """Fresh clean speaker entries."""
    return [
        SliderEntry(name="volume", display_name="Volume", minimum=0, maximum=100, value=50, integral=True),
        TextEntry(name="label", display_name="Label"),
        ToggleEntry(name="muted"),
        SwitchEntry(name="mode", choices=["once", "loop", "shuffle"]),
    ]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("VALSYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def speaker() -> list[Entry]:
    """Speaker entries as a mirrored side would materialize them."""
    return speaker_entries()


@pytest.fixture
def receiver() -> RecordingContainer:
    """Receiving container declaring the speaker entries."""
    return RecordingContainer(lambda location: speaker_entries(), title="Speaker")


@pytest.fixture
def state_file(temp_dir: Path) -> Path:
    """Path for a state file."""
    return temp_dir / "state" / "state.yaml"


@pytest.fixture
def sample_config(state_file: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "state_file": str(state_file),
        "containers": {
            "speaker": {
                "title": "Speaker Settings",
                "description": "Test speaker",
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
                    {"name": "label", "kind": "text", "label": "Label", "default": ""},
                    {"name": "muted", "kind": "toggle", "default": False},
                    {"name": "mode", "kind": "switch", "choices": ["once", "loop", "shuffle"]},
                    {
                        "name": "bass",
                        "kind": "slider",
                        "minimum": -10,
                        "maximum": 10,
                        "locations": ["studio"],
                    },
                ],
            },
            "lamp": {
                "entries": [
                    {"name": "power", "kind": "toggle", "default": True},
                ],
            },
        },
        "output": {"verbose": False, "colored": False},
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "config" / "config.yaml"
    config_path.parent.mkdir(parents=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path


@pytest.fixture
def make_container():
    """Factory for recording containers over an entry factory."""

    def _make(factory, title: Optional[str] = None) -> RecordingContainer:
        return RecordingContainer(factory, title=title)

    return _make
