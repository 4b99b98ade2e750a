# Valsync State Tests
# Tests for value state persistence

import json
from pathlib import Path

from valsync.state import LocationState, StateManager, ValueState, location_key


class TestValueState:
    """Tests for ValueState."""

    def test_empty(self):
        state = ValueState()
        assert state.get_values("kitchen") == {}

    def test_set_values_merges(self):
        state = ValueState()
        state.set_values("kitchen", {"volume": 10})
        state.set_values("kitchen", {"label": "den"})
        assert state.get_values("kitchen") == {"volume": 10, "label": "den"}
        assert state.locations["kitchen"].updated is not None

    def test_get_values_returns_copy(self):
        state = ValueState()
        state.set_values("kitchen", {"volume": 10})
        state.get_values("kitchen")["volume"] = 99
        assert state.get_values("kitchen") == {"volume": 10}

    def test_tuple_location(self):
        state = ValueState()
        state.set_values((1, 64, -3), {"volume": 1})
        assert location_key((1, 64, -3)) in state.locations
        assert state.get_values((1, 64, -3)) == {"volume": 1}

    def test_remove_location(self):
        state = ValueState()
        state.set_values("kitchen", {"volume": 1})
        assert state.remove_location("kitchen") is True
        assert state.remove_location("kitchen") is False

    def test_round_trip_dict(self):
        state = ValueState()
        state.set_values("kitchen", {"volume": 1})
        restored = ValueState.from_dict(state.to_dict())
        assert restored.get_values("kitchen") == {"volume": 1}

    def test_location_state_to_dict(self):
        assert LocationState(location="a", values={"x": 1}).to_dict() == {"values": {"x": 1}}


class TestStateManager:
    """Tests for StateManager."""

    def test_missing_file(self, state_file: Path):
        manager = StateManager(state_file)
        assert manager.get_values("kitchen") == {}

    def test_update_saves(self, state_file: Path):
        manager = StateManager(state_file)
        manager.update_values("kitchen", {"volume": 30})

        assert state_file.exists()
        assert StateManager(state_file).get_values("kitchen") == {"volume": 30}

    def test_load_json_state(self, temp_dir: Path):
        path = temp_dir / "state.json"
        path.write_text(
            json.dumps({"version": "1.0", "locations": {"hall": {"values": {"label": "x"}}}}),
            encoding="utf-8",
        )
        assert StateManager(path).get_values("hall") == {"label": "x"}

    def test_empty_file(self, temp_dir: Path):
        path = temp_dir / "state.yaml"
        path.write_text("", encoding="utf-8")
        assert StateManager(path).state.locations == {}

    def test_clear_location(self, state_file: Path):
        manager = StateManager(state_file)
        manager.update_values("kitchen", {"volume": 30})
        assert manager.clear_location("kitchen") is True
        assert StateManager(state_file).get_values("kitchen") == {}

    def test_reset(self, state_file: Path):
        manager = StateManager(state_file)
        manager.update_values("kitchen", {"volume": 30})
        manager.reset()
        assert StateManager(state_file).state.locations == {}

    def test_default_path(self, temp_home: Path):
        manager = StateManager()
        assert manager.state_path == temp_home / ".config" / "valsync" / "state.yaml"
