# Valsync Config Tests
# Tests for configuration schema, loading, and defaults

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from valsync.config import (
    DEFAULT_CONFIG,
    ContainerSchema,
    EntrySpec,
    OutputConfig,
    ValsyncConfig,
    ensure_config_exists,
    generate_default_config,
    get_config_path,
    get_default_config,
    load_config,
    save_config,
    validate_config_file,
)
from valsync.entries import EntryKind, SliderEntry, SwitchEntry
from valsync.errors import SchemaError


class TestEntrySpec:
    """Tests for entry declarations."""

    def test_slider_spec(self):
        spec = EntrySpec(name="volume", kind="slider", minimum=0, maximum=100, integral=True, default=50)
        entry = spec.to_entry()
        assert isinstance(entry, SliderEntry)
        assert entry.value == 50

    def test_slider_defaults_to_minimum(self):
        entry = EntrySpec(name="bass", kind="slider", minimum=-10, maximum=10).to_entry()
        assert entry.value == -10

    def test_slider_requires_bounds(self):
        with pytest.raises(ValidationError):
            EntrySpec(name="volume", kind="slider")

    def test_switch_requires_choices(self):
        with pytest.raises(ValidationError):
            EntrySpec(name="mode", kind="switch")

    def test_invalid_default(self):
        with pytest.raises(ValidationError):
            EntrySpec(name="mode", kind="switch", choices=["a"], default="b")

    def test_wrong_default_type(self):
        with pytest.raises(ValidationError):
            EntrySpec(name="muted", kind="toggle", default="yes")

    def test_stored_value_mismatch_raises_schema_error(self):
        spec = EntrySpec(name="mode", kind="switch", choices=["a", "b"])
        with pytest.raises(SchemaError, match="mode"):
            spec.to_entry("z")

    def test_invalid_pattern(self):
        with pytest.raises(ValidationError):
            EntrySpec(name="label", kind="text", pattern="[unclosed")

    def test_pattern_becomes_validator(self):
        entry = EntrySpec(name="code", kind="text", pattern="[A-Z]{3}").to_entry()
        assert entry.parse("abc") is False
        assert entry.parse("ABC") is True

    def test_stored_value_overrides_default(self):
        spec = EntrySpec(name="mode", kind="switch", choices=["a", "b"], default="a")
        entry = spec.to_entry("b")
        assert isinstance(entry, SwitchEntry)
        assert entry.value == "b"
        assert entry.dirty is False

    def test_label(self):
        entry = EntrySpec(name="label", kind="text", label="Display Label").to_entry()
        assert entry.label == "Display Label"

    def test_exposed_at(self):
        spec = EntrySpec(name="bass", kind="toggle", locations=["studio"])
        assert spec.exposed_at("studio")
        assert not spec.exposed_at("kitchen")
        assert EntrySpec(name="x", kind="toggle").exposed_at("anywhere")


class TestContainerSchema:
    """Tests for container declarations."""

    def test_duplicate_names(self):
        with pytest.raises(ValidationError):
            ContainerSchema(
                entries=[
                    {"name": "a", "kind": "text"},
                    {"name": "a", "kind": "toggle"},
                ]
            )

    def test_entries_for_keeps_order(self, sample_config: dict):
        schema = ContainerSchema.model_validate(sample_config["containers"]["speaker"])
        assert [s.name for s in schema.entries_for("kitchen")] == ["volume", "label", "muted", "mode"]

    def test_title_optional(self):
        assert ContainerSchema().title is None


class TestValsyncConfig:
    """Tests for the root model."""

    def test_full_config(self, sample_config: dict):
        config = ValsyncConfig.model_validate(sample_config)
        assert set(config.containers) == {"speaker", "lamp"}
        assert config.get_container("lamp").entries[0].kind == EntryKind.TOGGLE
        assert config.get_container("missing") is None

    def test_state_file_expanded(self, temp_home: Path):
        config = ValsyncConfig(state_file="~/state.yaml")
        assert "~" not in config.state_file

    def test_log_level_normalized(self):
        assert OutputConfig(log_level="debug").log_level == "DEBUG"

    def test_log_level_invalid(self):
        with pytest.raises(ValidationError):
            OutputConfig(log_level="chatty")


class TestConfigLoader:
    """Tests for config loading and saving."""

    def test_load_config(self, config_file: Path):
        config = load_config(config_file)
        assert "speaker" in config.containers

    def test_load_fills_output_defaults(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.dump({"containers": {}}), encoding="utf-8")
        config = load_config(path)
        assert config.output.colored is True

    def test_load_missing_config(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "nonexistent.yaml")

    def test_env_override(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("VALSYNC_CONFIG", str(temp_dir / "custom.yaml"))
        assert get_config_path() == temp_dir / "custom.yaml"

    def test_default_path(self, temp_home: Path):
        assert get_config_path() == temp_home / ".config" / "valsync" / "config.yaml"

    def test_save_config(self, temp_dir: Path, sample_config: dict):
        config = ValsyncConfig.model_validate(sample_config)
        config_path = temp_dir / "saved" / "config.yaml"

        save_config(config, config_path)

        with open(config_path, encoding="utf-8") as f:
            saved = yaml.safe_load(f)
        assert saved["containers"]["speaker"]["entries"][0]["kind"] == "slider"
        assert ValsyncConfig.model_validate(saved).containers.keys() == config.containers.keys()

    def test_ensure_config_exists(self, temp_dir: Path):
        path = temp_dir / "new" / "config.yaml"
        assert ensure_config_exists(path) == (path, True)
        assert ensure_config_exists(path) == (path, False)
        assert "speaker" in load_config(path).containers

    def test_validate_valid_config(self, config_file: Path):
        is_valid, errors = validate_config_file(config_file)
        assert is_valid is True
        assert errors == []

    def test_validate_invalid_yaml(self, temp_dir: Path):
        bad_file = temp_dir / "bad.yaml"
        bad_file.write_text("{ invalid yaml [", encoding="utf-8")

        is_valid, errors = validate_config_file(bad_file)
        assert is_valid is False
        assert errors

    def test_validate_schema_errors(self, temp_dir: Path):
        bad_file = temp_dir / "bad.yaml"
        bad_file.write_text(
            yaml.dump({"containers": {"x": {"entries": [{"name": "v", "kind": "slider"}]}}}),
            encoding="utf-8",
        )

        is_valid, errors = validate_config_file(bad_file)
        assert is_valid is False
        assert any("containers" in e for e in errors)

    def test_validate_no_containers(self, temp_dir: Path):
        path = temp_dir / "empty.yaml"
        path.write_text(yaml.dump({"output": {"verbose": True}}), encoding="utf-8")

        is_valid, errors = validate_config_file(path)
        assert is_valid is False
        assert errors == ["No containers defined"]

    def test_validate_empty_container(self, temp_dir: Path):
        path = temp_dir / "hollow.yaml"
        path.write_text(yaml.dump({"containers": {"shelf": {"title": "Shelf"}}}), encoding="utf-8")

        is_valid, errors = validate_config_file(path)
        assert is_valid is False
        assert errors == ["Container 'shelf' declares no entries"]


class TestDefaults:
    """Tests for default configuration."""

    def test_default_config_validates(self):
        config = ValsyncConfig.model_validate(DEFAULT_CONFIG)
        assert "speaker" in config.containers

    def test_get_default_config_is_copy(self):
        copy = get_default_config()
        copy["containers"].clear()
        assert DEFAULT_CONFIG["containers"]

    def test_generate_default_config(self):
        text = generate_default_config()
        assert text.startswith("# valsync configuration")
        assert yaml.safe_load(text)["containers"]["speaker"]["title"] == "Speaker Settings"
