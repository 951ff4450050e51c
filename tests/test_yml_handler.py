"""
Tests for preset.YmlHandler class.
"""

from pathlib import Path

import pytest
import yaml

from fitness.preset import YmlHandler


class TestYmlHandler:
    """Test suite for YmlHandler."""

    def test_init_with_existing_file(self, temp_dir):
        """Test initializing YmlHandler with an existing file."""
        preset_path = temp_dir / "test_preset.yml"
        data = {"NAME": "test", "VALUE": 42}
        with preset_path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f)

        handler = YmlHandler(preset_path)
        assert handler.path == preset_path
        assert handler.get("NAME") == "test"
        assert handler.get("VALUE") == 42

    def test_init_with_nonexistent_file(self, temp_dir):
        """Test initializing YmlHandler with a non-existent file."""
        preset_path = temp_dir / "nonexistent.yml"
        handler = YmlHandler(preset_path)
        assert handler.path == preset_path
        assert handler.get("NAME") is None
        assert handler.state == {}

    def test_init_with_empty_file(self, temp_dir):
        """Test that an empty file is an empty preset."""
        preset_path = temp_dir / "empty.yml"
        preset_path.write_text("", encoding="utf-8")
        assert YmlHandler(preset_path).state == {}

    def test_init_with_non_mapping(self, temp_dir):
        """Test that presets must be mappings."""
        preset_path = temp_dir / "list.yml"
        preset_path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            YmlHandler(preset_path)

    def test_get_with_default(self, preset_handler):
        """Test getting a value with a default."""
        assert preset_handler.get("NONEXISTENT", "default") == "default"
        assert preset_handler.get("NAME", "default") == "test_gym"

    def test_set_value(self, preset_handler, temp_preset_file):
        """Test setting a value."""
        preset_handler.set("LAST_SAVED", "2024-01-01T00:00:00")
        assert preset_handler.get("LAST_SAVED") == "2024-01-01T00:00:00"

        # Verify it's persisted to file
        handler2 = YmlHandler(temp_preset_file)
        assert handler2.get("LAST_SAVED") == "2024-01-01T00:00:00"
        assert handler2.get("NAME") == "test_gym"

    def test_get_bool(self, preset_handler):
        """Test flags given as booleans or strings."""
        assert preset_handler.get_bool("AUTOLOAD") is True
        assert preset_handler.get_bool("MISSING") is False
        assert preset_handler.get_bool("MISSING", True) is True

        preset_handler.state["AUTOSAVE"] = "no"
        assert preset_handler.get_bool("AUTOSAVE", True) is False
        preset_handler.state["AUTOSAVE"] = "Yes"
        assert preset_handler.get_bool("AUTOSAVE") is True
        preset_handler.state["AUTOSAVE"] = "sometimes"
        assert preset_handler.get_bool("AUTOSAVE", True) is True

    def test_get_path(self, preset_handler, temp_dir):
        """Test paths relative to the preset's folder."""
        assert preset_handler.get_path("STATE_FILE", Path("x.yml")) == (
            temp_dir / "state.yml"
        )
        assert preset_handler.get_path("MISSING", Path("x.yml")) == temp_dir / "x.yml"

        absolute = temp_dir / "elsewhere" / "state.yml"
        preset_handler.state["STATE_FILE"] = str(absolute)
        assert preset_handler.get_path("STATE_FILE", Path("x.yml")) == absolute
