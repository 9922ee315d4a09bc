"""Tests for configuration management."""

import json
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from wallhue.utils.config import Config, ConfigManager


class TestConfigModel:
    """Validated flat settings."""

    def test_defaults(self):
        config = Config()

        assert config.sample_stride == 5
        assert config.bucket_size == 15
        assert config.max_clusters == 6
        assert config.wall_threshold == 0.6
        assert config.biased_average is False
        assert config.tolerance == 80
        assert config.variation_wall_threshold == 0.5
        assert config.blend_mode == "linear"
        assert config.max_image_size == (800, 600)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("sample_stride", 0),
            ("bucket_size", 0),
            ("tolerance", -1),
            ("wall_threshold", 1.5),
            ("blend_mode", "sparkle"),
            ("workers", 0),
        ],
    )
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Config(**{field: value})


class TestConfigManager:
    """Nested settings, files, environment and profiles."""

    def test_default_model_matches_config_defaults(self):
        assert ConfigManager().get_config_model() == Config()

    def test_dotted_access(self):
        manager = ConfigManager()

        assert manager.get("analysis.bucket_size") == 15
        assert manager.get("analysis.missing", "fallback") == "fallback"

        manager.set("replacement.tolerance", 42)
        manager.set("extra.nested.value", 1)

        assert manager.get("replacement.tolerance") == 42
        assert manager.get("extra.nested.value") == 1

    def test_load_yaml_merges_with_defaults(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "wallhue.yaml"
            path.write_text(yaml.dump({"analysis": {"max_clusters": 3}}))

            manager = ConfigManager(path)

        assert manager.get("analysis.max_clusters") == 3
        assert manager.get("analysis.sample_stride") == 5
        assert manager.get_config_model().max_clusters == 3

    def test_load_json(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "wallhue.json"
            path.write_text(json.dumps({"replacement": {"blend_mode": "smooth"}}))

            manager = ConfigManager(path)

        assert manager.get_config_model().blend_mode == "smooth"

    def test_malformed_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "broken.json"
            path.write_text("{not json")

            with pytest.raises(ValueError):
                ConfigManager(path)

    def test_non_mapping_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "list.yaml"
            path.write_text("- 1\n- 2\n")

            with pytest.raises(ValueError):
                ConfigManager(path)

    def test_save_and_reload(self):
        manager = ConfigManager()
        manager.set("analysis.bucket_size", 20)

        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "nested" / "saved.yml"
            manager.save_config(path)

            reloaded = ConfigManager(path)

        assert reloaded.get("analysis.bucket_size") == 20

    def test_save_without_path(self):
        with pytest.raises(ValueError):
            ConfigManager().save_config()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WALLHUE_SAMPLE_STRIDE", "2")
        monkeypatch.setenv("WALLHUE_BIASED_AVERAGE", "true")
        monkeypatch.setenv("WALLHUE_TOLERANCE", "55.5")
        monkeypatch.setenv("WALLHUE_BLEND_MODE", "natural")

        config = ConfigManager.from_env().get_config_model()

        assert config.sample_stride == 2
        assert config.biased_average is True
        assert config.tolerance == 55.5
        assert config.blend_mode == "natural"

    def test_validate_default(self):
        assert ConfigManager().validate_config() == (True, [])

    def test_validate_reports_each_problem(self):
        manager = ConfigManager()
        manager.set("analysis.sample_stride", 0)
        manager.set("replacement.blend_mode", "sparkle")

        valid, errors = manager.validate_config()

        assert not valid
        assert len(errors) == 2
        assert any("sample_stride" in e for e in errors)
        assert any("blend_mode" in e for e in errors)

    def test_validate_non_numeric_env_value(self, monkeypatch):
        monkeypatch.setenv("WALLHUE_SAMPLE_STRIDE", "fast")

        valid, errors = ConfigManager.from_env().validate_config()

        assert not valid
        assert errors == ["analysis.sample_stride must be an integer, got 'fast'"]

    def test_validate_null_section(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "wallhue.yaml"
            path.write_text("analysis: null\n")

            manager = ConfigManager(path)

        valid, errors = manager.validate_config()

        assert not valid
        assert errors == ["analysis must be a mapping"]

    def test_validate_zero_tolerance(self):
        manager = ConfigManager()
        manager.set("replacement.tolerance", 0)

        assert manager.validate_config() == (True, [])

    def test_apply_profile(self):
        manager = ConfigManager()
        manager.apply_profile("precise")

        config = manager.get_config_model()
        assert config.sample_stride == 1
        assert config.blend_mode == "natural"
        assert config.max_image_size == (1600, 1200)
        assert config.bucket_size == 15

    def test_unknown_profile(self):
        with pytest.raises(ValueError):
            ConfigManager().apply_profile("ultra")
