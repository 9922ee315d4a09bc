"""Configuration management for wallhue."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field

from .logging import get_logger

logger = get_logger(__name__)


class Config(BaseModel):
    """Flat, validated view of the settings used by the analysis pipeline."""

    sample_stride: int = Field(5, ge=1)
    bucket_size: int = Field(15, ge=1, le=255)
    max_clusters: int = Field(6, ge=1)
    wall_threshold: float = Field(0.6, ge=0.0, le=1.0)
    biased_average: bool = False
    tolerance: float = Field(80.0, ge=0)
    variation_wall_threshold: float = Field(0.5, ge=0.0, le=1.0)
    mask_wall_threshold: float = Field(0.6, ge=0.0, le=1.0)
    blend_mode: Literal["linear", "natural", "smooth"] = "linear"
    workers: int = Field(1, ge=1)
    max_image_size: tuple[int, int] = (800, 600)


class ConfigManager:
    """Manage configuration settings for wallhue."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = Path(config_path) if config_path else None
        self._config = self.get_default_config()

        if self.config_path and self.config_path.exists():
            self.load_config()

    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "analysis": {
                "sample_stride": 5,
                "bucket_size": 15,
                "max_clusters": 6,
                "wall_threshold": 0.6,
                "biased_average": False,
            },
            "replacement": {
                "tolerance": 80,
                "variation_wall_threshold": 0.5,
                "blend_mode": "linear",
                "workers": 1,
            },
            "mask": {
                "wall_threshold": 0.6,
            },
            "image": {
                "max_width": 800,
                "max_height": 600,
            },
        }

    def load_config(self) -> None:
        """Load configuration from file."""
        if not self.config_path or not self.config_path.exists():
            return

        try:
            with open(self.config_path, "r") as f:
                if self.config_path.suffix.lower() in (".yaml", ".yml"):
                    loaded_config = yaml.safe_load(f) or {}
                else:
                    loaded_config = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ValueError(
                f"Failed to load configuration from {self.config_path}: {e}"
            ) from e

        if not isinstance(loaded_config, dict):
            raise ValueError(
                f"Configuration in {self.config_path} must be a mapping"
            )

        self._config = self._deep_merge(self._config, loaded_config)
        logger.debug(f"Loaded configuration from {self.config_path}")

    def save_config(self, output_path: Optional[Union[str, Path]] = None) -> None:
        """Save current configuration to file.

        Args:
            output_path: Optional output path, defaults to current config_path
        """
        save_path = Path(output_path) if output_path else self.config_path

        if not save_path:
            raise ValueError("No output path specified")

        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w") as f:
            if save_path.suffix.lower() in (".yaml", ".yml"):
                yaml.dump(self._config, f, default_flow_style=False, indent=2)
            else:
                json.dump(self._config, f, indent=2)

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration."""
        return self._config.copy()

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self._config

        try:
            for k in key.split("."):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def update(self, updates: Dict[str, Any]) -> None:
        """Update configuration with dictionary of changes."""
        self._config = self._deep_merge(self._config, updates)

    def _deep_merge(self, base: Dict, update: Dict) -> Dict:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get_config_model(self) -> Config:
        """Build the validated :class:`Config` from the nested settings."""
        return Config(
            sample_stride=self.get("analysis.sample_stride", 5),
            bucket_size=self.get("analysis.bucket_size", 15),
            max_clusters=self.get("analysis.max_clusters", 6),
            wall_threshold=self.get("analysis.wall_threshold", 0.6),
            biased_average=self.get("analysis.biased_average", False),
            tolerance=self.get("replacement.tolerance", 80),
            variation_wall_threshold=self.get(
                "replacement.variation_wall_threshold", 0.5
            ),
            blend_mode=self.get("replacement.blend_mode", "linear"),
            workers=self.get("replacement.workers", 1),
            mask_wall_threshold=self.get("mask.wall_threshold", 0.6),
            max_image_size=(
                self.get("image.max_width", 800),
                self.get("image.max_height", 600),
            ),
        )

    @classmethod
    def from_env(cls, config_path: Optional[Union[str, Path]] = None) -> "ConfigManager":
        """Create configuration manager from environment variables."""
        config_manager = cls(config_path)

        env_mappings = {
            "WALLHUE_SAMPLE_STRIDE": "analysis.sample_stride",
            "WALLHUE_BUCKET_SIZE": "analysis.bucket_size",
            "WALLHUE_MAX_CLUSTERS": "analysis.max_clusters",
            "WALLHUE_BIASED_AVERAGE": "analysis.biased_average",
            "WALLHUE_TOLERANCE": "replacement.tolerance",
            "WALLHUE_BLEND_MODE": "replacement.blend_mode",
            "WALLHUE_WORKERS": "replacement.workers",
            "WALLHUE_MASK_THRESHOLD": "mask.wall_threshold",
        }

        for env_var, config_key in env_mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue

            if value.lower() in ("true", "false"):
                value = value.lower() == "true"
            elif value.isdigit():
                value = int(value)
            else:
                try:
                    value = float(value)
                except ValueError:
                    pass  # Keep as string

            config_manager.set(config_key, value)

        return config_manager

    def validate_config(self) -> tuple[bool, list[str]]:
        """Validate current configuration.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        for section in ("analysis", "replacement", "mask", "image"):
            if not isinstance(self.get(section), dict):
                errors.append(f"{section} must be a mapping")
        if errors:
            return False, errors

        def number(key: str, integer: bool = False) -> Optional[float]:
            value = self.get(key)
            kinds = int if integer else (int, float)
            if isinstance(value, bool) or not isinstance(value, kinds):
                kind = "an integer" if integer else "a number"
                errors.append(f"{key} must be {kind}, got {value!r}")
                return None
            return value

        sample_stride = number("analysis.sample_stride", integer=True)
        if sample_stride is not None and sample_stride < 1:
            errors.append("analysis.sample_stride must be at least 1")

        bucket_size = number("analysis.bucket_size", integer=True)
        if bucket_size is not None and not (1 <= bucket_size <= 255):
            errors.append("analysis.bucket_size must be between 1 and 255")

        max_clusters = number("analysis.max_clusters", integer=True)
        if max_clusters is not None and max_clusters < 1:
            errors.append("analysis.max_clusters must be positive")

        wall_threshold = number("analysis.wall_threshold")
        if wall_threshold is not None and not (0 <= wall_threshold <= 1):
            errors.append("analysis.wall_threshold must be between 0 and 1")

        tolerance = number("replacement.tolerance")
        if tolerance is not None and tolerance < 0:
            errors.append("replacement.tolerance must not be negative")

        if self.get("replacement.blend_mode") not in ("linear", "natural", "smooth"):
            errors.append(
                "replacement.blend_mode must be one of linear, natural, smooth"
            )

        workers = number("replacement.workers", integer=True)
        if workers is not None and workers < 1:
            errors.append("replacement.workers must be at least 1")

        mask_threshold = number("mask.wall_threshold")
        if mask_threshold is not None and not (0 <= mask_threshold <= 1):
            errors.append("mask.wall_threshold must be between 0 and 1")

        return len(errors) == 0, errors

    def get_profile_configs(self) -> Dict[str, Dict]:
        """Get predefined configuration profiles."""
        return {
            "fast": {
                "analysis": {"sample_stride": 10, "max_clusters": 4},
                "image": {"max_width": 640, "max_height": 480},
            },
            "balanced": {
                "analysis": {"sample_stride": 5, "max_clusters": 6},
                "image": {"max_width": 800, "max_height": 600},
            },
            "precise": {
                "analysis": {"sample_stride": 1, "max_clusters": 8},
                "replacement": {"blend_mode": "natural"},
                "image": {"max_width": 1600, "max_height": 1200},
            },
        }

    def apply_profile(self, profile_name: str) -> None:
        """Apply a predefined configuration profile.

        Args:
            profile_name: Name of profile to apply
        """
        profiles = self.get_profile_configs()

        if profile_name not in profiles:
            raise ValueError(
                f"Unknown profile: {profile_name}. Available: {list(profiles.keys())}"
            )

        self.update(profiles[profile_name])
