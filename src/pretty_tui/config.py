"""Settings for the form, loaded from ~/.pretty-tui/settings.yaml."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".pretty-tui"
SETTINGS_FILE = CONFIG_DIR / "settings.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Accepted Python types per setting; bool is rejected everywhere
FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "poll_timeout": (int, float),
    "initial_mileage": (int,),
    "distance_km": (int, float),
    "mask_char": (str,),
    "log_capacity": (int,),
    "log_level": (str,),
}


class ConfigError(ValueError):
    """Invalid settings value or file."""


@dataclass
class FormConfig:
    """Configuration for the form controller.

    Attributes:
        poll_timeout: Seconds to wait for input before re-rendering
        initial_mileage: Mileage percentage the form starts with
        distance_km: Distance represented by 100% mileage
        mask_char: Character drawn for each password character
        log_capacity: Log lines kept for the log panel
        log_level: Minimum level shown in the log panel
    """

    poll_timeout: float = 0.05
    initial_mileage: int = 100
    distance_km: float = 5.0
    mask_char: str = "*"
    log_capacity: int = 500
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for name, types in FIELD_TYPES.items():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, types):
                expected = " or ".join(t.__name__ for t in types)
                raise ConfigError(f"{name} must be {expected}, got {value!r}")
        if self.poll_timeout <= 0:
            raise ConfigError(f"poll_timeout must be positive, got {self.poll_timeout}")
        if not 0 <= self.initial_mileage <= 100:
            raise ConfigError(f"initial_mileage must be within 0..100, got {self.initial_mileage}")
        if self.distance_km <= 0:
            raise ConfigError(f"distance_km must be positive, got {self.distance_km}")
        if len(self.mask_char) != 1:
            raise ConfigError(f"mask_char must be a single character, got {self.mask_char!r}")
        if self.log_capacity < 1:
            raise ConfigError(f"log_capacity must be at least 1, got {self.log_capacity}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormConfig:
        """Build from a settings mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown settings: {', '.join(sorted(unknown))}")
        try:
            return cls(**{k: v for k, v in data.items() if k in known})
        except TypeError as e:
            raise ConfigError(f"Invalid settings: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def merged(self, **overrides: Any) -> FormConfig:
        """Copy with non-None overrides applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return FormConfig.from_dict(data)


def load_config(path: Path | None = None) -> FormConfig:
    """Load settings, falling back to defaults when the file is missing."""
    settings_file = path or SETTINGS_FILE
    if not settings_file.exists():
        return FormConfig()

    with open(settings_file) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {settings_file}: {e}") from e

    if data is None:
        return FormConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{settings_file} must contain a mapping")
    section = data.get("form", data)
    if not isinstance(section, dict):
        raise ConfigError(f"{settings_file}: 'form' must be a mapping")
    return FormConfig.from_dict(section)


def save_config(config: FormConfig, path: Path | None = None) -> Path:
    """Write settings as YAML, creating the directory if needed."""
    settings_file = path or SETTINGS_FILE
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    settings = {"version": "1.0", "form": config.to_dict()}
    with open(settings_file, "w") as f:
        yaml.dump(settings, f, default_flow_style=False, sort_keys=False)
    return settings_file
