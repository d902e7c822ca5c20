"""Configuration file handling for picklist."""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .logger import get_logger

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = get_logger("config")


@dataclass
class ListConfig:
    """List-related settings."""

    max_results: int = 0  # 0 = unbounded
    empty_message: str = "No matches found"

    @property
    def result_cap(self) -> Optional[int]:
        return self.max_results if self.max_results > 0 else None


@dataclass
class FilterConfig:
    """Filter-related settings."""

    scorer: str = "subsequence"  # "subsequence" or "tolerant"
    threshold: int = 80


@dataclass
class UIConfig:
    """UI-related settings."""

    show_count: bool = True
    placeholder: str = "Filter..."


@dataclass
class Config:
    """Main configuration container."""

    list: ListConfig = field(default_factory=ListConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def find_config_file(cwd: Path | None = None) -> Path | None:
    """Find config file in the working directory or user config dir."""
    candidates = []

    if cwd:
        candidates.append(cwd / ".picklistrc")
        candidates.append(cwd / ".picklistrc.toml")

    config_home = Path.home() / ".config" / "picklist"
    candidates.append(config_home / "config.toml")

    for path in candidates:
        if path.exists():
            return path

    return None


def _typed(section: dict, key: str, default, kind: type):
    value = section.get(key, default)
    # bool is an int subclass; keep them apart
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        logger.warning(f"Ignoring config value {key}={value!r}: expected {kind.__name__}")
        return default
    return value


def load_config(cwd: Path | None = None) -> Config:
    """Load configuration from file or return defaults."""
    config_path = find_config_file(cwd)

    if config_path is None:
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Could not read {config_path}: {e}")
        return Config()

    config = Config()

    if "list" in data:
        ls = data["list"]
        config.list = ListConfig(
            max_results=_typed(ls, "max_results", config.list.max_results, int),
            empty_message=_typed(ls, "empty_message", config.list.empty_message, str),
        )

    if "filter" in data:
        fl = data["filter"]
        config.filter = FilterConfig(
            scorer=_typed(fl, "scorer", config.filter.scorer, str),
            threshold=_typed(fl, "threshold", config.filter.threshold, int),
        )

    if "ui" in data:
        ui = data["ui"]
        config.ui = UIConfig(
            show_count=_typed(ui, "show_count", config.ui.show_count, bool),
            placeholder=_typed(ui, "placeholder", config.ui.placeholder, str),
        )

    logger.debug(f"Loaded config from {config_path}")
    return config
