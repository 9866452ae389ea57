"""Runtime settings for the closet randomizer.

Settings come from an optional flat YAML file selected by ``APP_ENV``
(``config/environments/<env>.yaml``, directory overridable through
``CLOSET_CONFIG_DIR``) or named directly by ``APP_CONFIG_PATH``. Upper-case
environment variables override file values key by key.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

DEFAULT_MIN_ITEMS = 2
DEFAULT_MAX_ITEMS = 4
DEFAULT_ITEMS_PATH = "data/items.json"
DEFAULT_CONFIG_DIR = "config/environments"


@dataclass
class ClosetConfig:
    """Process-wide defaults.

    These only seed ``RandomizeOptions`` when a caller leaves a bound unset;
    the engine itself never reads them.
    """

    default_min_items: int = DEFAULT_MIN_ITEMS
    default_max_items: int = DEFAULT_MAX_ITEMS
    items_path: str = DEFAULT_ITEMS_PATH
    db_path: Optional[str] = None
    random_seed: Optional[int] = None
    log_level: str = "INFO"
    environment: Optional[str] = None

    def __post_init__(self) -> None:
        if self.default_min_items < 0 or self.default_max_items < self.default_min_items:
            raise ValueError(
                f"Invalid default item bounds: min={self.default_min_items}, max={self.default_max_items}"
            )

    @classmethod
    def from_env(cls) -> "ClosetConfig":
        environment = os.getenv("APP_ENV") or None
        path = _config_file_path(environment)
        file_values = read_flat_yaml(path) if path is not None and path.exists() else {}

        def setting(key: str) -> Optional[str]:
            value = os.getenv(key.upper(), file_values.get(key))
            return value if value not in (None, "") else None

        return cls(
            default_min_items=_parse_int(setting("default_min_items"), DEFAULT_MIN_ITEMS),
            default_max_items=_parse_int(setting("default_max_items"), DEFAULT_MAX_ITEMS),
            items_path=setting("items_path") or DEFAULT_ITEMS_PATH,
            db_path=setting("db_path"),
            random_seed=_parse_int(setting("random_seed"), None),
            log_level=(setting("log_level") or "INFO").upper(),
            environment=environment,
        )


def _config_file_path(environment: Optional[str]) -> Optional[Path]:
    explicit = os.getenv("APP_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    if environment:
        return Path(os.getenv("CLOSET_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{environment}.yaml"
    return None


def read_flat_yaml(path: Path) -> Dict[str, str]:
    """Read ``key: value`` lines; nesting, lists and anchors are not supported."""

    values: Dict[str, str] = {}
    for raw_line in path.read_text().splitlines():
        line = raw_line.split(" #", 1)[0].strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition(":")
        if not sep:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key.strip()] = value
    return values


def _parse_int(raw: Optional[str], default: Optional[int]) -> Optional[int]:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Expected an integer configuration value, got {raw!r}") from None


__all__ = ["ClosetConfig", "DEFAULT_MIN_ITEMS", "DEFAULT_MAX_ITEMS", "read_flat_yaml"]
