"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any

APP_HOME = Path.home() / ".selfiegram"


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        self._data: dict[str, Any] = data if isinstance(data, dict) else {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JsonSettings:
        """Build settings from an in-memory mapping."""
        inst = cls.__new__(cls)
        inst._path = None
        inst._data = dict(data)
        return inst

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        node: Any = self._data
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


def _expand_path(raw: Any, default: Path) -> Path:
    if isinstance(raw, str) and raw.strip():
        return Path(os.path.expanduser(os.path.expandvars(raw.strip())))
    return default


def _int_setting(raw: Any, default: int, low: int, high: int) -> int:
    try:
        value = int(raw)
    except (ValueError, TypeError):
        return default
    return min(high, max(low, value))


def _parse_sort_keys(raw: Any) -> list[tuple[str, bool]]:
    # Expect a list like: [{"field":"created","asc":false}, ...]
    result: list[tuple[str, bool]] = []
    if isinstance(raw, list):
        for item in raw:
            if isinstance(item, dict) and "field" in item:
                result.append((str(item.get("field")), bool(item.get("asc", True))))
    return result


@dataclass
class AppSettings:
    """Typed application settings with defaults for every key."""

    documents_dir: Path = APP_HOME / "Documents"
    jpeg_quality: int = 90
    image_mem_cache: int = 256
    log_dir: Path = APP_HOME / "logs"
    log_level: str = "INFO"
    default_sort: list[tuple[str, bool]] = field(default_factory=lambda: [("created", False)])
    new_selfie_title: str = "New Selfie"

    @classmethod
    def from_settings(cls, settings: JsonSettings | None) -> AppSettings:
        """Read typed values from `settings`, falling back to defaults."""
        defaults = cls()
        if settings is None:
            return defaults
        title = settings.get("selfie.new_title", defaults.new_selfie_title)
        level = settings.get("logging.level", defaults.log_level)
        return cls(
            documents_dir=_expand_path(
                settings.get("storage.documents_dir"), defaults.documents_dir
            ),
            jpeg_quality=_int_setting(
                settings.get("storage.jpeg_quality", defaults.jpeg_quality),
                defaults.jpeg_quality,
                1,
                95,
            ),
            image_mem_cache=_int_setting(
                settings.get("storage.image_mem_cache", defaults.image_mem_cache),
                defaults.image_mem_cache,
                1,
                100_000,
            ),
            log_dir=_expand_path(settings.get("logging.dir"), defaults.log_dir),
            log_level=level.upper() if isinstance(level, str) and level else defaults.log_level,
            default_sort=_parse_sort_keys(settings.get("sorting.defaults"))
            or defaults.default_sort,
            new_selfie_title=title if isinstance(title, str) else defaults.new_selfie_title,
        )
