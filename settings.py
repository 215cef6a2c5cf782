"""JSON-based settings and widget state persistence."""

import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from loguru import logger

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".month-widget-settings.json")
_STORE_PATH = os.path.join(os.path.expanduser("~"), ".month-widget-store.json")

_DEFAULTS = {
    "label_format": "%Y/%m",
    "dark_mode": False,
    "widget_width": 360,
    "widget_height": 240,
    "refresh_minutes": 30,
    "instances": 1,
    "store_path": None,
    "log_level": "INFO",
    "log_dir": None,
}

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(path or _SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            return settings
        if "dark_mode" in stored and isinstance(stored["dark_mode"], bool):
            settings["dark_mode"] = stored["dark_mode"]
        for key in ("widget_width", "widget_height", "refresh_minutes", "instances"):
            value = stored.get(key)
            # bool is an int subclass
            if isinstance(value, int) and not isinstance(value, bool) and value > 0:
                settings[key] = value
        if isinstance(stored.get("label_format"), str) and stored["label_format"]:
            settings["label_format"] = stored["label_format"]
        if isinstance(stored.get("store_path"), str) and stored["store_path"]:
            settings["store_path"] = stored["store_path"]
        if isinstance(stored.get("log_dir"), str) and stored["log_dir"]:
            settings["log_dir"] = stored["log_dir"]
        if isinstance(stored.get("log_level"), str) and stored["log_level"].upper() in _LOG_LEVELS:
            settings["log_level"] = stored["log_level"].upper()
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        pass
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def store_path(settings: dict) -> str:
    """Return the state file configured in *settings*."""
    return os.path.expanduser(settings.get("store_path") or _STORE_PATH)


# ------------------------------------------------------------------
# Key-value stores for widget state
# ------------------------------------------------------------------
class Snapshot:
    """Mutable view of the store contents inside one transaction."""

    __slots__ = ("data", "dirty")

    def __init__(self, data: dict[str, str]) -> None:
        self.data = data
        self.dirty = False

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"store values must be str, got {type(value).__name__}")
        if self.data.get(key) != value:
            self.data[key] = value
            self.dirty = True

    def keys(self) -> list[str]:
        return list(self.data)


class _Store:
    """String-to-string store; every call re-reads the backing data."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def _read(self) -> dict[str, str]:
        raise NotImplementedError

    def _write(self, data: dict[str, str]) -> None:
        raise NotImplementedError

    @contextmanager
    def transaction(self) -> Iterator[Snapshot]:
        """Read-modify-write under the store lock.

        Changes are written once on clean exit and dropped if the block raises.
        """
        with self._lock:
            snapshot = Snapshot(self._read())
            yield snapshot
            if snapshot.dirty:
                self._write(snapshot.data)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self.transaction() as snapshot:
            snapshot.set(key, value)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._read())


class MemoryStore(_Store):
    """In-process store, used by tests and headless runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__()
        self._data: dict[str, str] = dict(initial or {})

    def _read(self) -> dict[str, str]:
        return dict(self._data)

    def _write(self, data: dict[str, str]) -> None:
        self._data = dict(data)


class JsonStore(_Store):
    """Store backed by a flat JSON object on disk."""

    def __init__(self, path: str | os.PathLike) -> None:
        super().__init__()
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Unreadable state file {}: {}", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("State file {} is not a JSON object, ignoring it", self.path)
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        os.replace(tmp, self.path)
