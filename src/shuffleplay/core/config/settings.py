"""YAML-backed application settings."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .defaults import DEFAULT_CONFIG, LOG_LEVELS
from shuffleplay.core.env import resolve_config_path
from shuffleplay.core.library import normalize_extensions


def merge_settings(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay ``overrides`` onto a copy of ``defaults``, descending into nested sections."""

    merged: Dict[str, Any] = copy.deepcopy(defaults)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_settings(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


@dataclass
class SettingsManager:
    """YAML configuration with defaults for anything the user file leaves out."""

    config_path: Path = Path("config/settings.yaml")

    def __post_init__(self) -> None:
        self.config_path = resolve_config_path(Path(self.config_path))
        self._data: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        user_config: Any = {}
        if self.config_path.exists():
            with self.config_path.open("r", encoding="utf-8") as file:
                user_config = yaml.safe_load(file) or {}
        if not isinstance(user_config, dict):
            user_config = {}
        self._data = merge_settings(DEFAULT_CONFIG, user_config)

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as file:
            yaml.safe_dump(self._data, file, allow_unicode=True, sort_keys=True)

    def get_raw(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._data.get(name)
        if not isinstance(section, dict):
            section = copy.deepcopy(DEFAULT_CONFIG[name])
            self._data[name] = section
        return section

    # --- library ---
    def get_library_folder(self) -> Path:
        value = self._section("library").get("folder") or DEFAULT_CONFIG["library"]["folder"]
        return Path(str(value)).expanduser()

    def set_library_folder(self, folder: Path | str) -> None:
        self._section("library")["folder"] = str(folder)

    def get_playlist_file(self) -> Optional[Path]:
        value = self._section("library").get("playlist_file")
        if not value:
            return None
        return Path(str(value)).expanduser()

    def set_playlist_file(self, path: Path | str | None) -> None:
        self._section("library")["playlist_file"] = str(path) if path else ""

    def get_audio_formats(self) -> List[str]:
        formats = self._section("library").get("formats")
        if isinstance(formats, str):
            formats = [part for part in formats.replace(",", " ").split()]
        if not isinstance(formats, (list, tuple)):
            formats = DEFAULT_CONFIG["library"]["formats"]
        return sorted(normalize_extensions(formats)) or sorted(
            normalize_extensions(DEFAULT_CONFIG["library"]["formats"])
        )

    def set_audio_formats(self, formats: List[str]) -> None:
        self._section("library")["formats"] = [ext.lstrip(".") for ext in sorted(normalize_extensions(formats))]

    # --- playback ---
    def get_shuffle(self) -> bool:
        return bool(self._section("playback").get("shuffle", DEFAULT_CONFIG["playback"]["shuffle"]))

    def set_shuffle(self, enabled: bool) -> None:
        self._section("playback")["shuffle"] = bool(enabled)

    def get_reshuffle_on_end(self) -> bool:
        playback = self._section("playback")
        return bool(playback.get("reshuffle_on_end", DEFAULT_CONFIG["playback"]["reshuffle_on_end"]))

    def set_reshuffle_on_end(self, enabled: bool) -> None:
        self._section("playback")["reshuffle_on_end"] = bool(enabled)

    def get_min_run_seconds(self) -> float:
        value = self._section("playback").get("min_run_seconds", DEFAULT_CONFIG["playback"]["min_run_seconds"])
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["playback"]["min_run_seconds"]

    def set_min_run_seconds(self, value: float) -> None:
        self._section("playback")["min_run_seconds"] = max(0.0, float(value))

    def get_output_device(self) -> Optional[str]:
        value = self._section("playback").get("device")
        return str(value) if value else None

    def set_output_device(self, device: Optional[str]) -> None:
        self._section("playback")["device"] = device or None

    def get_max_items(self) -> int:
        """Number of items to play before stopping; 0 plays forever."""
        value = self._section("playback").get("max_items", DEFAULT_CONFIG["playback"]["max_items"])
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["playback"]["max_items"]

    def set_max_items(self, value: int) -> None:
        self._section("playback")["max_items"] = max(0, int(value))

    # --- diagnostics ---
    def get_diagnostics_log_level(self) -> str:
        diagnostics = self._section("diagnostics")
        level = str(diagnostics.get("log_level", DEFAULT_CONFIG["diagnostics"]["log_level"])).upper()
        return level if level in LOG_LEVELS else DEFAULT_CONFIG["diagnostics"]["log_level"]

    def set_diagnostics_log_level(self, level: str) -> None:
        self._section("diagnostics")["log_level"] = str(level).upper()
