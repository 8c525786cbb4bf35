"""Default configuration values."""

from __future__ import annotations

from typing import Any, Dict

from shuffleplay.core.library import DEFAULT_AUDIO_FORMATS

DEFAULT_CONFIG: Dict[str, Any] = {
    "library": {
        "folder": "~/Music",
        "playlist_file": "",
        "formats": list(DEFAULT_AUDIO_FORMATS),
    },
    "playback": {
        "shuffle": True,
        "reshuffle_on_end": True,
        "min_run_seconds": 1.0,
        "device": None,
        "max_items": 0,
    },
    "diagnostics": {
        "log_level": "WARNING",
    },
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
