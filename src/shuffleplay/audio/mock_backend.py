"""Mock audio backend used by tests and headless runs."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from threading import Event
from typing import List, Optional

from shuffleplay.audio.types import AudioDevice, BackendType, Player


logger = logging.getLogger(__name__)


class MockPlayer:
    """Pretends to play each item for ``item_seconds`` and remembers what it played."""

    def __init__(self, device: AudioDevice, item_seconds: float = 0.0):
        self.device = device
        self.item_seconds = max(0.0, item_seconds)
        self.played: List[Path] = []
        self._current_item: Optional[Path] = None
        self._stop_event = Event()

    def play(self, path: Path) -> float:
        self._stop_event.clear()
        self._current_item = Path(path)
        self.played.append(self._current_item)
        logger.info("[MOCK] Playing %s on %s", path, self.device.name)
        started = time.perf_counter()
        try:
            if self.item_seconds > 0:
                self._stop_event.wait(self.item_seconds)
        finally:
            self._current_item = None
        return time.perf_counter() - started

    def is_active(self) -> bool:
        return self._current_item is not None

    def stop(self) -> None:
        if self._current_item is not None:
            logger.info("[MOCK] Stop %s", self._current_item)
        self._stop_event.set()


class MockBackendProvider:
    """Single fake device for environments without audio output."""

    backend = BackendType.MOCK

    def __init__(self, label: str = "Mock Device", item_seconds: float = 0.0) -> None:
        self._label = label
        self._item_seconds = item_seconds

    def list_devices(self) -> List[AudioDevice]:
        return [
            AudioDevice(
                id="mock:default",
                name=self._label,
                backend=self.backend,
                raw_index=None,
                is_default=True,
            )
        ]

    def create_player(self, device: AudioDevice) -> Player:
        return MockPlayer(device, item_seconds=self._item_seconds)
