"""Audio backend type definitions.

Kept apart from `shuffleplay.audio.engine` so the shared types can be
imported without pulling in sounddevice/soundfile.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol


class BackendType(Enum):
    SOUNDDEVICE = "sounddevice"
    MOCK = "mock"


@dataclass
class AudioDevice:
    id: str
    name: str
    backend: BackendType
    raw_index: Optional[int] = None
    is_default: bool = False


class Player(Protocol):
    def play(self, path: Path) -> float:
        """Play ``path`` until it is exhausted or stopped; return elapsed seconds."""
        ...

    def is_active(self) -> bool: ...

    def stop(self) -> None: ...


class BackendProvider(Protocol):
    backend: BackendType

    def list_devices(self) -> List[AudioDevice]: ...

    def create_player(self, device: AudioDevice) -> Player: ...
