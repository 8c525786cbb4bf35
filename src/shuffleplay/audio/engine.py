"""Audio backend selection and player creation."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from shuffleplay.audio.mock_backend import MockBackendProvider
from shuffleplay.audio.types import AudioDevice, BackendProvider, Player
from shuffleplay.core.env import is_mock_audio_forced

logger = logging.getLogger(__name__)


def _load_sounddevice_backend() -> Optional[BackendProvider]:
    try:
        from shuffleplay.audio.sounddevice_player import SoundDeviceBackend
    except (ImportError, OSError) as exc:
        # OSError: PortAudio library missing
        logger.warning("sounddevice backend unavailable: %s", exc)
        return None
    return SoundDeviceBackend()


class AudioEngine:
    """Owns the backend providers and hands out players."""

    def __init__(self, providers: Optional[List[BackendProvider]] = None) -> None:
        if providers is not None:
            self._providers = list(providers)
        elif is_mock_audio_forced():
            self._providers = [MockBackendProvider(label="Forced mock")]
        else:
            self._providers = []
            backend = _load_sounddevice_backend()
            if backend is not None:
                self._providers.append(backend)
        self._devices: Dict[str, AudioDevice] = {}

    def refresh_devices(self) -> None:
        self._devices.clear()
        for provider in self._providers:
            for device in provider.list_devices():
                self._devices[device.id] = device
        if not self._devices:
            logger.warning("No audio output devices found - switching to mock playback")
            fallback = MockBackendProvider(label="Mock fallback")
            self._providers.append(fallback)
            for device in fallback.list_devices():
                self._devices[device.id] = device
        logger.debug("Audio devices: %s", ", ".join(device.name for device in self._devices.values()))

    def get_devices(self) -> List[AudioDevice]:
        if not self._devices:
            self.refresh_devices()
        return list(self._devices.values())

    def find_device(self, name_or_id: Optional[str] = None) -> AudioDevice:
        """Match a configured device by id or name fragment, else the default one."""
        devices = self.get_devices()
        if name_or_id:
            needle = name_or_id.lower()
            for device in devices:
                if device.id == name_or_id or needle in device.name.lower():
                    return device
            logger.warning("Audio device %r not found, using default", name_or_id)
        for device in devices:
            if device.is_default:
                return device
        return devices[0]

    def create_player(self, device_name: Optional[str] = None) -> Player:
        device = self.find_device(device_name)
        for provider in self._providers:
            if provider.backend is device.backend:
                logger.info("Using audio device %s", device.name)
                return provider.create_player(device)
        raise ValueError(f"No provider for backend {device.backend}")
