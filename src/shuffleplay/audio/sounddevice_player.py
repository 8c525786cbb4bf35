"""Blocking player built on sounddevice + soundfile."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from threading import Event, Lock
from typing import List, Optional

import sounddevice as sd
import soundfile as sf

from shuffleplay.audio.transcoding import open_audio_file
from shuffleplay.audio.types import AudioDevice, BackendType, Player

logger = logging.getLogger(__name__)

BLOCK_FRAMES = 4096


class SoundDevicePlayer:
    """Streams one file at a time to an output device, blocking until it ends."""

    def __init__(self, device: AudioDevice, block_frames: int = BLOCK_FRAMES):
        self.device = device
        self._block_frames = max(256, int(block_frames))
        self._stop_event = Event()
        self._lock = Lock()
        self._current_item: Optional[Path] = None

    def play(self, path: Path) -> float:
        path = Path(path)
        with self._lock:
            self._stop_event.clear()
            self._current_item = path
        started = time.perf_counter()
        temp_path: Optional[Path] = None
        try:
            sound_file, temp_path = open_audio_file(path, sf=sf)
            with sound_file, sd.OutputStream(
                samplerate=sound_file.samplerate,
                channels=sound_file.channels,
                dtype="float32",
                device=self.device.raw_index,
            ) as stream:
                logger.info("Playing %s (%d Hz, %d ch)", path, sound_file.samplerate, sound_file.channels)
                for block in sound_file.blocks(blocksize=self._block_frames, dtype="float32", always_2d=True):
                    if self._stop_event.is_set():
                        logger.debug("Playback of %s stopped", path)
                        break
                    stream.write(block)
        except sd.PortAudioError as exc:
            raise RuntimeError(f"Audio output failed for {path.name}: {exc}") from exc
        finally:
            with self._lock:
                self._current_item = None
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
        return time.perf_counter() - started

    def is_active(self) -> bool:
        return self._current_item is not None

    def stop(self) -> None:
        self._stop_event.set()


class SoundDeviceBackend:
    """Enumerates PortAudio output devices."""

    backend = BackendType.SOUNDDEVICE

    def list_devices(self) -> List[AudioDevice]:
        devices: List[AudioDevice] = []
        try:
            default_output = sd.default.device[1]
            for index, info in enumerate(sd.query_devices()):
                if int(info.get("max_output_channels", 0)) <= 0:
                    continue
                devices.append(
                    AudioDevice(
                        id=f"{self.backend.value}:{index}",
                        name=str(info.get("name", f"Device {index}")),
                        backend=self.backend,
                        raw_index=index,
                        is_default=index == default_output,
                    )
                )
        except sd.PortAudioError as exc:
            logger.warning("Audio device enumeration failed: %s", exc)
        return devices

    def create_player(self, device: AudioDevice) -> Player:
        return SoundDevicePlayer(device)
