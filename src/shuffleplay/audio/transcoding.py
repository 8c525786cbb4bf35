"""Helpers for transcoding audio files soundfile cannot decode directly."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Tuple


logger = logging.getLogger(__name__)

TRANSCODE_EXTENSIONS = {
    ".m4a",
    ".mp3",
    ".mp4",
    ".ogg",
}


def transcode_to_wav(source: Path) -> Path:
    """Decode ``source`` into a temporary WAV file with ffmpeg."""
    ffmpeg = shutil.which("ffmpeg")
    if not ffmpeg:
        raise RuntimeError(f"FFmpeg is required to play {source.name}")
    fd, temp_name = tempfile.mkstemp(suffix=".wav")
    os.close(fd)
    target = Path(temp_name)
    cmd = [ffmpeg, "-y", "-i", str(source), "-vn", "-acodec", "pcm_s16le", str(target)]
    try:
        subprocess.run(cmd, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError) as exc:
        target.unlink(missing_ok=True)
        raise RuntimeError(f"FFmpeg could not decode {source.name}") from exc
    logger.debug("Transcoded %s to %s", source, target)
    return target


def open_audio_file(
    path: Path,
    *,
    sf,
    transcode_extensions: Optional[set[str]] = None,
) -> Tuple[object, Optional[Path]]:
    """Open ``path`` with soundfile, falling back to an ffmpeg transcode.

    Returns the open sound file and the temporary WAV path (``None`` when no
    transcode was needed); the caller removes the temporary file.
    """
    if transcode_extensions is None:
        transcode_extensions = TRANSCODE_EXTENSIONS

    try:
        return sf.SoundFile(str(path), mode="r"), None
    except Exception:
        if path.suffix.lower() not in transcode_extensions:
            raise
    wav_path = transcode_to_wav(path)
    try:
        return sf.SoundFile(str(wav_path), mode="r"), wav_path
    except Exception:
        wav_path.unlink(missing_ok=True)
        raise
