"""Entry point: scan the music folder and play it in shuffled order."""

from __future__ import annotations

import logging
import os
import random
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Set

from shuffleplay.audio.engine import AudioEngine
from shuffleplay.audio.types import Player
from shuffleplay.core.config import SettingsManager
from shuffleplay.core.playlist import PlaylistOrder


logger = logging.getLogger(__name__)


def _configure_logging(level_override: Optional[str] = None) -> Optional[Path]:
    env_level = os.environ.get("LOGLEVEL")
    level_name = (env_level or level_override or "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    handlers: List[logging.Handler] = [stream_handler]

    fallback_dir = Path(tempfile.gettempdir()) / "shuffleplay_logs"
    log_path: Optional[Path] = None
    for logs_dir in (Path.cwd() / "logs", fallback_dir):
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
            log_path = logs_dir / f"shuffleplay-{timestamp}.log"
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            log_path = None
            continue
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
        break

    logging.basicConfig(level=level, handlers=handlers, force=True)
    if log_path:
        logger.info("Writing log to %s", log_path)
        if log_path.parent == fallback_dir:
            logger.warning("Using fallback log directory %s", fallback_dir)
    return log_path


def build_playlist(settings: SettingsManager, source: Optional[Path] = None) -> Optional[PlaylistOrder]:
    """Load the playlist file or scan the music folder.

    ``source`` overrides the configured location; a file is read as a
    line-delimited playlist, a directory is scanned. Returns ``None`` when
    no music was found.
    """
    formats = settings.get_audio_formats()
    if source is not None:
        if source.is_file():
            return PlaylistOrder.from_file(source)
        return PlaylistOrder.from_directory(source, formats)

    playlist_file = settings.get_playlist_file()
    if playlist_file is not None:
        logger.info("Loading playlist %s", playlist_file)
        return PlaylistOrder.from_file(playlist_file)
    folder = settings.get_library_folder()
    logger.info("Scanning %s for %s", folder, ", ".join(formats))
    return PlaylistOrder.from_directory(folder, formats)


def play_loop(
    playlist: PlaylistOrder,
    player: Player,
    *,
    rng: Optional[random.Random] = None,
    shuffle: bool = True,
    reshuffle_on_end: bool = True,
    min_run_seconds: float = 1.0,
    max_items: int = 0,
) -> int:
    """Play items in order until interrupted or ``max_items`` have played.

    Running off the end of the playlist starts a new pass from the first
    position, reshuffled first when both ``shuffle`` and ``reshuffle_on_end``
    are set. Returns the number of items played.
    """
    if rng is None:
        rng = random.Random()
    if shuffle:
        playlist.shuffle(rng)
    playlist.first()

    played = 0
    failed: Set[int] = set()
    while max_items <= 0 or played < max_items:
        item = playlist.current()
        if item is None:
            logger.info("Playlist finished, starting over")
            if shuffle and reshuffle_on_end:
                playlist.shuffle(rng)
            item = playlist.first()

        logger.info("Now playing %s", item)
        try:
            elapsed = player.play(item)
        except (RuntimeError, OSError) as exc:
            failed.add(playlist.current_song)
            logger.warning("Could not play %s: %s", item, exc)
            # every distinct item failed since the last success
            if len(failed) >= len(playlist):
                raise RuntimeError("None of the playlist items could be played") from exc
            playlist.next()
            continue
        failed.clear()
        played += 1
        if elapsed < min_run_seconds:
            logger.warning("%s finished after %.2fs (expected at least %.2fs)", item, elapsed, min_run_seconds)
        else:
            logger.debug("%s played for %.2fs", item, elapsed)
        playlist.next()
    return played


def run(argv: Optional[List[str]] = None) -> int:
    """Start playback; ``argv[0]`` may name a music folder or playlist file."""
    args = list(sys.argv[1:] if argv is None else argv)
    settings = SettingsManager()
    _configure_logging(settings.get_diagnostics_log_level())

    source = Path(args[0]).expanduser() if args else None
    try:
        playlist = build_playlist(settings, source)
    except OSError as exc:
        logger.error("Could not read music from %s: %s", source or settings.get_library_folder(), exc)
        return 2
    if playlist is None:
        logger.error("No music found")
        return 1
    logger.info("Loaded %d items", len(playlist))

    player = AudioEngine().create_player(settings.get_output_device())
    try:
        play_loop(
            playlist,
            player,
            shuffle=settings.get_shuffle(),
            reshuffle_on_end=settings.get_reshuffle_on_end(),
            min_run_seconds=settings.get_min_run_seconds(),
            max_items=settings.get_max_items(),
        )
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping playback")
        player.stop()
    return 0


if __name__ == "__main__":
    sys.exit(run())
