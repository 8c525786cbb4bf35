"""Playlist ordering: a fixed item list, a play order over it and a cursor."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from shuffleplay.core.library import scan_directory
from shuffleplay.core.playlist_io import load_playlist_file, parse_playlist_lines, serialize_playlist


logger = logging.getLogger(__name__)

ItemLike = Union[str, Path]


class PlaylistOrder:
    """Items in their original order plus a permutation used for playback.

    ``order`` holds song indices (positions in ``items``); ``cursor`` is a
    position in ``order``. Both the cursor and the current song index are
    ``None`` before the first positioning call and after running off either
    end of the order. When set, ``order[cursor] == current_song``.
    """

    def __init__(self, items: Iterable[ItemLike]) -> None:
        songs = tuple(Path(item) for item in items)
        if not songs:
            raise ValueError("Playlist requires at least one item")
        self._songs: Tuple[Path, ...] = songs
        self._order: List[int] = list(range(len(songs)))
        self._cursor: Optional[int] = None
        self._current_song: Optional[int] = None

    @classmethod
    def create(cls, items: Iterable[ItemLike]) -> Optional["PlaylistOrder"]:
        """Return a playlist, or ``None`` when ``items`` is empty."""
        items = list(items)
        if not items:
            return None
        return cls(items)

    @classmethod
    def from_text(cls, text: str) -> Optional["PlaylistOrder"]:
        return cls.create(parse_playlist_lines(text.splitlines()))

    @classmethod
    def from_file(cls, path: ItemLike) -> Optional["PlaylistOrder"]:
        """Load a line-delimited playlist file; ``OSError`` propagates."""
        return cls.create(load_playlist_file(Path(path)))

    @classmethod
    def from_directory(cls, root: ItemLike, extensions: Iterable[str]) -> Optional["PlaylistOrder"]:
        return cls.create(scan_directory(Path(root), extensions))

    def __len__(self) -> int:
        return len(self._songs)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(items={len(self._songs)}, "
            f"cursor={self._cursor}, current_song={self._current_song})"
        )

    @property
    def items(self) -> Tuple[Path, ...]:
        return self._songs

    @property
    def order(self) -> Tuple[int, ...]:
        return tuple(self._order)

    @property
    def cursor(self) -> Optional[int]:
        return self._cursor

    @property
    def current_song(self) -> Optional[int]:
        return self._current_song

    def current(self) -> Optional[Path]:
        if self._current_song is None:
            return None
        return self._songs[self._current_song]

    def _move_to(self, position: Optional[int]) -> Optional[Path]:
        if position is None:
            self._cursor = None
            self._current_song = None
        else:
            self._cursor = position
            self._current_song = self._order[position]
        return self.current()

    def next(self) -> Optional[Path]:
        """Advance one step; running past the last position unsets the cursor."""
        if self._cursor is None:
            return None
        position = self._cursor + 1
        if position >= len(self._order):
            logger.debug("End of playlist reached")
            return self._move_to(None)
        return self._move_to(position)

    def prev(self) -> Optional[Path]:
        """Step back; moving before the first position unsets the cursor."""
        if self._cursor is None:
            return None
        if self._cursor == 0:
            logger.debug("Start of playlist reached")
            return self._move_to(None)
        return self._move_to(self._cursor - 1)

    def first(self) -> Path:
        self._move_to(0)
        return self._songs[self._current_song]

    def last(self) -> Path:
        self._move_to(len(self._order) - 1)
        return self._songs[self._current_song]

    def playlist_order(self) -> None:
        """Restore the original order without changing the current item."""
        # identity order: a song's position equals its index
        self._order = list(range(len(self._songs)))
        self._cursor = self._current_song
        logger.debug("Playlist order restored (cursor=%s)", self._cursor)

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Shuffle the play order, keeping the current item current."""
        if rng is None:
            rng = random.Random()
        order = list(range(len(self._songs)))
        rng.shuffle(order)
        cursor = None
        if self._current_song is not None:
            cursor = _position_of(order, self._current_song)
        self._order = order
        self._cursor = cursor
        logger.debug("Playlist shuffled: %s (cursor=%s)", order, cursor)

    def to_text(self) -> str:
        return serialize_playlist(self._songs)


def _position_of(order: Sequence[int], song: int) -> int:
    try:
        return order.index(song)
    except ValueError as exc:
        raise RuntimeError(f"Song index {song} missing from play order {list(order)}") from exc
