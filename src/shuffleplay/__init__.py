"""Shuffle-aware playlist player."""

from shuffleplay.core.playlist import PlaylistOrder

__all__ = [
    "PlaylistOrder",
]

__version__ = "0.3.0"
