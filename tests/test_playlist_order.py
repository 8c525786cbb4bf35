import random
from pathlib import Path

import pytest

from shuffleplay.core.playlist import PlaylistOrder


NAMES = ["first", "second", "third", "fourth", "fifth"]
SEED = 123456789


def _make_playlist(names: list[str] = NAMES) -> PlaylistOrder:
    playlist = PlaylistOrder.create(names)
    assert playlist is not None
    return playlist


def _reference_order(seed: int, count: int) -> list[int]:
    order = list(range(count))
    random.Random(seed).shuffle(order)
    return order


def _assert_consistent(playlist: PlaylistOrder) -> None:
    count = len(playlist)
    assert sorted(playlist.order) == list(range(count))
    if playlist.cursor is None:
        assert playlist.current_song is None
        assert playlist.current() is None
    else:
        assert 0 <= playlist.cursor < count
        assert playlist.order[playlist.cursor] == playlist.current_song
        assert playlist.current() == playlist.items[playlist.current_song]


def test_create_installs_identity_order_and_unset_cursor() -> None:
    playlist = _make_playlist()

    assert playlist.items == tuple(Path(name) for name in NAMES)
    assert playlist.order == (0, 1, 2, 3, 4)
    assert playlist.cursor is None
    assert playlist.current_song is None
    assert playlist.current() is None


def test_empty_input_yields_no_playlist() -> None:
    assert PlaylistOrder.create([]) is None
    assert PlaylistOrder.from_text("") is None
    assert PlaylistOrder.from_text("\n\n") is None


def test_constructor_rejects_empty_items() -> None:
    with pytest.raises(ValueError):
        PlaylistOrder([])


def test_from_text_drops_blank_lines() -> None:
    playlist = PlaylistOrder.from_text("a\nb\n\nc")

    assert playlist is not None
    assert playlist.items == (Path("a"), Path("b"), Path("c"))


def test_from_text_navigates_like_create() -> None:
    from_text = PlaylistOrder.from_text("a\nb\n\nc\n")
    from_items = PlaylistOrder.create(["a", "b", "c"])
    assert from_text is not None and from_items is not None

    visited_text = [from_text.first()]
    visited_items = [from_items.first()]
    for _ in range(3):
        visited_text.append(from_text.next())
        visited_items.append(from_items.next())

    assert visited_text == visited_items == [Path("a"), Path("b"), Path("c"), None]


def test_next_and_prev_are_noops_while_unset() -> None:
    playlist = _make_playlist()

    assert playlist.next() is None
    assert playlist.prev() is None
    assert playlist.cursor is None


def test_next_visits_every_item_then_unsets() -> None:
    playlist = _make_playlist()
    playlist.shuffle(random.Random(SEED))

    visited = [playlist.first()]
    for _ in range(len(NAMES) - 1):
        visited.append(playlist.next())

    assert visited == [playlist.items[index] for index in playlist.order]
    assert sorted(str(item) for item in visited) == sorted(NAMES)
    assert playlist.next() is None
    assert playlist.cursor is None
    assert playlist.current() is None


def test_prev_mirrors_next_from_last() -> None:
    playlist = _make_playlist()

    visited = [playlist.last()]
    for _ in range(len(NAMES) - 1):
        visited.append(playlist.prev())

    assert [str(item) for item in visited] == list(reversed(NAMES))
    assert playlist.prev() is None
    assert playlist.current_song is None


def test_first_and_last_reposition_from_anywhere() -> None:
    playlist = _make_playlist()
    playlist.first()
    playlist.next()

    assert playlist.last() == Path("fifth")
    assert playlist.cursor == 4
    assert playlist.first() == Path("first")
    assert playlist.cursor == 0


def test_single_item_playlist_ends_immediately() -> None:
    playlist = _make_playlist(["only"])

    assert playlist.first() == Path("only")
    assert playlist.next() is None
    assert playlist.last() == Path("only")
    assert playlist.prev() is None


def test_shuffle_keeps_current_item() -> None:
    playlist = _make_playlist()
    playlist.first()
    assert playlist.next() == Path("second")

    playlist.shuffle(random.Random(SEED))

    expected = _reference_order(SEED, len(NAMES))
    assert list(playlist.order) == expected
    assert playlist.current() == Path("second")
    assert playlist.current_song == 1
    assert playlist.cursor == expected.index(1)
    _assert_consistent(playlist)


def test_shuffle_is_reproducible_with_same_seed() -> None:
    one = _make_playlist()
    two = _make_playlist()

    one.shuffle(random.Random(42))
    two.shuffle(random.Random(42))

    assert one.order == two.order


def test_shuffle_without_current_item_leaves_cursor_unset() -> None:
    playlist = _make_playlist()

    playlist.shuffle(random.Random(SEED))

    assert playlist.cursor is None
    assert playlist.current() is None
    assert playlist.first() == playlist.items[_reference_order(SEED, len(NAMES))[0]]


def test_shuffle_defaults_to_fresh_random_source() -> None:
    playlist = _make_playlist()
    playlist.last()

    playlist.shuffle()

    assert playlist.current() == Path("fifth")
    _assert_consistent(playlist)


def test_playlist_order_restores_identity_and_keeps_current() -> None:
    playlist = _make_playlist()
    playlist.shuffle(random.Random(SEED))
    playlist.first()
    current = playlist.next()

    playlist.playlist_order()

    assert playlist.order == (0, 1, 2, 3, 4)
    assert playlist.current() == current
    assert playlist.cursor == playlist.current_song
    _assert_consistent(playlist)


def test_playlist_order_while_unset_stays_unset() -> None:
    playlist = _make_playlist()
    playlist.shuffle(random.Random(SEED))

    playlist.playlist_order()

    assert playlist.order == (0, 1, 2, 3, 4)
    assert playlist.cursor is None


class _CorruptingRandom:
    def shuffle(self, values: list[int]) -> None:
        values[:] = [0] * len(values)


def test_broken_shuffle_raises_and_leaves_state_untouched() -> None:
    playlist = _make_playlist()
    playlist.first()
    playlist.next()

    with pytest.raises(RuntimeError):
        playlist.shuffle(_CorruptingRandom())  # type: ignore[arg-type]

    assert playlist.order == (0, 1, 2, 3, 4)
    assert playlist.cursor == 1
    assert playlist.current() == Path("second")


def test_state_stays_consistent_under_random_operations() -> None:
    rng = random.Random(7)
    playlist = _make_playlist()
    operations = [
        playlist.next,
        playlist.prev,
        playlist.first,
        playlist.last,
        playlist.playlist_order,
        lambda: playlist.shuffle(rng),
    ]

    for _ in range(500):
        rng.choice(operations)()
        _assert_consistent(playlist)


def test_to_text_lists_items_in_original_order() -> None:
    playlist = _make_playlist()
    playlist.shuffle(random.Random(SEED))

    assert playlist.to_text() == "first\nsecond\nthird\nfourth\nfifth\n"
    assert PlaylistOrder.from_text(playlist.to_text()).items == playlist.items  # type: ignore[union-attr]


def test_from_file_reads_line_delimited_playlist(tmp_path: Path) -> None:
    playlist_path = tmp_path / "list.txt"
    playlist_path.write_text("/music/a.flac\n\n/music/b.mp3\n", encoding="utf-8")

    playlist = PlaylistOrder.from_file(playlist_path)

    assert playlist is not None
    assert playlist.items == (Path("/music/a.flac"), Path("/music/b.mp3"))


def test_from_file_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        PlaylistOrder.from_file(tmp_path / "missing.txt")
