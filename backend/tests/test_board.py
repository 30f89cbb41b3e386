import random

from bingo.services.game.board import Tile, generate_board, pick_unique, usable_phrases


def test_board_from_large_pool_has_unique_labels():
    pool = [f"Phrase {i}" for i in range(40)]
    board = generate_board(pool, rng=random.Random(3))
    labels = [t.label for t in board]
    assert len(board) == 25
    assert len(set(labels)) == 25
    assert set(labels) <= set(pool)
    assert all(t.owner_id is None and t.color is None for t in board)


def test_board_from_small_pool_is_padded():
    pool = ['alpha', 'beta', 'gamma']
    board = generate_board(pool)
    labels = [t.label for t in board]
    assert len(board) == 25
    assert labels[:3] == pool
    placeholders = labels[3:]
    assert placeholders[0] == 'Task 4'
    assert placeholders[-1] == 'Task 25'
    assert len(set(placeholders)) == 22


def test_board_from_empty_or_broken_pool_is_all_placeholders():
    for pool in ([], None, [None, 3, '   ', {'text': 'x'}]):
        board = generate_board(pool)
        assert [t.label for t in board] == [f"Task {i}" for i in range(1, 26)]


def test_usable_phrases_trims_and_dedupes():
    assert usable_phrases([' a ', 'a', '', 'b', 7, 'b ']) == ['a', 'b']


def test_duplicates_do_not_count_towards_full_board():
    # 25 entries but only 24 distinct: one placeholder is needed
    pool = [f"P{i}" for i in range(24)] + ['P0']
    labels = [t.label for t in generate_board(pool)]
    assert labels[-1] == 'Task 25'
    assert len(set(labels)) == 25


def test_pick_unique_is_a_permutation_prefix():
    items = list('abcdefghij')
    picked = pick_unique(items, 4, random.Random(1))
    assert len(picked) == 4
    assert len(set(picked)) == 4
    assert set(picked) <= set(items)
    # source list untouched
    assert items == list('abcdefghij')


def test_pick_unique_covers_every_position():
    rng = random.Random(11)
    firsts = {pick_unique(['a', 'b', 'c'], 1, rng)[0] for _ in range(200)}
    assert firsts == {'a', 'b', 'c'}


def test_tile_public_dict_hides_owner():
    tile = Tile('x')
    tile.claim('user-1', '#e74c3c')
    assert tile.to_dict() == {'label': 'x', 'color': '#e74c3c'}
    tile.release()
    assert tile.owner_id is None and tile.color is None
