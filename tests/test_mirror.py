import random

from conftest import DOT, O_SHAPE
from topoblocks.game import Action, GameConfig, MirrorGame, negate_x


def _assert_symmetric(game: MirrorGame) -> None:
    left, right = game.left_piece, game.right_piece
    assert right.anchor == (game.topology.mirror_x(left.anchor[0]), left.anchor[1])
    assert right.offsets == negate_x(left.offsets)
    cells = game.piece_cells()
    n = len(left.offsets)
    assert cells[n:] == [game.topology.mirror(c) for c in cells[:n]]
    assert not game.board.collides(cells)


def test_spawn_places_mirrored_pair(listener):
    game = MirrorGame(GameConfig(random_seed=1), listener, shapes=[O_SHAPE])
    assert game.left_piece.anchor == (1, 19)
    assert game.right_piece.anchor == (8, 19)
    assert sorted(game.piece_cells()[4:]) == [(7, 18), (7, 19), (8, 18), (8, 19)]
    added = listener.of("added")
    assert len(added) == 2
    assert not added[0][2].mirrored and added[1][2].mirrored
    assert len(set(added[0][1]) | set(added[1][1])) == 8
    _assert_symmetric(game)


def test_moves_are_mirrored():
    game = MirrorGame(GameConfig(random_seed=1), shapes=[O_SHAPE])
    assert game.move_left()
    assert game.left_piece.anchor == (0, 19)
    assert game.right_piece.anchor == (9, 19)
    assert not game.move_left()
    _assert_symmetric(game)


def test_halves_cannot_cross_the_centre():
    game = MirrorGame(GameConfig(random_seed=1), shapes=[O_SHAPE])
    assert game.move_right()
    assert game.move_right()
    assert game.left_piece.anchor == (3, 19)
    assert not game.move_right()
    assert game.left_piece.anchor == (3, 19)
    _assert_symmetric(game)


def test_rotation_keeps_symmetry():
    game = MirrorGame(GameConfig(random_seed=1), shapes=[O_SHAPE])
    assert game.rotate()
    assert sorted(game.piece_cells()[:4]) == [(0, 18), (0, 19), (1, 18), (1, 19)]
    assert sorted(game.piece_cells()[4:]) == [(8, 18), (8, 19), (9, 18), (9, 19)]
    _assert_symmetric(game)


def test_hard_drop_locks_both_halves():
    game = MirrorGame(GameConfig(random_seed=1), shapes=[O_SHAPE])
    assert game.hard_drop() == 18
    coords = sorted(game.board.coords_of(game.board.cell_ids()))
    assert coords == [(1, 0), (1, 1), (2, 0), (2, 1), (7, 0), (7, 1), (8, 0), (8, 1)]
    _assert_symmetric(game)


def test_mirror_clear_uses_mirror_multiplier():
    game = MirrorGame(GameConfig(width=4, height=4, random_seed=1), shapes=[DOT])
    assert game.move_left()
    game.hard_drop()
    game.hard_drop()
    state = game.get_state()
    assert state.lines == 1
    assert state.score == 150
    assert game.board.cell_ids() == []


def test_random_play_keeps_pair_symmetric():
    game = MirrorGame(GameConfig(random_seed=21))
    rng = random.Random(21)
    actions = list(Action)
    for _ in range(500):
        if game.game_over:
            break
        game.step(rng.choice(actions))
        if game.active_piece is not None:
            _assert_symmetric(game)
    occupied = {tuple(c) for c in game.board.coords_of(game.board.cell_ids())}
    # Locked halves reflect each other as long as no row has been cleared.
    if game.get_state().lines == 0:
        assert occupied == {game.topology.mirror(c) for c in occupied}
