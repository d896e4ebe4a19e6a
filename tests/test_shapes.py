import random

import pytest

from topoblocks.game import (
    CLASSIC_SHAPES,
    PENTO_SHAPES,
    TRIO_SHAPES,
    Mode,
    negate_x,
    random_shape,
    rotate_offsets,
    shapes_for,
)


def test_catalog_sizes():
    assert [s.name for s in CLASSIC_SHAPES] == ["I", "O", "T", "S", "Z", "J", "L"]
    assert len(TRIO_SHAPES) == 2
    assert len(PENTO_SHAPES) == 12
    assert all(s.size == 4 for s in CLASSIC_SHAPES)
    assert all(s.size == 3 for s in TRIO_SHAPES)
    assert all(s.size == 5 for s in PENTO_SHAPES)


def test_kinds_are_one_based_and_unique():
    for catalog in (CLASSIC_SHAPES, TRIO_SHAPES, PENTO_SHAPES):
        assert [s.kind for s in catalog] == list(range(1, len(catalog) + 1))


@pytest.mark.parametrize(
    "mode, catalog",
    [
        (Mode.CLASSIC, CLASSIC_SHAPES),
        (Mode.CIRCULAR, CLASSIC_SHAPES),
        (Mode.GRAVITY_FLIP, CLASSIC_SHAPES),
        (Mode.MIRROR, CLASSIC_SHAPES),
        (Mode.TRIO, TRIO_SHAPES),
        ("pento", PENTO_SHAPES),
    ],
)
def test_shapes_for_mode(mode, catalog):
    assert shapes_for(mode) is catalog


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        shapes_for("tetris-99")


def test_rotation_produces_new_offsets():
    offsets = ((1, 0), (2, 3))
    assert rotate_offsets(offsets, clockwise=True) == ((0, 1), (-3, 2))
    assert rotate_offsets(offsets, clockwise=False) == ((0, -1), (3, -2))
    assert offsets == ((1, 0), (2, 3))


def test_four_rotations_return_to_start():
    for shape in CLASSIC_SHAPES:
        offsets = shape.offsets
        for _ in range(4):
            offsets = rotate_offsets(offsets)
        assert offsets == shape.offsets


def test_negate_x():
    assert negate_x(((1, 2), (-3, 0))) == ((-1, 2), (3, 0))


def test_random_shape_is_from_catalog():
    rng = random.Random(7)
    for _ in range(20):
        assert random_shape(Mode.PENTO, rng) in PENTO_SHAPES
