import itertools

import pytest

from space_shooter.utils import aabb_overlap, clamp

RECTS = [
    (0, 0, 10, 10),
    (5, 5, 10, 10),
    (10, 0, 10, 10),
    (0, 10, 10, 10),
    (-5, -5, 4, 4),
    (2, 2, 1, 1),
    (100, 100, 36, 36),
]


@pytest.mark.parametrize("a,b", list(itertools.product(RECTS, repeat=2)))
def test_overlap_is_symmetric(a, b):
    assert aabb_overlap(*a, *b) == aabb_overlap(*b, *a)


def test_overlapping_rects_collide():
    assert aabb_overlap(0, 0, 10, 10, 5, 5, 10, 10)


def test_contained_rect_collides():
    assert aabb_overlap(0, 0, 10, 10, 2, 2, 1, 1)


def test_touching_edges_do_not_collide():
    assert not aabb_overlap(0, 0, 10, 10, 10, 0, 10, 10)
    assert not aabb_overlap(0, 0, 10, 10, 0, 10, 10, 10)


def test_separated_rects_do_not_collide():
    assert not aabb_overlap(0, 0, 10, 10, 50, 50, 5, 5)


def test_clamp():
    assert clamp(-1, 0, 5) == 0
    assert clamp(7, 0, 5) == 5
    assert clamp(3, 0, 5) == 3
