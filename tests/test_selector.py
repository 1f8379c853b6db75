from collections import Counter

import pytest

from flagviewer.core.errors import EmptyPopulation
from flagviewer.core.selector import Selector


def test_empty_population_is_rejected():
    selector = Selector()
    selector.seed(1)

    with pytest.raises(EmptyPopulation):
        selector.next(0)


def test_negative_population_is_rejected():
    with pytest.raises(ValueError):
        Selector().next(-1)


def test_single_item_population():
    selector = Selector()
    selector.seed(7)

    assert {selector.next(1) for _ in range(20)} == {0}


def test_indices_are_roughly_uniform():
    selector = Selector()
    selector.seed(1234)
    draws = 50000

    counts = Counter(selector.next(5) for _ in range(draws))

    assert set(counts) == {0, 1, 2, 3, 4}
    expected = draws / 5
    for count in counts.values():
        assert abs(count - expected) < expected * 0.1


def test_same_seed_same_sequence():
    first, second = Selector(), Selector()
    first.seed(42)
    second.seed(42)

    assert [first.next(100) for _ in range(25)] == [second.next(100) for _ in range(25)]


def test_seed_only_once():
    selector = Selector()
    selector.seed(3)

    with pytest.raises(RuntimeError):
        selector.seed(4)
    assert selector.seed_value == 3


def test_next_seeds_from_entropy_when_unseeded():
    selector = Selector()

    assert not selector.is_seeded
    assert 0 <= selector.next(10) < 10
    assert selector.is_seeded
    assert selector.seed_value is not None
