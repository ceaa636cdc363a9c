import random

import pytest

from core.errors import InvalidConfiguration
from core.numeric import (
    format_equivalent,
    format_mixed_number,
    format_number,
    gcd,
    join_terms,
    lcm,
    pick,
    random_int,
    reduce_fraction,
    shuffle,
    signed_term,
)


def test_random_int_hits_both_bounds(scripted):
    assert random_int(scripted([0.0]), 3, 9) == 3
    assert random_int(scripted([0.9999999]), 3, 9) == 9


def test_random_int_stays_in_closed_interval(rng):
    values = {random_int(rng, -2, 2) for _ in range(500)}
    assert values == {-2, -1, 0, 1, 2}


def test_random_int_single_value(rng):
    assert random_int(rng, 5, 5) == 5


def test_random_int_rejects_inverted_range(rng):
    with pytest.raises(InvalidConfiguration):
        random_int(rng, 10, 1)


def test_pick_uses_random_int(scripted):
    assert pick(scripted([0.5]), ["a", "b", "c", "d"]) == "c"
    with pytest.raises(InvalidConfiguration):
        pick(scripted([0.5]), [])


def test_gcd_and_lcm():
    assert gcd(12, 18) == 6
    assert gcd(7, 0) == 7
    assert gcd(0, 7) == 7
    assert lcm(4, 6) == 12
    with pytest.raises(InvalidConfiguration):
        gcd(-4, 6)


def test_shuffle_is_permutation_and_leaves_input_alone(rng):
    original = list(range(20))
    snapshot = list(original)
    shuffled = shuffle(original, rng)
    assert original == snapshot
    assert sorted(shuffled) == snapshot
    assert shuffled is not original


def test_shuffle_same_seed_same_order():
    assert shuffle("abcdef", random.Random(3)) == shuffle("abcdef", random.Random(3))


def test_shuffle_small_inputs(rng):
    assert shuffle([], rng) == []
    assert shuffle([1], rng) == [1]


def test_number_formats():
    assert format_number(12.0) == "12"
    assert format_number(7.5) == "7.5"
    assert reduce_fraction(6, 15) == (2, 5)
    assert format_mixed_number(7, 3) == "2 1/3"
    assert format_mixed_number(6, 3) == "2"
    assert format_mixed_number(2, 3) == "2/3"
    assert format_equivalent(6, 15) == "6/15 = 2/5"
    assert format_equivalent(2, 5) == "2/5"
    assert format_equivalent(8, 4) == "8/4 = 2"


def test_polynomial_terms():
    terms = [signed_term(1, "x", leading=True), signed_term(-3, "y", leading=False), signed_term(0, "", leading=False)]
    assert join_terms(terms) == "x - 3y"
    assert signed_term(-1, "x", leading=True) == "-x"
