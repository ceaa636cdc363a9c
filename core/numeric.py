"""
numeric.py

Small, stateless helpers shared by every generator: range sampling, divisor
math, shuffling and the string formats used in questions and answer keys.

All randomness flows through an injected source exposing `random()` (a
`random.Random` in practice) so tests can pin down exact sequences.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Any, List, Optional, Protocol, Sequence, Tuple, TypeVar, Union

from core.errors import InvalidConfiguration

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float:
        ...


def random_int(rng: RandomSource, minimum: int, maximum: int) -> int:
    """Uniform integer from the closed interval [minimum, maximum]."""

    if minimum > maximum:
        raise InvalidConfiguration(
            f"Invalid range: minimum {minimum} is greater than maximum {maximum}."
        )
    return math.floor(rng.random() * (maximum - minimum + 1)) + minimum


def pick(rng: RandomSource, options: Sequence[T]) -> T:
    if not options:
        raise InvalidConfiguration("Cannot pick from an empty set of options.")
    return options[random_int(rng, 0, len(options) - 1)]


def gcd(a: int, b: int) -> int:
    """Euclid's algorithm over non-negative integers; gcd(a, 0) == a."""

    if a < 0 or b < 0:
        raise InvalidConfiguration(f"gcd is defined for non-negative integers, got ({a}, {b}).")
    while b:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return a * b // gcd(a, b)


def shuffle(sequence: Sequence[T], rng: RandomSource) -> List[T]:
    """
    Fisher–Yates shuffle. Returns a new list; the input is left untouched.
    """

    items = list(sequence)
    for i in range(len(items) - 1, 0, -1):
        j = math.floor(rng.random() * (i + 1))
        items[i], items[j] = items[j], items[i]
    return items


# --------------------------------------------------------------------- #
# Formatting
# --------------------------------------------------------------------- #

def format_number(value: Union[int, float, Fraction]) -> str:
    """Integral values print without a decimal point (12, not 12.0)."""

    if isinstance(value, Fraction):
        if value.denominator == 1:
            return str(value.numerator)
        value = float(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def reduce_fraction(numerator: int, denominator: int) -> Tuple[int, int]:
    divisor = gcd(abs(numerator), abs(denominator))
    if divisor > 1:
        return numerator // divisor, denominator // divisor
    return numerator, denominator


def format_fraction(numerator: int, denominator: int) -> str:
    if numerator == 0:
        return "0"
    return f"{numerator}/{denominator}"


def format_mixed_number(numerator: int, denominator: int) -> str:
    """
    Renders a reduced, non-negative fraction, switching to `<whole> <r>/<d>`
    (or just `<whole>`) once it is improper.
    """

    if numerator < denominator:
        return format_fraction(numerator, denominator)
    whole, remainder = divmod(numerator, denominator)
    if remainder == 0:
        return str(whole)
    return f"{whole} {remainder}/{denominator}"


def format_equivalent(numerator: int, denominator: int) -> str:
    """
    `"6/15 = 2/5"` style answer: the unreduced result followed by its lowest
    terms, collapsed to one form when they already agree.
    """

    reduced_num, reduced_den = reduce_fraction(numerator, denominator)
    raw_text = f"{numerator}/{denominator}"
    if reduced_den == 1:
        reduced_text = str(reduced_num)
    else:
        reduced_text = f"{reduced_num}/{reduced_den}"
    if (reduced_num, reduced_den) == (numerator, denominator):
        return raw_text
    return f"{raw_text} = {reduced_text}"


def signed_term(coefficient: int, variable: str, *, leading: bool) -> Optional[str]:
    """
    Renders `coefficient * variable` as one term of a polynomial. Leading
    terms carry their own sign (`-x`); later terms are joined with ` + ` or
    ` - `. Zero coefficients drop out (returns None).
    """

    if coefficient == 0:
        return None
    magnitude = abs(coefficient)
    body = variable if (magnitude == 1 and variable) else f"{magnitude}{variable}"
    if leading:
        return f"-{body}" if coefficient < 0 else body
    return f"- {body}" if coefficient < 0 else f"+ {body}"


def join_terms(terms: Sequence[Any]) -> str:
    parts = [term for term in terms if term]
    return " ".join(parts) if parts else "0"


def check_count(count: int) -> None:
    if count < 0:
        raise InvalidConfiguration(f"Question count must be >= 0, got {count}.")
