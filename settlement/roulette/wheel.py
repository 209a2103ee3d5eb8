"""Roulette wheel layouts, pocket colors and spins."""

import logging
from enum import Enum
from random import Random

from settlement.errors import UnknownSelection

logger = logging.getLogger(__name__)

# "00" pocket on double-zero wheels
DOUBLE_ZERO = 37

RED_NUMBERS = frozenset(
    {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}
)
BLACK_NUMBERS = frozenset(range(1, 37)) - RED_NUMBERS

# Pocket order clockwise from zero
EUROPEAN_WHEEL = (
    0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36, 11, 30, 8, 23, 10,
    5, 24, 16, 33, 1, 20, 14, 31, 9, 22, 18, 29, 7, 28, 12, 35, 3, 26,
)
AMERICAN_WHEEL = (
    0, 28, 9, 26, 30, 11, 7, 20, 32, 17, 5, 22, 34, 15, 3, 24, 36, 13, 1,
    DOUBLE_ZERO, 27, 10, 25, 29, 12, 8, 19, 31, 18, 6, 21, 33, 16, 4, 23,
    35, 14, 2,
)


class Variant(str, Enum):
    """Wheel variants."""

    EUROPEAN = "european"
    AMERICAN = "american"

    @property
    def pockets(self) -> tuple[int, ...]:
        """Pockets in wheel order."""
        if self == Variant.AMERICAN:
            return AMERICAN_WHEEL
        return EUROPEAN_WHEEL

    @property
    def has_double_zero(self) -> bool:
        """Check if the wheel has a "00" pocket."""
        return self == Variant.AMERICAN


class Color(str, Enum):
    """Pocket colors."""

    RED = "red"
    BLACK = "black"
    GREEN = "green"


def validate_number(number: int, variant: Variant = Variant.EUROPEAN) -> int:
    """
    Check that a number is a pocket on the given wheel.

    Raises:
        UnknownSelection: If the wheel has no such pocket
    """
    if isinstance(number, bool) or not isinstance(number, int):
        raise UnknownSelection(f"Winning number must be an integer, got {number!r}")
    if number not in variant.pockets:
        raise UnknownSelection(
            f"{number} is not a pocket on the {variant.value} wheel"
        )
    return number


def color_of(number: int) -> Color:
    """Return the pocket color; 0 and 00 are green."""
    if number in RED_NUMBERS:
        return Color.RED
    if number in BLACK_NUMBERS:
        return Color.BLACK
    return Color.GREEN


def pocket_label(number: int) -> str:
    """Display label of a pocket ("00" for the double zero)."""
    return "00" if number == DOUBLE_ZERO else str(number)


def spin(rng: Random, variant: Variant = Variant.EUROPEAN) -> int:
    """Spin the wheel; every pocket is equally likely."""
    number = rng.choice(variant.pockets)
    logger.debug("Wheel (%s) landed on %s", variant.value, pocket_label(number))
    return number
