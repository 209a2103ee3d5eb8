"""
Roulette bet registry.

Every bet that can be placed on the layout is generated from the board
topology (three rows of twelve columns, zero pockets at the head) and
stored in a read-only mapping keyed by bet id. The same registry answers
settlement ("does this bet cover the winning number?") and layout
hit-testing ("which bet does this hotspot place?").
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Sequence

from settlement.errors import InvalidBet, UnknownSelection
from settlement.roulette.wheel import (
    BLACK_NUMBERS,
    DOUBLE_ZERO,
    RED_NUMBERS,
    Variant,
    pocket_label,
)


class BetCategory(str, Enum):
    """Bet shapes and their fixed payouts (x to 1)."""

    STRAIGHT = "straight"
    SPLIT = "split"
    STREET = "street"
    CORNER = "corner"
    SIX_LINE = "sixline"
    DOZEN = "dozen"
    COLUMN = "column"
    EVEN_MONEY = "even_money"

    @property
    def payout(self) -> int:
        """Return the winnings multiplier for this category."""
        return _PAYOUTS[self]

    @property
    def size(self) -> int:
        """Return how many numbers a bet of this category covers."""
        return _SIZES[self]


_PAYOUTS = {
    BetCategory.STRAIGHT: 35,
    BetCategory.SPLIT: 17,
    BetCategory.STREET: 11,
    BetCategory.CORNER: 8,
    BetCategory.SIX_LINE: 5,
    BetCategory.DOZEN: 2,
    BetCategory.COLUMN: 2,
    BetCategory.EVEN_MONEY: 1,
}

_SIZES = {
    BetCategory.STRAIGHT: 1,
    BetCategory.SPLIT: 2,
    BetCategory.STREET: 3,
    BetCategory.CORNER: 4,
    BetCategory.SIX_LINE: 6,
    BetCategory.DOZEN: 12,
    BetCategory.COLUMN: 12,
    BetCategory.EVEN_MONEY: 18,
}

# Even-money bet ids and the numbers they cover
EVEN_MONEY_BETS: dict[str, tuple[str, frozenset[int]]] = {
    "red": ("RED", RED_NUMBERS),
    "black": ("BLACK", BLACK_NUMBERS),
    "even": ("EVEN", frozenset(n for n in range(1, 37) if n % 2 == 0)),
    "odd": ("ODD", frozenset(n for n in range(1, 37) if n % 2 == 1)),
    "low": ("1-18", frozenset(range(1, 19))),
    "high": ("19-36", frozenset(range(19, 37))),
}

_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


@dataclass(frozen=True)
class BetConfig:
    """Registry entry for one placeable bet."""

    bet_id: str
    category: BetCategory
    numbers: frozenset[int]
    payout: int
    label: str

    def covers(self, number: int) -> bool:
        """Check if the bet wins when ``number`` comes up."""
        return number in self.numbers


def _ordered(numbers: Iterable[int]) -> list[int]:
    # 0 first, then 00, then the board numbers ascending
    return sorted(numbers, key=lambda n: (n != 0, n != DOUBLE_ZERO, n))


def format_bet_id(category: BetCategory, numbers: Iterable[int]) -> str:
    """Build the id of an inside bet from the numbers it covers."""
    prefix = "num" if category == BetCategory.STRAIGHT else category.value
    return "_".join([prefix, *(pocket_label(n) for n in _ordered(numbers))])


def _inside_label(category: BetCategory, numbers: Sequence[int]) -> str:
    ordered = _ordered(numbers)
    if category in (BetCategory.STREET, BetCategory.SIX_LINE):
        return f"{ordered[0]}-{ordered[-1]}"
    return "/".join(pocket_label(n) for n in ordered)


def _zero_splits(variant: Variant) -> list[tuple[int, int]]:
    if variant.has_double_zero:
        return [(0, 1), (0, 2), (DOUBLE_ZERO, 2), (DOUBLE_ZERO, 3), (0, DOUBLE_ZERO)]
    return [(0, 1), (0, 2), (0, 3)]


def _build_entries(variant: Variant) -> dict[str, BetConfig]:
    entries: dict[str, BetConfig] = {}

    def add_inside(category: BetCategory, numbers: Sequence[int]) -> None:
        bet_id = format_bet_id(category, numbers)
        entries[bet_id] = BetConfig(
            bet_id=bet_id,
            category=category,
            numbers=frozenset(numbers),
            payout=category.payout,
            label=_inside_label(category, numbers),
        )

    for number in _ordered(variant.pockets):
        add_inside(BetCategory.STRAIGHT, [number])

    # n/n+1 share a street; n/n+3 sit side by side in adjacent streets
    for n in range(1, 36):
        if n % 3 != 0:
            add_inside(BetCategory.SPLIT, [n, n + 1])
    for n in range(1, 34):
        add_inside(BetCategory.SPLIT, [n, n + 3])
    for pair in _zero_splits(variant):
        add_inside(BetCategory.SPLIT, pair)

    for start in range(1, 37, 3):
        add_inside(BetCategory.STREET, [start, start + 1, start + 2])

    for n in range(1, 33):
        if n % 3 != 0:
            add_inside(BetCategory.CORNER, [n, n + 1, n + 3, n + 4])

    for start in range(1, 32, 3):
        add_inside(BetCategory.SIX_LINE, list(range(start, start + 6)))

    for k in range(1, 4):
        entries[f"dozen_{k}"] = BetConfig(
            bet_id=f"dozen_{k}",
            category=BetCategory.DOZEN,
            numbers=frozenset(range(12 * (k - 1) + 1, 12 * k + 1)),
            payout=BetCategory.DOZEN.payout,
            label=f"{_ORDINALS[k]} 12",
        )

    for k in range(1, 4):
        entries[f"column_{k}"] = BetConfig(
            bet_id=f"column_{k}",
            category=BetCategory.COLUMN,
            numbers=frozenset(range(k, 37, 3)),
            payout=BetCategory.COLUMN.payout,
            label=f"Column {k}",
        )

    for bet_id, (label, numbers) in EVEN_MONEY_BETS.items():
        entries[bet_id] = BetConfig(
            bet_id=bet_id,
            category=BetCategory.EVEN_MONEY,
            numbers=numbers,
            payout=BetCategory.EVEN_MONEY.payout,
            label=label,
        )

    return entries


class BetRegistry(Mapping[str, BetConfig]):
    """Read-only mapping of bet id to BetConfig for one wheel variant."""

    def __init__(self, variant: Variant) -> None:
        self._variant = variant
        self._entries = MappingProxyType(_build_entries(variant))

    @property
    def variant(self) -> Variant:
        """Return the wheel variant this registry describes."""
        return self._variant

    def __getitem__(self, bet_id: str) -> BetConfig:
        return self._entries[bet_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def by_category(self, category: BetCategory) -> list[BetConfig]:
        """Return all entries of one category, in registry order."""
        return [c for c in self._entries.values() if c.category == category]

    def covering(self, number: int) -> list[str]:
        """Return the ids of every bet that wins on ``number``."""
        return [bet_id for bet_id, c in self._entries.items() if number in c.numbers]


_REGISTRIES = MappingProxyType({variant: BetRegistry(variant) for variant in Variant})


def get_registry(variant: Variant = Variant.EUROPEAN) -> BetRegistry:
    """Return the shared registry for a wheel variant."""
    return _REGISTRIES[Variant(variant)]


def get_bet_config(bet_id: str, variant: Variant = Variant.EUROPEAN) -> BetConfig | None:
    """Look up a bet by id; None if the layout has no such bet."""
    return get_registry(variant).get(bet_id)


def bets_covering(number: int, variant: Variant = Variant.EUROPEAN) -> list[str]:
    """Return the ids of every bet that wins on ``number``."""
    return get_registry(variant).covering(number)


_INSIDE_TAGS = {
    "straight": BetCategory.STRAIGHT,
    "split": BetCategory.SPLIT,
    "street": BetCategory.STREET,
    "corner": BetCategory.CORNER,
    "sixline": BetCategory.SIX_LINE,
}

_GROUP_TAGS = {"dozen", "column"}


def bet_id_for(
    bet_type: str,
    selection: Sequence[int] = (),
    variant: Variant = Variant.EUROPEAN,
) -> str:
    """
    Translate a bet tag and its selection into a registry id.

    Inside bets take the covered numbers (``("split", (17, 20))``), dozens
    and columns take their 1-based index (``("dozen", (2,))``), even-money
    tags take no selection. With an empty selection any other ``bet_type``
    is returned unchanged and treated as a registry id.

    Raises:
        InvalidBet: If the tag is unknown
        UnknownSelection: If the selection does not describe a bet on the layout
    """
    tag = bet_type.strip().lower()
    numbers = tuple(selection)

    if tag in EVEN_MONEY_BETS:
        if numbers:
            raise UnknownSelection(f"'{tag}' bets take no selection")
        return tag

    if tag in _GROUP_TAGS:
        if len(numbers) != 1 or numbers[0] not in (1, 2, 3):
            raise UnknownSelection(f"'{tag}' selection must be one of 1, 2, 3")
        return f"{tag}_{numbers[0]}"

    if tag in _INSIDE_TAGS:
        category = _INSIDE_TAGS[tag]
        if len(numbers) != category.size or len(set(numbers)) != len(numbers):
            raise UnknownSelection(
                f"'{tag}' bets cover {category.size} distinct numbers, got {list(numbers)}"
            )
        for n in numbers:
            if isinstance(n, bool) or not isinstance(n, int) or n not in variant.pockets:
                raise UnknownSelection(
                    f"{n!r} is not a pocket on the {variant.value} wheel"
                )
        bet_id = format_bet_id(category, numbers)
        if bet_id not in get_registry(variant):
            raise UnknownSelection(
                f"{list(numbers)} is not a valid {tag} on the {variant.value} layout"
            )
        return bet_id

    if numbers:
        raise InvalidBet(f"Unknown bet type: {bet_type!r}")
    return bet_type
