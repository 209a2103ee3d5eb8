"""Pytest fixtures for settlement engine tests."""

from random import Random

import pytest

from settlement.cards import Card, Rank, Shoe, Suit
from settlement.hand import Hand


class StackedShoe(Shoe):
    """Shoe that deals a fixed card order; shuffling leaves the order intact."""

    def __init__(self, cards: list[Card], num_decks: int = 1, reshuffle_threshold: int = 0) -> None:
        self._stacked = list(cards)
        super().__init__(num_decks=num_decks, reshuffle_threshold=reshuffle_threshold)

    def reset(self) -> None:
        # draw() pops from the end
        self._cards = list(reversed(self._stacked))

    def shuffle(self) -> None:
        pass


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def make_cards():
    """Build cards from strings like 'AS', '10H', 'Kd'."""

    def _make(*specs: str) -> list[Card]:
        return [Card.from_string(s) for s in specs]

    return _make


@pytest.fixture
def make_hand(make_cards):
    """Build a blackjack hand from card strings."""

    def _make(*specs: str) -> Hand:
        return Hand(make_cards(*specs))

    return _make


@pytest.fixture
def stacked_shoe(make_cards):
    """Build a shoe that deals the given cards in order."""

    def _make(*specs: str, **kwargs) -> StackedShoe:
        return StackedShoe(make_cards(*specs), **kwargs)

    return _make


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand([Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(
        [
            Card(Rank.TEN, Suit.SPADES),
            Card(Rank.SIX, Suit.HEARTS),
            Card(Rank.KING, Suit.CLUBS),
        ]
    )
