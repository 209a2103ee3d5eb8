"""Card and Shoe classes - immutable cards dealt from a multi-deck shoe."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterator

from settlement.errors import EmptyShoe
from settlement.rng import secure_rng

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def slug(self) -> str:
        """Lowercase name used in card tokens."""
        return self.name.lower()


class Rank(Enum):
    """Card ranks."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def slug(self) -> str:
        """Rank name used in card tokens ('2'..'10', 'jack', ..., 'ace')."""
        if self.value <= 10:
            return str(self.value)
        return self.name.lower()

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10

    @property
    def baccarat_value(self) -> int:
        """Return the baccarat point value (Ace = 1, tens and faces = 0)."""
        if self == Rank.ACE:
            return 1
        if self.value >= 10:
            return 0
        return self.value

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    ``deck`` is the index of the sub-deck the card came from, so the same
    rank and suit appear once per deck and every card in a shoe is unique.
    """

    rank: Rank
    suit: Suit
    deck: int = 0

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name}, deck={self.deck})"

    @property
    def token(self) -> str:
        """Identity token unique within a shoe."""
        return f"{self.rank.slug}_of_{self.suit.slug}_deck_{self.deck}"

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str, deck: int = 0) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
            "A": Rank.ACE,
        }

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str], deck)


def fresh_cards(num_decks: int) -> list[Card]:
    """Return every suit×rank combination once per deck, in order."""
    return [
        Card(rank, suit, deck)
        for deck in range(num_decks)
        for suit in Suit
        for rank in Rank
    ]


class Shoe:
    """
    A shoe of one or more 52-card decks, dealt from the end.

    A shoe is owned by a single table; it is never shared across
    concurrently played rounds.
    """

    def __init__(
        self,
        num_decks: int = 6,
        rng: Random | None = None,
        reshuffle_threshold: int = 0,
    ) -> None:
        """
        Initialize a shoe in unshuffled order.

        Args:
            num_decks: Number of decks in the shoe
            rng: Random number generator for shuffling
            reshuffle_threshold: Rebuild the shoe when fewer cards remain
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if reshuffle_threshold < 0:
            raise ValueError("Reshuffle threshold cannot be negative")
        if reshuffle_threshold > num_decks * CARDS_PER_DECK:
            raise ValueError("Reshuffle threshold exceeds shoe size")

        self._num_decks = num_decks
        self._rng = rng or secure_rng()
        self._reshuffle_threshold = reshuffle_threshold
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset shoe to all cards from all decks, unshuffled."""
        self._cards = fresh_cards(self._num_decks)

    def shuffle(self) -> None:
        """Fisher-Yates shuffle of the remaining cards."""
        self._rng.shuffle(self._cards)

    def reshuffle(self) -> None:
        """Discard the remaining cards and shuffle a brand-new shoe."""
        discarded = len(self._cards)
        self.reset()
        self.shuffle()
        logger.debug(
            "Reshuffled %d-deck shoe (discarded %d cards)",
            self._num_decks,
            discarded,
        )

    def draw(self) -> Card:
        """
        Draw a card from the shoe.

        Raises:
            EmptyShoe: If no cards remain
        """
        if not self._cards:
            raise EmptyShoe("Cannot draw from empty shoe")
        return self._cards.pop()

    def ensure_cards(self, needed: int) -> bool:
        """
        Reshuffle if the shoe cannot cover the next round.

        Args:
            needed: Worst-case number of cards the next round draws

        Returns:
            True if the shoe was rebuilt
        """
        if needed > self.total_cards:
            raise EmptyShoe(
                f"A {self._num_decks}-deck shoe cannot supply {needed} cards"
            )
        if len(self._cards) < max(needed, self._reshuffle_threshold):
            self.reshuffle()
            return True
        return False

    @property
    def needs_shuffle(self) -> bool:
        """Check if the remaining cards fell below the reshuffle threshold."""
        return len(self._cards) < self._reshuffle_threshold

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def cards_dealt(self) -> int:
        """Return the number of cards dealt."""
        return self.total_cards - len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * CARDS_PER_DECK

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    @property
    def reshuffle_threshold(self) -> int:
        """Return the configured reshuffle threshold."""
        return self._reshuffle_threshold

    @property
    def decks_remaining(self) -> float:
        """Return the estimated number of decks remaining."""
        return len(self._cards) / CARDS_PER_DECK

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


def build_shoe(
    deck_count: int,
    rng: Random | None = None,
    reshuffle_threshold: int = 0,
) -> Shoe:
    """
    Build and shuffle a shoe of ``deck_count`` decks.

    Args:
        deck_count: Number of 52-card decks
        rng: Random number generator (OS entropy when omitted)
        reshuffle_threshold: Minimum cards before the shoe is rebuilt

    Returns:
        A shuffled shoe with ``52 * deck_count`` cards
    """
    shoe = Shoe(num_decks=deck_count, rng=rng, reshuffle_threshold=reshuffle_threshold)
    shoe.shuffle()
    return shoe

