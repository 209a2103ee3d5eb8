"""Blackjack hand evaluation and outcome resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from settlement.cards import Card

DEALER_STANDS_ON = 17


class Outcome(str, Enum):
    """Result of a blackjack round from the player's side."""

    PLAYER_BLACKJACK = "PLAYER_BLACKJACK"
    PLAYER_WIN = "PLAYER_WIN"
    DEALER_WIN = "DEALER_WIN"
    PLAYER_BUST = "PLAYER_BUST"
    DEALER_BUST = "DEALER_BUST"
    PUSH = "PUSH"

    @property
    def player_won(self) -> bool:
        """Check if the player is paid."""
        return self in (Outcome.PLAYER_BLACKJACK, Outcome.PLAYER_WIN, Outcome.DEALER_BUST)

    @property
    def is_push(self) -> bool:
        """Check if the stake is returned."""
        return self == Outcome.PUSH


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        Aces count 11 and drop to 1 one at a time while the total is over 21.
        """
        total = 0
        aces = 0

        for card in self.cards:
            if card.is_ace:
                aces += 1
            total += card.rank.blackjack_value

        while total > 21 and aces > 0:
            total -= 10
            aces -= 1

        return total

    @property
    def is_soft(self) -> bool:
        """Check if an ace is still counted as 11."""
        if not any(card.is_ace for card in self.cards):
            return False
        total_hard = sum(1 if card.is_ace else card.rank.blackjack_value for card in self.cards)
        return total_hard + 10 <= 21

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a two-card 21."""
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_busted:
            return f"{cards_str} (BUST)"
        if self.is_blackjack:
            return f"{cards_str} (BLACKJACK)"
        return f"{cards_str} ({self.value})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def dealer_should_hit(hand: Hand) -> bool:
    """Dealer hits below 17 and stands on every 17, soft or hard."""
    return hand.value < DEALER_STANDS_ON


def resolve_outcome(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """
    Compare finished player and dealer hands.

    A player bust loses even if the dealer also busts.
    """
    if player_hand.is_busted:
        return Outcome.PLAYER_BUST
    if dealer_hand.is_busted:
        return Outcome.DEALER_BUST

    player_value = player_hand.value
    dealer_value = dealer_hand.value
    if player_value > dealer_value:
        return Outcome.PLAYER_WIN
    if dealer_value > player_value:
        return Outcome.DEALER_WIN
    return Outcome.PUSH
