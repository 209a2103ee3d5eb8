"""Settlement errors raised by the engine."""


class SettlementError(Exception):
    """Base class for all engine errors."""


class InvalidBet(SettlementError, ValueError):
    """Bet amount is not positive or the bet identifier is unknown."""


class EmptyShoe(SettlementError, IndexError):
    """A card was requested from a shoe with no cards left."""


class UnknownSelection(SettlementError, ValueError):
    """Winning number or bet selection is outside the valid domain."""


class InvalidAction(SettlementError):
    """Action is not allowed in the current round phase."""
