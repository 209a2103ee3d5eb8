"""Decimal helpers for stake and payout arithmetic."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from settlement.errors import InvalidBet

CENT = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Quantize a value to cents, rounding half up."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def validate_amount(amount: Decimal | int | float | str) -> Decimal:
    """
    Convert a bet amount to cents and check it is positive.

    Raises:
        InvalidBet: If the amount is not a finite number, does not fit in
            the decimal context, or is not positive once rounded to cents
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as exc:
        raise InvalidBet(f"Bet amount is not a number: {amount!r}") from exc

    if not value.is_finite() or value <= 0:
        raise InvalidBet(f"Bet amount must be greater than zero, got {amount}")

    try:
        stake = to_money(value)
    except InvalidOperation as exc:
        raise InvalidBet(f"Bet amount is too large: {amount}") from exc

    # Sub-cent amounts round down to nothing
    if stake <= 0:
        raise InvalidBet(f"Bet amount must be at least {CENT}, got {amount}")
    return stake
