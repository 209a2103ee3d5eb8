"""Balance ledger the service debits stakes from and credits payouts to."""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal

from settlement.money import to_money

logger = logging.getLogger(__name__)


class InsufficientFunds(Exception):
    """Stake exceeds the account balance."""

    def __init__(self, required: Decimal, available: Decimal) -> None:
        super().__init__(f"Insufficient balance: need {required}, have {available}")
        self.required = required
        self.available = available


class Ledger(ABC):
    """Abstract balance ledger. The engine itself never touches balances."""

    @abstractmethod
    def open_account(self, account: str, balance: Decimal) -> None:
        """Create an account with a starting balance."""
        ...

    @abstractmethod
    def balance(self, account: str) -> Decimal:
        """Return the account balance."""
        ...

    @abstractmethod
    def debit(self, account: str, amount: Decimal) -> Decimal:
        """Take a stake; returns the new balance."""
        ...

    @abstractmethod
    def credit(self, account: str, amount: Decimal) -> Decimal:
        """Pay out; returns the new balance."""
        ...


class InMemoryLedger(Ledger):
    """Process-local ledger."""

    def __init__(self) -> None:
        self._balances: dict[str, Decimal] = {}

    def open_account(self, account: str, balance: Decimal) -> None:
        """Create an account with a starting balance."""
        self._balances[account] = to_money(balance)

    def close_account(self, account: str) -> None:
        """Forget an account."""
        self._balances.pop(account, None)

    def balance(self, account: str) -> Decimal:
        """Return the account balance."""
        return self._balances[account]

    def debit(self, account: str, amount: Decimal) -> Decimal:
        """Take a stake; returns the new balance."""
        amount = to_money(amount)
        available = self._balances[account]
        if amount > available:
            raise InsufficientFunds(amount, available)
        self._balances[account] = available - amount
        logger.debug("Debited %s (balance %s)", amount, self._balances[account])
        return self._balances[account]

    def credit(self, account: str, amount: Decimal) -> Decimal:
        """Pay out; returns the new balance."""
        amount = to_money(amount)
        if amount < 0:
            raise ValueError("Credit amount cannot be negative")
        self._balances[account] += amount
        logger.debug("Credited %s (balance %s)", amount, self._balances[account])
        return self._balances[account]


# Global ledger instance
_ledger: InMemoryLedger | None = None


def get_ledger() -> InMemoryLedger:
    """Get or create the ledger."""
    global _ledger
    if _ledger is None:
        _ledger = InMemoryLedger()
    return _ledger
