"""Domain model entities for moneysaver.

These are pure data classes representing the ledger, independent of how it
is stored. Transactions are a tagged union of three variants so that each
kind only carries the fields it needs.
"""

from dataclasses import dataclass, field
from datetime import date as date_type, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

TRANSFER_CATEGORY = "Transfer"
CREDIT_ACCOUNT_TYPE = "credit"


class TransactionType(str, Enum):
    """Kind of a transaction, also its persisted tag."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class Account:
    """Money account domain entity."""

    id: str
    name: str
    balance: Decimal
    type: str
    created_at: datetime

    @property
    def is_credit(self) -> bool:
        return self.type == CREDIT_ACCOUNT_TYPE


@dataclass(frozen=True)
class Income:
    """Money received into one account."""

    id: str
    amount: Decimal
    account_id: str
    category: str
    date: datetime
    description: Optional[str] = None

    type = TransactionType.INCOME

    def references(self, account_id: str) -> bool:
        return self.account_id == account_id


@dataclass(frozen=True)
class Expense:
    """Money spent from one account."""

    id: str
    amount: Decimal
    account_id: str
    category: str
    date: datetime
    description: Optional[str] = None

    type = TransactionType.EXPENSE

    def references(self, account_id: str) -> bool:
        return self.account_id == account_id


@dataclass(frozen=True)
class Transfer:
    """Money moved between two accounts."""

    id: str
    amount: Decimal
    from_account_id: str
    to_account_id: str
    date: datetime
    description: Optional[str] = None

    type = TransactionType.TRANSFER
    category = TRANSFER_CATEGORY

    @property
    def account_id(self) -> str:
        """Account shown when listing the transfer (the source account)."""
        return self.from_account_id

    def references(self, account_id: str) -> bool:
        return account_id in (self.from_account_id, self.to_account_id)


Transaction = Union[Income, Expense, Transfer]


@dataclass(frozen=True)
class Settings:
    """User preferences and the configurable label lists."""

    currency: str = "USD"
    date_format: str = "MM/DD/YYYY"
    income_categories: tuple[str, ...] = ()
    expense_categories: tuple[str, ...] = ()
    account_types: tuple[str, ...] = ()
    default_income_category: Optional[str] = None
    default_expense_category: Optional[str] = None


@dataclass(frozen=True)
class Ledger:
    """Aggregate root: every account, transaction and the settings."""

    accounts: tuple[Account, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    settings: Settings = field(default_factory=Settings)

    def find_account(self, account_id: str) -> Optional[Account]:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None

    def find_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for txn in self.transactions:
            if txn.id == transaction_id:
                return txn
        return None


@dataclass(frozen=True)
class PeriodTotals:
    """Income, expense and net change over a set of transactions."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class DayGroup:
    """Transactions that happened on one calendar day."""

    day: date_type
    transactions: tuple[Transaction, ...]
    totals: PeriodTotals


@dataclass(frozen=True)
class DailySummary:
    """Totals and per-category breakdown for a single day."""

    day: date_type
    totals: PeriodTotals
    transactions: tuple[Transaction, ...]
    expenses_by_category: tuple[tuple[str, Decimal], ...] = ()
    income_by_category: tuple[tuple[str, Decimal], ...] = ()
