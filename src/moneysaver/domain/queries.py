"""Read-only views over the ledger.

Everything is recomputed from the store's current snapshot on each call.
"""

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from moneysaver.domain.entities import (
    Account,
    DailySummary,
    DayGroup,
    PeriodTotals,
    Transaction,
    TransactionType,
)
from moneysaver.domain.store import LedgerStore


class LedgerQueries:
    """Derived views used by reports and the command line."""

    def __init__(self, store: LedgerStore):
        """Initialize ledger queries.

        Args:
            store: LedgerStore whose current state is queried
        """
        self.store = store

    def account_by_id(self, account_id: str) -> Optional[Account]:
        """Get account by ID, or None if it does not exist."""
        return self.store.ledger.find_account(account_id)

    def transaction_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, or None if it does not exist."""
        return self.store.ledger.find_transaction(transaction_id)

    def total_balance(self) -> Decimal:
        """Sum of all balances, with credit accounts counted negated."""
        total = Decimal("0")
        for account in self.store.ledger.accounts:
            total += -account.balance if account.is_credit else account.balance
        return total

    def transactions_in_range(self, start: datetime, end: datetime) -> list[Transaction]:
        """Transactions whose timestamp lies in [start, end].

        Comparison is on full timestamps; truncate the bounds to days before
        calling if whole days are wanted.
        """
        return [txn for txn in self.store.ledger.transactions if start <= txn.date <= end]

    def transactions_for_account(self, account_id: str) -> list[Transaction]:
        """Transactions touching the account on either side."""
        return [txn for txn in self.store.ledger.transactions if txn.references(account_id)]

    def transactions_by_type(self, txn_type: TransactionType | str) -> list[Transaction]:
        """Transactions of one kind."""
        txn_type = TransactionType(txn_type)
        return [txn for txn in self.store.ledger.transactions if txn.type is txn_type]

    def transactions_on(self, day: date) -> list[Transaction]:
        """Transactions on a calendar day, judged by each timestamp's own offset."""
        return [txn for txn in self.store.ledger.transactions if txn.date.date() == day]

    @staticmethod
    def period_totals(transactions: Iterable[Transaction]) -> PeriodTotals:
        """Income and expense totals. Transfers count in neither."""
        income = Decimal("0")
        expense = Decimal("0")
        for txn in transactions:
            if txn.type is TransactionType.INCOME:
                income += txn.amount
            elif txn.type is TransactionType.EXPENSE:
                expense += txn.amount
        return PeriodTotals(income=income, expense=expense)

    @staticmethod
    def category_totals(
        transactions: Iterable[Transaction], txn_type: TransactionType | str
    ) -> list[tuple[str, Decimal]]:
        """Amount per category for one transaction type, largest first."""
        txn_type = TransactionType(txn_type)
        totals: dict[str, Decimal] = defaultdict(Decimal)
        for txn in transactions:
            if txn.type is txn_type:
                totals[txn.category] += txn.amount
        return sorted(totals.items(), key=lambda item: (-item[1], item[0]))

    @classmethod
    def group_by_day(cls, transactions: Iterable[Transaction]) -> list[DayGroup]:
        """Group transactions by calendar day, newest day first.

        Within a day, transactions keep their ledger order.
        """
        grouped: dict[date, list[Transaction]] = defaultdict(list)
        for txn in transactions:
            grouped[txn.date.date()].append(txn)

        return [
            DayGroup(day=day, transactions=tuple(txns), totals=cls.period_totals(txns))
            for day, txns in sorted(grouped.items(), key=lambda item: item[0], reverse=True)
        ]

    def recent_days(self, limit: int = 7) -> list[DayGroup]:
        """The most recent days that have transactions, newest first."""
        return self.group_by_day(self.store.ledger.transactions)[:limit]

    def daily_summary(self, day: date) -> DailySummary:
        """Totals and category breakdown for one day."""
        transactions: Sequence[Transaction] = self.transactions_on(day)
        return DailySummary(
            day=day,
            totals=self.period_totals(transactions),
            transactions=tuple(transactions),
            expenses_by_category=tuple(self.category_totals(transactions, TransactionType.EXPENSE)),
            income_by_category=tuple(self.category_totals(transactions, TransactionType.INCOME)),
        )
