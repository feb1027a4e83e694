"""Tests for ledger queries."""

import pytest
from datetime import date, datetime, timedelta, timezone, UTC
from decimal import Decimal

from moneysaver.domain.entities import PeriodTotals, TransactionType
from moneysaver.domain.queries import LedgerQueries


def _at(clock, moment):
    clock.current = moment
    return moment


@pytest.fixture
def history(store, clock, wallet, savings):
    """Transactions spread over three days."""
    _at(clock, datetime(2024, 3, 1, 8, 0, tzinfo=UTC))
    salary = store.create_transaction(type="income", amount=1000, account_id=wallet.id, category="Salary")
    lunch = store.create_transaction(type="expense", amount="12.50", account_id=wallet.id, category="Food")

    _at(clock, datetime(2024, 3, 2, 18, 30, tzinfo=UTC))
    move = store.create_transaction(type="transfer", amount=200, from_account_id=wallet.id, to_account_id=savings.id)
    bus = store.create_transaction(type="expense", amount=3, account_id=wallet.id, category="Transportation")

    _at(clock, datetime(2024, 3, 4, 20, 0, tzinfo=UTC))
    dinner = store.create_transaction(type="expense", amount=40, account_id=savings.id, category="Food")
    bonus = store.create_transaction(type="income", amount=100, account_id=savings.id, category="Other Income")

    return {"salary": salary, "lunch": lunch, "move": move, "bus": bus, "dinner": dinner, "bonus": bonus}


class TestLookups:
    """Tests for id lookups."""

    def test_account_by_id(self, queries, wallet):
        assert queries.account_by_id(wallet.id) == wallet
        assert queries.account_by_id("acc-missing") is None

    def test_transaction_by_id(self, queries, history):
        assert queries.transaction_by_id(history["move"].id) == history["move"]
        assert queries.transaction_by_id("tx-missing") is None


class TestTotalBalance:
    """Tests for total_balance."""

    def test_credit_is_negated(self, store, queries):
        for account in store.ledger.accounts:
            store.delete_account(account.id)
        store.create_account(name="Card", balance=Decimal("-200"), type="credit")
        store.create_account(name="Cash", balance=Decimal("500"), type="cash")

        assert queries.total_balance() == Decimal("700")

    def test_only_exact_credit_type_is_negated(self, store, queries):
        for account in store.ledger.accounts:
            store.delete_account(account.id)
        store.create_account(name="Card", balance=Decimal("-200"), type="Credit Card")

        assert queries.total_balance() == Decimal("-200")

    def test_empty_ledger(self, store, queries):
        for account in store.ledger.accounts:
            store.delete_account(account.id)
        assert queries.total_balance() == Decimal("0")


class TestFiltering:
    """Tests for range, account and type filters."""

    def test_range_is_inclusive(self, queries, history):
        start = datetime(2024, 3, 1, 8, 0, tzinfo=UTC)
        end = datetime(2024, 3, 2, 18, 31, tzinfo=UTC)

        result = queries.transactions_in_range(start, end)

        assert [txn.id for txn in result] == [
            history["salary"].id,
            history["lunch"].id,
            history["move"].id,
            history["bus"].id,
        ]

    def test_range_excludes_outside(self, queries, history):
        start = datetime(2024, 3, 3, tzinfo=UTC)
        end = datetime(2024, 3, 3, 23, 59, 59, tzinfo=UTC)
        assert queries.transactions_in_range(start, end) == []

    def test_range_compares_instants_across_offsets(self, queries, history):
        plus_seven = timezone(timedelta(hours=7))
        start = datetime(2024, 3, 5, 3, 0, tzinfo=plus_seven)
        end = datetime(2024, 3, 5, 3, 1, tzinfo=plus_seven)

        result = queries.transactions_in_range(start, end)

        assert [txn.id for txn in result] == [history["dinner"].id, history["bonus"].id]

    def test_for_account_includes_both_transfer_sides(self, queries, history, savings):
        ids = [txn.id for txn in queries.transactions_for_account(savings.id)]
        assert ids == [history["move"].id, history["dinner"].id, history["bonus"].id]

    def test_for_unknown_account(self, queries, history):
        assert queries.transactions_for_account("acc-missing") == []

    @pytest.mark.parametrize(
        "txn_type, expected",
        [
            ("income", ["salary", "bonus"]),
            (TransactionType.EXPENSE, ["lunch", "bus", "dinner"]),
            ("transfer", ["move"]),
        ],
    )
    def test_by_type(self, queries, history, txn_type, expected):
        assert [txn.id for txn in queries.transactions_by_type(txn_type)] == [history[k].id for k in expected]

    def test_on_day(self, queries, history):
        result = queries.transactions_on(date(2024, 3, 2))
        assert [txn.id for txn in result] == [history["move"].id, history["bus"].id]


class TestAggregates:
    """Tests for totals and grouping."""

    def test_period_totals_ignore_transfers(self, queries, history):
        totals = LedgerQueries.period_totals(queries.store.ledger.transactions)

        assert totals == PeriodTotals(income=Decimal("1100"), expense=Decimal("55.50"))
        assert totals.net == Decimal("1044.50")

    def test_period_totals_empty(self):
        totals = LedgerQueries.period_totals([])
        assert totals.income == 0
        assert totals.expense == 0
        assert totals.net == 0

    def test_category_totals_sorted_by_amount(self, queries, history):
        result = LedgerQueries.category_totals(queries.store.ledger.transactions, "expense")
        assert result == [("Food", Decimal("52.50")), ("Transportation", Decimal("3"))]

    def test_category_totals_ties_sorted_by_name(self, store, queries, wallet):
        store.create_transaction(type="expense", amount=5, account_id=wallet.id, category="Utilities")
        store.create_transaction(type="expense", amount=5, account_id=wallet.id, category="Housing")

        result = LedgerQueries.category_totals(store.ledger.transactions, TransactionType.EXPENSE)

        assert [name for name, _ in result] == ["Housing", "Utilities"]

    def test_group_by_day_newest_first(self, queries, history):
        groups = LedgerQueries.group_by_day(queries.store.ledger.transactions)

        assert [group.day for group in groups] == [date(2024, 3, 4), date(2024, 3, 2), date(2024, 3, 1)]
        assert [txn.id for txn in groups[2].transactions] == [history["salary"].id, history["lunch"].id]
        assert groups[0].totals == PeriodTotals(income=Decimal("100"), expense=Decimal("40"))
        assert groups[1].totals == PeriodTotals(income=Decimal("0"), expense=Decimal("3"))

    def test_recent_days_limit(self, queries, history):
        groups = queries.recent_days(limit=2)
        assert [group.day for group in groups] == [date(2024, 3, 4), date(2024, 3, 2)]

    def test_recent_days_empty(self, queries):
        assert queries.recent_days() == []

    def test_daily_summary(self, queries, history):
        summary = queries.daily_summary(date(2024, 3, 1))

        assert summary.day == date(2024, 3, 1)
        assert summary.totals.net == Decimal("987.50")
        assert summary.income_by_category == (("Salary", Decimal("1000")),)
        assert summary.expenses_by_category == (("Food", Decimal("12.50")),)
        assert len(summary.transactions) == 2

    def test_daily_summary_without_activity(self, queries, history):
        summary = queries.daily_summary(date(2024, 3, 3))

        assert summary.transactions == ()
        assert summary.totals.net == 0
        assert summary.expenses_by_category == ()


def test_queries_reflect_deletes(store, queries, history):
    store.delete_transaction(history["bonus"].id)
    assert [txn.id for txn in queries.transactions_by_type("income")] == [history["salary"].id]
