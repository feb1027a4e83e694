"""Tests for document mappers."""

import json
import pytest
from datetime import datetime, timedelta, timezone, UTC
from decimal import Decimal

from moneysaver.database.mappers import (
    DocumentFormatError,
    account_to_document,
    dump_ledger,
    format_timestamp,
    load_ledger,
    parse_timestamp,
    settings_to_document,
    settings_to_domain,
    transaction_to_document,
    transaction_to_domain,
)
from moneysaver.domain.entities import Account, Expense, Income, Ledger, Settings, Transfer
from moneysaver.domain.store import default_ledger, default_settings

WHEN = datetime(2024, 6, 10, 14, 5, 30, 123000, tzinfo=UTC)


class TestTimestamps:
    """Tests for timestamp formatting."""

    def test_utc_uses_z_suffix(self):
        assert format_timestamp(WHEN) == "2024-06-10T14:05:30.123Z"

    def test_other_offsets_are_kept(self):
        local = datetime(2024, 6, 10, 21, 5, tzinfo=timezone(timedelta(hours=7)))
        assert format_timestamp(local) == "2024-06-10T21:05:00.000+07:00"

    def test_parse_z_suffix(self):
        parsed = parse_timestamp("2024-06-10T14:05:30.123Z")
        assert parsed == WHEN
        assert parsed.utcoffset() == timedelta(0)

    @pytest.mark.parametrize("value", ["yesterday", 12, None, "2024-06-10T14:05:30.123"])
    def test_parse_rejects_invalid(self, value):
        with pytest.raises(DocumentFormatError):
            parse_timestamp(value)


class TestAccountDocument:
    """Tests for account documents."""

    def test_camel_case_keys(self):
        account = Account(id="acc-1", name="Cash", balance=Decimal("10.50"), type="cash", created_at=WHEN)

        assert account_to_document(account) == {
            "id": "acc-1",
            "name": "Cash",
            "balance": 10.5,
            "type": "cash",
            "createdAt": "2024-06-10T14:05:30.123Z",
        }

    def test_integral_balance_is_int(self):
        account = Account(id="acc-1", name="Cash", balance=Decimal("-200.00"), type="credit", created_at=WHEN)
        balance = account_to_document(account)["balance"]
        assert balance == -200
        assert isinstance(balance, int)


class TestTransactionDocument:
    """Tests for transaction documents."""

    def test_income_without_description(self):
        txn = Income(id="tx-1", amount=Decimal("50"), account_id="acc-1", category="Salary", date=WHEN)

        assert transaction_to_document(txn) == {
            "id": "tx-1",
            "type": "income",
            "amount": 50,
            "accountId": "acc-1",
            "category": "Salary",
            "date": "2024-06-10T14:05:30.123Z",
        }

    def test_transfer_document(self):
        txn = Transfer(
            id="tx-2",
            amount=Decimal("30"),
            from_account_id="acc-1",
            to_account_id="acc-2",
            date=WHEN,
            description="Top up",
        )

        document = transaction_to_document(txn)

        assert document["type"] == "transfer"
        assert document["accountId"] == "acc-1"
        assert document["fromAccountId"] == "acc-1"
        assert document["toAccountId"] == "acc-2"
        assert document["category"] == "Transfer"
        assert document["description"] == "Top up"

    def test_expense_from_document(self):
        txn = transaction_to_domain(
            {
                "id": "tx-3",
                "type": "expense",
                "amount": Decimal("4.25"),
                "accountId": "acc-1",
                "category": "Food",
                "description": "",
                "date": "2024-06-10T14:05:30.123Z",
            }
        )

        assert txn == Expense(
            id="tx-3",
            amount=Decimal("4.25"),
            account_id="acc-1",
            category="Food",
            date=WHEN,
        )

    def test_transfer_from_document_ignores_category(self):
        txn = transaction_to_domain(
            {
                "id": "tx-4",
                "type": "transfer",
                "amount": 30,
                "accountId": "acc-1",
                "fromAccountId": "acc-1",
                "toAccountId": "acc-2",
                "category": "Something else",
                "date": "2024-06-10T14:05:30.123Z",
            }
        )

        assert isinstance(txn, Transfer)
        assert txn.category == "Transfer"
        assert txn.to_account_id == "acc-2"

    def test_unknown_type(self):
        with pytest.raises(DocumentFormatError):
            transaction_to_domain({"id": "tx-5", "type": "refund", "amount": 1, "date": "2024-06-10T14:05:30Z"})

    def test_transfer_missing_destination(self):
        with pytest.raises(DocumentFormatError):
            transaction_to_domain(
                {"id": "tx-6", "type": "transfer", "amount": 1, "fromAccountId": "a", "date": "2024-06-10T14:05:30Z"}
            )

    def test_amount_must_be_number(self):
        with pytest.raises(DocumentFormatError):
            transaction_to_domain(
                {
                    "id": "tx-7",
                    "type": "income",
                    "amount": "lots",
                    "accountId": "a",
                    "category": "Salary",
                    "date": "2024-06-10T14:05:30Z",
                }
            )

    @pytest.mark.parametrize("amount", [Decimal("Infinity"), Decimal("NaN"), float("inf"), float("nan")])
    def test_amount_must_be_finite(self, amount):
        with pytest.raises(DocumentFormatError):
            transaction_to_domain(
                {
                    "id": "tx-8",
                    "type": "expense",
                    "amount": amount,
                    "accountId": "a",
                    "category": "Food",
                    "date": "2024-06-10T14:05:30Z",
                }
            )


class TestSettingsDocument:
    """Tests for settings documents."""

    def test_unset_defaults_are_omitted(self):
        document = settings_to_document(Settings(currency="IDR"))

        assert document["currency"] == "IDR"
        assert document["dateFormat"] == "MM/DD/YYYY"
        assert "defaultIncomeCategory" not in document
        assert "defaultExpenseCategory" not in document

    def test_missing_keys_take_fallback(self):
        settings = settings_to_domain({"currency": "IDR"}, fallback=default_settings())

        assert settings.currency == "IDR"
        assert settings.income_categories == default_settings().income_categories
        assert settings.default_income_category is None


class TestLedgerDocument:
    """Tests for whole ledger serialization."""

    def test_top_level_shape(self):
        data = json.loads(dump_ledger(default_ledger(WHEN)))

        assert set(data) == {"accounts", "transactions", "settings"}
        assert [acc["id"] for acc in data["accounts"]] == ["acc-1", "acc-2", "acc-3"]
        assert data["settings"]["defaultExpenseCategory"] == "Food"

    def test_reload_keeps_ledger(self):
        ledger = Ledger(
            accounts=default_ledger(WHEN).accounts,
            transactions=(
                Income(id="tx-1", amount=Decimal("0.10"), account_id="acc-1", category="Salary", date=WHEN),
                Transfer(id="tx-2", amount=Decimal("0.20"), from_account_id="acc-1", to_account_id="acc-2", date=WHEN),
            ),
            settings=default_settings(),
        )

        assert load_ledger(dump_ledger(ledger)) == ledger

    def test_decimal_precision_survives(self):
        ledger = load_ledger(
            '{"accounts": [], "transactions": [{"id": "tx-1", "type": "expense", "amount": 0.1, '
            '"accountId": "acc-1", "category": "Food", "date": "2024-06-10T14:05:30.123Z"}], "settings": {}}'
        )

        assert ledger.transactions[0].amount == Decimal("0.1")

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[]",
            '{"accounts": []}',
            '{"accounts": [{"id": "acc-1"}], "transactions": [], "settings": {}}',
            '{"accounts": 5, "transactions": [], "settings": {}}',
            '{"accounts": [{"id": "acc-1", "name": "Cash", "balance": Infinity, "type": "cash", '
            '"createdAt": "2024-06-10T14:05:30Z"}], "transactions": [], "settings": {}}',
            '{"accounts": [{"id": "acc-1", "name": "Cash", "balance": 0, "type": "cash", '
            '"createdAt": "2024-06-10T14:05:30"}], "transactions": [], "settings": {}}',
        ],
    )
    def test_corrupt_documents(self, text):
        with pytest.raises(DocumentFormatError):
            load_ledger(text)
