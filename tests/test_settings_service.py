"""Tests for settings service."""

import pytest

from moneysaver.domain.errors import ConflictError, DependencyError, NotFoundError, ValidationError
from moneysaver.domain.store import LedgerStore


class TestCategories:
    """Tests for category management."""

    def test_list_categories(self, settings_service):
        assert settings_service.list_categories("income") == ("Salary", "Other Income")
        assert settings_service.list_categories("expense")[0] == "Food"

    def test_list_categories_rejects_transfer(self, settings_service):
        with pytest.raises(ValidationError):
            settings_service.list_categories("transfer")

    def test_add_category(self, settings_service):
        settings_service.add_category("expense", "  Groceries ")
        assert settings_service.list_categories("expense")[-1] == "Groceries"

    def test_add_duplicate_category(self, settings_service):
        with pytest.raises(ConflictError):
            settings_service.add_category("income", "Salary")

    def test_add_empty_category(self, settings_service):
        with pytest.raises(ValidationError):
            settings_service.add_category("income", " ")

    def test_same_name_allowed_in_other_kind(self, settings_service):
        settings_service.add_category("income", "Food")
        assert "Food" in settings_service.list_categories("income")

    def test_delete_category_keeps_transactions(self, store, settings_service, wallet):
        txn = store.create_transaction(type="expense", amount=5, account_id=wallet.id, category="Entertainment")

        settings_service.delete_category("expense", "Entertainment")

        assert "Entertainment" not in settings_service.list_categories("expense")
        assert store.ledger.find_transaction(txn.id).category == "Entertainment"

    def test_delete_default_category_clears_default(self, settings_service):
        settings_service.delete_category("income", "Salary")
        assert settings_service.default_category("income") is None
        assert settings_service.default_category("expense") == "Food"

    def test_delete_missing_category(self, settings_service):
        with pytest.raises(NotFoundError):
            settings_service.delete_category("expense", "Travel")

    def test_set_default_category(self, settings_service):
        settings_service.set_default_category("expense", "Housing")
        assert settings_service.default_category("expense") == "Housing"

    def test_set_default_requires_existing(self, settings_service):
        with pytest.raises(NotFoundError):
            settings_service.set_default_category("income", "Lottery")
        assert settings_service.default_category("income") == "Salary"


class TestAccountTypes:
    """Tests for account type management."""

    def test_add_account_type(self, settings_service):
        settings_service.add_account_type("Crypto")
        assert settings_service.settings.account_types[-1] == "Crypto"

    def test_add_duplicate_account_type(self, settings_service):
        with pytest.raises(ConflictError):
            settings_service.add_account_type("Cash")

    def test_delete_unused_account_type(self, settings_service):
        settings_service.delete_account_type("Investment")
        assert "Investment" not in settings_service.settings.account_types

    def test_delete_account_type_in_use(self, store, settings_service):
        store.create_account(name="Brokerage", balance=0, type="Investment")

        with pytest.raises(DependencyError, match="1 account"):
            settings_service.delete_account_type("Investment")
        assert "Investment" in settings_service.settings.account_types

    def test_delete_missing_account_type(self, settings_service):
        with pytest.raises(NotFoundError):
            settings_service.delete_account_type("Vault")


class TestCurrency:
    """Tests for currency selection."""

    def test_set_currency(self, settings_service):
        settings_service.set_currency("idr")
        assert settings_service.settings.currency == "IDR"

    def test_unsupported_currency(self, settings_service):
        with pytest.raises(ValidationError):
            settings_service.set_currency("EUR")
        assert settings_service.settings.currency == "USD"


def test_changes_are_persisted(temp_db, settings_service):
    settings_service.add_category("expense", "Pets")
    settings_service.set_currency("IDR")
    settings_service.delete_category("income", "Salary")

    settings = LedgerStore(temp_db).load().settings

    assert settings.currency == "IDR"
    assert "Pets" in settings.expense_categories
    assert settings.income_categories == ("Other Income",)
    assert settings.default_income_category is None
