"""Tests for account resolution."""

import pytest

from moneysaver.domain.errors import NotFoundError
from moneysaver.utils.account_resolver import resolve_account


def test_resolve_by_id(store, wallet):
    assert resolve_account(store, wallet.id) == wallet


def test_resolve_by_name(store, wallet):
    assert resolve_account(store, "Wallet") == wallet


def test_id_takes_precedence(store, wallet):
    impostor = store.create_account(name=wallet.id, balance=0, type="cash")
    assert resolve_account(store, wallet.id) == wallet
    assert resolve_account(store, impostor.id) == impostor


def test_name_is_case_sensitive(store, wallet):
    with pytest.raises(NotFoundError):
        resolve_account(store, "wallet")
