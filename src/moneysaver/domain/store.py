"""Ledger store: the single owner of the mutable ledger.

Every mutation builds a complete new ``Ledger`` and swaps it in with one
assignment, so readers only ever see the state before or after an
operation. Input is validated before anything is computed. After each
change the whole ledger is written to the database; a failed write is
logged and the in-memory state stays authoritative.
"""

import logging
import secrets
import string
import time
from dataclasses import fields, replace
from datetime import datetime, UTC
from decimal import Decimal
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from moneysaver.database.base import Database
from moneysaver.database.mappers import DocumentFormatError, dump_ledger, load_ledger
from moneysaver.domain import balance as engine
from moneysaver.domain.entities import (
    Account,
    Ledger,
    Settings,
    Transaction,
    TransactionType,
)
from moneysaver.domain.errors import ValidationError
from moneysaver.domain.validation import (
    build_transaction,
    check_transaction,
    require_name,
    to_decimal,
)

logger = logging.getLogger(__name__)

STORAGE_KEY = "moneySaverData"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(prefix: str) -> str:
    """Generate an id like 'tx-1718000000000-k3j9x0a1b'."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


def default_settings() -> Settings:
    """Settings used for a fresh ledger."""
    return Settings(
        currency="USD",
        date_format="MM/DD/YYYY",
        income_categories=("Salary", "Other Income"),
        expense_categories=(
            "Food",
            "Transportation",
            "Housing",
            "Utilities",
            "Entertainment",
            "Other",
        ),
        account_types=("Cash", "Bank", "Credit Card", "Investment", "Digital Wallet"),
        default_income_category="Salary",
        default_expense_category="Food",
    )


def default_ledger(now: Optional[datetime] = None) -> Ledger:
    """Ledger with three empty seed accounts and the default settings."""
    created_at = now or datetime.now(UTC)
    zero = Decimal("0")
    return Ledger(
        accounts=(
            Account(id="acc-1", name="Cash", balance=zero, type="cash", created_at=created_at),
            Account(id="acc-2", name="Bank Account", balance=zero, type="bank", created_at=created_at),
            Account(id="acc-3", name="Credit Card", balance=zero, type="credit", created_at=created_at),
        ),
        transactions=(),
        settings=default_settings(),
    )


SETTINGS_FIELDS = frozenset(f.name for f in fields(Settings))
LIST_SETTINGS = ("income_categories", "expense_categories", "account_types")


def _label_tuple(name: str, value) -> tuple[str, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ValidationError(f"Setting '{name}' must be a list of names, got {value!r}")
    labels = tuple(value)
    if not all(isinstance(label, str) for label in labels):
        raise ValidationError(f"Setting '{name}' must contain only names")
    return labels


class LedgerStore:
    """Owns the ledger and applies all mutations to it."""

    def __init__(
        self,
        db: Database,
        clock: Optional[Callable[[], datetime]] = None,
        key: str = STORAGE_KEY,
    ):
        """Initialize ledger store.

        The store starts from the default ledger; call ``load`` to read the
        persisted state.

        Args:
            db: Database instance used for persistence
            clock: Optional callable returning the current aware datetime
            key: Document key the ledger is stored under
        """
        self.db = db
        self.key = key
        self._clock = clock or (lambda: datetime.now(UTC))
        self._ledger = default_ledger(self._clock())

    @property
    def ledger(self) -> Ledger:
        """Current immutable snapshot of the ledger."""
        return self._ledger

    # Persistence
    def load(self) -> Ledger:
        """Replace in-memory state with the stored ledger.

        Falls back to the default ledger when nothing is stored or the stored
        document cannot be read.
        """
        try:
            text = self.db.get_document(self.key)
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to read ledger from storage, using default ledger")
            self._ledger = default_ledger(self._clock())
            return self._ledger

        if text is None:
            logger.info("No stored ledger found, starting from default ledger")
            self._ledger = default_ledger(self._clock())
            return self._ledger

        try:
            self._ledger = load_ledger(text, fallback_settings=default_settings())
        except DocumentFormatError as e:
            logger.error("Stored ledger is corrupt (%s), using default ledger", e)
            self._ledger = default_ledger(self._clock())
            return self._ledger

        logger.debug(
            "Loaded ledger with %d accounts and %d transactions",
            len(self._ledger.accounts),
            len(self._ledger.transactions),
        )
        return self._ledger

    def save(self) -> bool:
        """Persist the current ledger. Returns False if the write failed."""
        try:
            self.db.put_document(self.key, dump_ledger(self._ledger))
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to persist ledger; keeping in-memory state")
            return False
        logger.debug("Persisted ledger")
        return True

    def _commit(self, ledger: Ledger) -> None:
        self._ledger = ledger
        self.save()

    # Account operations
    def create_account(self, name: str, balance, type: str) -> Account:
        """Create a new account.

        Args:
            name: Display name
            balance: Opening balance (any sign)
            type: Account type label, e.g. cash, bank or credit

        Returns:
            The created account

        Raises:
            ValidationError: If name is empty or balance is not a number
        """
        account = Account(
            id=generate_id("acc"),
            name=require_name(name),
            balance=to_decimal(balance, "balance"),
            type=type,
            created_at=self._clock(),
        )
        if type not in self._ledger.settings.account_types:
            logger.debug("Account type '%s' is not in the configured account types", type)
        self._commit(replace(self._ledger, accounts=self._ledger.accounts + (account,)))
        return account

    def edit_account(self, account: Account) -> bool:
        """Replace the stored account with the same id.

        The balance is taken as given; it is not recomputed from history.
        The original creation timestamp is kept.

        Returns:
            True if the account existed and was replaced

        Raises:
            ValidationError: If name is empty or balance is not a number
        """
        existing = self._ledger.find_account(account.id)
        if existing is None:
            logger.debug("edit_account: account %s not found", account.id)
            return False

        updated = replace(
            account,
            name=require_name(account.name),
            balance=to_decimal(account.balance, "balance"),
            created_at=existing.created_at,
        )
        accounts = tuple(updated if acc.id == account.id else acc for acc in self._ledger.accounts)
        self._commit(replace(self._ledger, accounts=accounts))
        return True

    def delete_account(self, account_id: str) -> bool:
        """Delete an account and every transaction that references it.

        No balances are reverted: the account and its history go together.

        Returns:
            True if the account existed and was removed
        """
        if self._ledger.find_account(account_id) is None:
            logger.debug("delete_account: account %s not found", account_id)
            return False

        accounts = tuple(acc for acc in self._ledger.accounts if acc.id != account_id)
        transactions = tuple(
            txn for txn in self._ledger.transactions if not txn.references(account_id)
        )
        removed = len(self._ledger.transactions) - len(transactions)
        logger.info("Deleted account %s and %d transaction(s)", account_id, removed)
        self._commit(replace(self._ledger, accounts=accounts, transactions=transactions))
        return True

    # Transaction operations
    def create_transaction(
        self,
        type: TransactionType | str,
        amount,
        account_id: Optional[str] = None,
        from_account_id: Optional[str] = None,
        to_account_id: Optional[str] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Transaction:
        """Create a transaction and apply its effect to account balances.

        Transfers always get the 'Transfer' category; ``account_id`` and
        ``category`` are ignored for them.

        Returns:
            The created transaction

        Raises:
            ValidationError: If amount is not positive or a required field is missing
        """
        txn = build_transaction(
            generate_id("tx"),
            self._clock(),
            type,
            amount,
            account_id=account_id,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            category=category,
            description=description,
        )
        self._warn_missing_accounts(txn)
        self._commit(
            replace(
                self._ledger,
                accounts=engine.apply_effect(self._ledger.accounts, txn),
                transactions=self._ledger.transactions + (txn,),
            )
        )
        return txn

    def edit_transaction(self, transaction: Transaction) -> bool:
        """Replace a transaction, reverting the old effect and applying the new.

        The type may change. The id and original date are preserved.

        Returns:
            True if the transaction existed and was replaced

        Raises:
            ValidationError: If the new transaction breaks a field rule
        """
        old = self._ledger.find_transaction(transaction.id)
        if old is None:
            logger.debug("edit_transaction: transaction %s not found", transaction.id)
            return False

        new = check_transaction(replace(transaction, date=old.date))
        self._warn_missing_accounts(new)
        self._commit(
            replace(
                self._ledger,
                accounts=engine.replace_effect(self._ledger.accounts, old, new),
                transactions=tuple(
                    new if txn.id == new.id else txn for txn in self._ledger.transactions
                ),
            )
        )
        return True

    def delete_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction and revert its effect.

        Returns:
            True if the transaction existed and was removed
        """
        txn = self._ledger.find_transaction(transaction_id)
        if txn is None:
            logger.debug("delete_transaction: transaction %s not found", transaction_id)
            return False

        self._commit(
            replace(
                self._ledger,
                accounts=engine.revert_effect(self._ledger.accounts, txn),
                transactions=tuple(t for t in self._ledger.transactions if t.id != transaction_id),
            )
        )
        return True

    # Settings operations
    def update_settings(self, **patch) -> Settings:
        """Shallow-merge the given fields into the settings.

        List fields accept any sequence and are stored as tuples. Passing
        None for a default category clears it.

        Returns:
            The new settings

        Raises:
            ValidationError: If a field name is not a setting or a list
                field is not a sequence of names
        """
        unknown = set(patch) - SETTINGS_FIELDS
        if unknown:
            raise ValidationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        for name in LIST_SETTINGS:
            if name in patch:
                patch[name] = _label_tuple(name, patch[name])

        settings = replace(self._ledger.settings, **patch)
        self._commit(replace(self._ledger, settings=settings))
        return settings

    def _warn_missing_accounts(self, txn: Transaction) -> None:
        missing = engine.missing_accounts(self._ledger.accounts, txn)
        if missing:
            logger.warning(
                "Transaction %s references unknown account(s) %s; their side of the effect is skipped",
                txn.id,
                ", ".join(missing),
            )

