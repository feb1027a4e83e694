"""Settings domain service."""

from typing import Optional

from moneysaver.domain.entities import Settings, TransactionType
from moneysaver.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_type_in_use,
    duplicate_label,
)
from moneysaver.domain.store import LedgerStore

SUPPORTED_CURRENCIES = ("USD", "IDR")

_CATEGORY_FIELDS = {
    TransactionType.INCOME: ("income_categories", "default_income_category"),
    TransactionType.EXPENSE: ("expense_categories", "default_expense_category"),
}


def _category_fields(kind: TransactionType | str) -> tuple[str, str]:
    try:
        return _CATEGORY_FIELDS[TransactionType(kind)]
    except (KeyError, ValueError) as e:
        raise ValidationError(f"Category kind must be 'income' or 'expense', got '{kind}'") from e


def _require_label(name: Optional[str], kind: str) -> str:
    if name is None or not name.strip():
        raise ValidationError(f"{kind} name must not be empty")
    return name.strip()


class SettingsService:
    """Service for managing categories, account types and preferences.

    Category labels are advisory: removing one does not touch transactions
    that already use it.
    """

    def __init__(self, store: LedgerStore):
        """Initialize settings service.

        Args:
            store: LedgerStore instance
        """
        self.store = store

    @property
    def settings(self) -> Settings:
        return self.store.ledger.settings

    def list_categories(self, kind: TransactionType | str) -> tuple[str, ...]:
        """List categories for income or expense."""
        list_field, _ = _category_fields(kind)
        return getattr(self.settings, list_field)

    def default_category(self, kind: TransactionType | str) -> Optional[str]:
        """Get the default category for income or expense, if any."""
        _, default_field = _category_fields(kind)
        return getattr(self.settings, default_field)

    def add_category(self, kind: TransactionType | str, name: str) -> None:
        """Append a category.

        Raises:
            ValidationError: If name is empty or kind is invalid
            ConflictError: If the category already exists
        """
        list_field, _ = _category_fields(kind)
        name = _require_label(name, "Category")
        categories = getattr(self.settings, list_field)
        if name in categories:
            raise ConflictError(duplicate_label("Category", name))
        self.store.update_settings(**{list_field: categories + (name,)})

    def delete_category(self, kind: TransactionType | str, name: str) -> None:
        """Remove a category, clearing it as default if needed.

        Raises:
            NotFoundError: If the category does not exist
        """
        list_field, default_field = _category_fields(kind)
        categories = getattr(self.settings, list_field)
        if name not in categories:
            raise NotFoundError(f"Category '{name}' not found")

        patch: dict = {list_field: tuple(cat for cat in categories if cat != name)}
        if getattr(self.settings, default_field) == name:
            patch[default_field] = None
        self.store.update_settings(**patch)

    def set_default_category(self, kind: TransactionType | str, name: str) -> None:
        """Make an existing category the default for new transactions.

        Raises:
            NotFoundError: If the category does not exist
        """
        list_field, default_field = _category_fields(kind)
        if name not in getattr(self.settings, list_field):
            raise NotFoundError(f"Category '{name}' not found")
        self.store.update_settings(**{default_field: name})

    def add_account_type(self, name: str) -> None:
        """Append an account type.

        Raises:
            ValidationError: If name is empty
            ConflictError: If the account type already exists
        """
        name = _require_label(name, "Account type")
        if name in self.settings.account_types:
            raise ConflictError(duplicate_label("Account type", name))
        self.store.update_settings(account_types=self.settings.account_types + (name,))

    def delete_account_type(self, name: str) -> None:
        """Remove an account type that no account uses.

        Raises:
            NotFoundError: If the account type does not exist
            DependencyError: If accounts still use this type
        """
        if name not in self.settings.account_types:
            raise NotFoundError(f"Account type '{name}' not found")

        in_use = [acc for acc in self.store.ledger.accounts if acc.type == name]
        if in_use:
            raise DependencyError(account_type_in_use(name, len(in_use)))

        self.store.update_settings(
            account_types=tuple(t for t in self.settings.account_types if t != name)
        )

    def set_currency(self, code: str) -> None:
        """Select the display currency.

        Raises:
            ValidationError: If the currency is not supported
        """
        code = code.strip().upper()
        if code not in SUPPORTED_CURRENCIES:
            raise ValidationError(
                f"Unsupported currency '{code}'. Supported: {', '.join(SUPPORTED_CURRENCIES)}"
            )
        self.store.update_settings(currency=code)
