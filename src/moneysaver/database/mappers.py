"""Mapper functions to convert between domain models and the stored document.

The ledger is persisted as one JSON document with top-level keys
``accounts``, ``transactions`` and ``settings``. Field names are camelCase so
that documents written by earlier versions of the app stay readable.
"""

import json
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional, Union

from dateutil import parser as date_parser

from moneysaver.domain import entities as domain
from moneysaver.domain.entities import TransactionType


class DocumentFormatError(ValueError):
    """Stored document does not have the expected shape."""


def _number(value: Decimal) -> Union[int, float]:
    """Convert Decimal to a JSON number, keeping integral values as ints."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise DocumentFormatError(f"Field '{field_name}' must be a number, got {value!r}")
    result = Decimal(str(value))
    if not result.is_finite():
        raise DocumentFormatError(f"Field '{field_name}' must be a finite number, got {value!r}")
    return result


def _required(data: dict[str, Any], key: str) -> Any:
    if key not in data or data[key] is None:
        raise DocumentFormatError(f"Missing required field '{key}'")
    return data[key]


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 with milliseconds, UTC as 'Z'."""
    text = value.isoformat(timespec="milliseconds")
    if value.utcoffset() == timedelta(0):
        text = text.replace("+00:00", "Z")
    return text


def parse_timestamp(value: Any) -> datetime:
    """Parse a stored ISO-8601 timestamp, keeping its offset.

    Timestamps without an offset are rejected.
    """
    if not isinstance(value, str):
        raise DocumentFormatError(f"Timestamp must be a string, got {value!r}")
    try:
        parsed = date_parser.isoparse(value)
    except ValueError as e:
        raise DocumentFormatError(f"Invalid timestamp '{value}'") from e
    if parsed.utcoffset() is None:
        raise DocumentFormatError(f"Timestamp '{value}' has no UTC offset")
    return parsed


def account_to_document(account: domain.Account) -> dict[str, Any]:
    """Convert domain Account entity to its stored form."""
    return {
        "id": account.id,
        "name": account.name,
        "balance": _number(account.balance),
        "type": account.type,
        "createdAt": format_timestamp(account.created_at),
    }


def account_to_domain(data: dict[str, Any]) -> domain.Account:
    """Convert stored account to domain Account entity."""
    return domain.Account(
        id=_required(data, "id"),
        name=_required(data, "name"),
        balance=_decimal(_required(data, "balance"), "balance"),
        type=_required(data, "type"),
        created_at=parse_timestamp(_required(data, "createdAt")),
    )


def transaction_to_document(txn: domain.Transaction) -> dict[str, Any]:
    """Convert a transaction variant to its stored form."""
    document: dict[str, Any] = {
        "id": txn.id,
        "type": txn.type.value,
        "amount": _number(txn.amount),
        "accountId": txn.account_id,
    }
    if isinstance(txn, domain.Transfer):
        document["fromAccountId"] = txn.from_account_id
        document["toAccountId"] = txn.to_account_id
    document["category"] = txn.category
    if txn.description is not None:
        document["description"] = txn.description
    document["date"] = format_timestamp(txn.date)
    return document


def transaction_to_domain(data: dict[str, Any]) -> domain.Transaction:
    """Convert stored transaction to the matching domain variant."""
    try:
        txn_type = TransactionType(_required(data, "type"))
    except ValueError as e:
        raise DocumentFormatError(f"Unknown transaction type {data.get('type')!r}") from e

    common = {
        "id": _required(data, "id"),
        "amount": _decimal(_required(data, "amount"), "amount"),
        "date": parse_timestamp(_required(data, "date")),
        "description": data.get("description") or None,
    }
    if txn_type is TransactionType.TRANSFER:
        return domain.Transfer(
            from_account_id=_required(data, "fromAccountId"),
            to_account_id=_required(data, "toAccountId"),
            **common,
        )
    variant = domain.Income if txn_type is TransactionType.INCOME else domain.Expense
    return variant(
        account_id=_required(data, "accountId"),
        category=data.get("category") or "",
        **common,
    )


def settings_to_document(settings: domain.Settings) -> dict[str, Any]:
    """Convert domain Settings to its stored form, omitting unset defaults."""
    document: dict[str, Any] = {
        "currency": settings.currency,
        "dateFormat": settings.date_format,
        "incomeCategories": list(settings.income_categories),
        "expenseCategories": list(settings.expense_categories),
        "accountTypes": list(settings.account_types),
    }
    if settings.default_income_category is not None:
        document["defaultIncomeCategory"] = settings.default_income_category
    if settings.default_expense_category is not None:
        document["defaultExpenseCategory"] = settings.default_expense_category
    return document


def settings_to_domain(
    data: dict[str, Any], fallback: Optional[domain.Settings] = None
) -> domain.Settings:
    """Convert stored settings to domain Settings.

    Keys missing from the document take their value from ``fallback``.
    """
    base = fallback or domain.Settings()
    return domain.Settings(
        currency=data.get("currency", base.currency),
        date_format=data.get("dateFormat", base.date_format),
        income_categories=tuple(data.get("incomeCategories", base.income_categories)),
        expense_categories=tuple(data.get("expenseCategories", base.expense_categories)),
        account_types=tuple(data.get("accountTypes", base.account_types)),
        default_income_category=data.get("defaultIncomeCategory"),
        default_expense_category=data.get("defaultExpenseCategory"),
    )


def ledger_to_document(ledger: domain.Ledger) -> dict[str, Any]:
    """Convert the whole ledger to its stored form."""
    return {
        "accounts": [account_to_document(acc) for acc in ledger.accounts],
        "transactions": [transaction_to_document(txn) for txn in ledger.transactions],
        "settings": settings_to_document(ledger.settings),
    }


def ledger_to_domain(
    data: Any, fallback_settings: Optional[domain.Settings] = None
) -> domain.Ledger:
    """Convert a stored document to the domain Ledger.

    Raises:
        DocumentFormatError: If the document is not a valid ledger
    """
    if not isinstance(data, dict):
        raise DocumentFormatError("Ledger document must be an object")
    try:
        return domain.Ledger(
            accounts=tuple(account_to_domain(acc) for acc in _required(data, "accounts")),
            transactions=tuple(
                transaction_to_domain(txn) for txn in _required(data, "transactions")
            ),
            settings=settings_to_domain(_required(data, "settings"), fallback_settings),
        )
    except (TypeError, AttributeError) as e:
        raise DocumentFormatError(f"Malformed ledger document: {e}") from e


def dump_ledger(ledger: domain.Ledger) -> str:
    """Serialize the ledger to JSON text."""
    return json.dumps(ledger_to_document(ledger), ensure_ascii=False)


def load_ledger(text: str, fallback_settings: Optional[domain.Settings] = None) -> domain.Ledger:
    """Parse JSON text into the ledger.

    Raises:
        DocumentFormatError: If the text is not valid JSON or not a ledger
    """
    try:
        data = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"Invalid JSON: {e}") from e
    return ledger_to_domain(data, fallback_settings)
