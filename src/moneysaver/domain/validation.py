"""Input validation for ledger mutations.

Every check here runs before the store touches its state, so a rejected
request leaves the ledger unchanged.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from moneysaver.domain.entities import (
    Expense,
    Income,
    Transaction,
    TransactionType,
    Transfer,
)
from moneysaver.domain.errors import ValidationError


def to_decimal(value, field_name: str = "amount") -> Decimal:
    """Coerce a number or numeric string to Decimal.

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise ValidationError(f"Invalid {field_name} '{value}'") from e
    if not result.is_finite():
        raise ValidationError(f"Invalid {field_name} '{value}'")
    return result


def require_name(name: Optional[str]) -> str:
    """Return the stripped account name, rejecting empty names."""
    if name is None or not name.strip():
        raise ValidationError("Account name must not be empty")
    return name.strip()


def require_positive_amount(amount) -> Decimal:
    """Return the amount as Decimal, rejecting zero and negative values."""
    value = to_decimal(amount)
    if value <= 0:
        raise ValidationError(f"Amount must be greater than zero, got {value}")
    return value


def parse_transaction_type(value) -> TransactionType:
    """Accept a TransactionType or its string value."""
    try:
        return TransactionType(value)
    except ValueError as e:
        choices = ", ".join(t.value for t in TransactionType)
        raise ValidationError(f"Unknown transaction type '{value}' (expected one of: {choices})") from e


def build_transaction(
    transaction_id: str,
    date: datetime,
    type: TransactionType | str,
    amount,
    account_id: Optional[str] = None,
    from_account_id: Optional[str] = None,
    to_account_id: Optional[str] = None,
    category: Optional[str] = None,
    description: Optional[str] = None,
) -> Transaction:
    """Validate flat transaction input and build the matching variant.

    Args:
        transaction_id: Id to assign
        date: Timestamp to assign
        type: income, expense or transfer
        amount: Positive magnitude
        account_id: Account for income and expense
        from_account_id: Source account for transfers
        to_account_id: Destination account for transfers
        category: Category label for income and expense
        description: Optional free text

    Returns:
        Income, Expense or Transfer

    Raises:
        ValidationError: If a required field is missing or invalid
    """
    txn_type = parse_transaction_type(type)
    value = require_positive_amount(amount)
    description = description or None

    if txn_type is TransactionType.TRANSFER:
        if not from_account_id or not to_account_id:
            raise ValidationError("Transfer requires both a source and a destination account")
        if from_account_id == to_account_id:
            raise ValidationError("Transfer source and destination accounts must differ")
        return Transfer(
            id=transaction_id,
            amount=value,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            date=date,
            description=description,
        )

    if not account_id:
        raise ValidationError(f"{txn_type.value.capitalize()} requires an account")
    if category is None or not category.strip():
        raise ValidationError(f"{txn_type.value.capitalize()} requires a category")
    variant = Income if txn_type is TransactionType.INCOME else Expense
    return variant(
        id=transaction_id,
        amount=value,
        account_id=account_id,
        category=category.strip(),
        date=date,
        description=description,
    )


def check_transaction(txn: Transaction) -> Transaction:
    """Re-validate an already built transaction, normalizing its amount.

    Raises:
        ValidationError: If the transaction breaks a field rule
    """
    if isinstance(txn, Transfer):
        return build_transaction(
            txn.id,
            txn.date,
            txn.type,
            txn.amount,
            from_account_id=txn.from_account_id,
            to_account_id=txn.to_account_id,
            description=txn.description,
        )
    if isinstance(txn, (Income, Expense)):
        return build_transaction(
            txn.id,
            txn.date,
            txn.type,
            txn.amount,
            account_id=txn.account_id,
            category=txn.category,
            description=txn.description,
        )
    raise ValidationError(f"Unsupported transaction record: {type(txn).__name__}")
