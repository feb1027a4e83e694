"""Currency display formatting."""

from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple


class CurrencyFormat(NamedTuple):
    symbol: str
    decimal_places: int


CURRENCY_FORMATS = {
    "USD": CurrencyFormat(symbol="$", decimal_places=2),
    "IDR": CurrencyFormat(symbol="Rp", decimal_places=0),
}


def format_currency(amount: Decimal, currency_code: str = "USD") -> str:
    """Format an amount for display, e.g. '$1,234.50' or '-Rp15,000'.

    Unknown currency codes are formatted as USD.
    """
    fmt = CURRENCY_FORMATS.get(currency_code, CURRENCY_FORMATS["USD"])
    quantum = Decimal(1).scaleb(-fmt.decimal_places)
    value = Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{fmt.symbol}{abs(value):,.{fmt.decimal_places}f}"
