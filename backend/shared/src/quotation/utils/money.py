"""Display formatting for amounts stored in EUR cents.

Arithmetic always happens on integer cents. Conversion to a decimal string
only happens here, at the presentation edge.
"""

from decimal import Decimal

CURRENCY_SYMBOLS: dict[str, str] = {"EUR": "€"}


def cents_to_decimal(cents: int) -> Decimal:
    """Exact decimal amount in major units (e.g. 25000 -> Decimal('250.00'))."""
    return (Decimal(cents) / Decimal(100)).quantize(Decimal("0.01"))


def format_amount(cents: int, currency: str = "EUR") -> str:
    """Format cents for display, e.g. 112500 -> '€1,125.00'."""
    amount = f"{cents_to_decimal(cents):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{amount}"
    return f"{amount} {currency}"
