"""
Amount formatting for Stripe money fields.

Stripe expresses amounts in the currency's smallest unit (cents for USD).
Currencies with a known glyph are shown as decimals; everything else is shown
verbatim with its code, because not every currency has two decimal places
(JPY has none).
"""

from typing import Mapping, Optional

# Lower-case ISO 4217 code -> glyph. Only two-decimal currencies belong here.
CURRENCY_SYMBOLS: dict[str, str] = {
    "usd": "$",
    "eur": "€",
}


def format_amount(
    currency: str,
    amount: int,
    symbols: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Format an amount in minor units.

    >>> format_amount("usd", 1050)
    '$10.50'
    >>> format_amount("jpy", 500)
    '500 JPY'
    """
    table = CURRENCY_SYMBOLS if symbols is None else symbols
    symbol = table.get(currency.lower())
    if symbol is None:
        return f"{amount} {currency.upper()}"
    return f"{symbol}{amount / 100:.2f}"
