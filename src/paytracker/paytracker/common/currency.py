from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from ..core.constants import DEFAULT_CURRENCY

logger = logging.getLogger(__name__)

# Currencies shown with their symbol; every other code is shown as-is.
CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$US",
    "GBP": "£GB",
    "JPY": "JPY",
}


def format_currency(amount: Union[int, float, Decimal, None], currency_code: Optional[str] = None) -> str:
    """Format an amount in whole units with French digit grouping, e.g. ``1 500 XOF``."""
    code = (currency_code or DEFAULT_CURRENCY).strip().upper() or DEFAULT_CURRENCY
    if len(code) != 3 or not code.isalpha():
        logger.warning("Unknown currency code %r, falling back to %s", currency_code, DEFAULT_CURRENCY)
        code = DEFAULT_CURRENCY

    try:
        value = Decimal(str(amount if amount is not None else 0))
    except InvalidOperation:
        value = Decimal(0)

    whole = int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    grouped = f"{abs(whole):,}".replace(",", " ")
    sign = "-" if whole < 0 else ""
    return f"{sign}{grouped} {CURRENCY_SYMBOLS.get(code, code)}"
