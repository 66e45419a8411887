from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

from ..core.exceptions import ValidationError

# DECIMAL(12,2) columns
MAX_AMOUNT = Decimal("9999999999.99")
CENT = Decimal("0.01")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} est obligatoire")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} doit contenir au moins {min_len} caractères")
    return value


def parse_amount(value: Union[str, int, float, Decimal, None], field_name: str) -> Decimal:
    """Parse a positive money amount (form strings accept ',' as decimal mark)."""
    if isinstance(value, Decimal):
        amount = value
    else:
        raw = str(value if value is not None else "").strip().replace(" ", "").replace(",", ".")
        try:
            amount = Decimal(raw)
        except InvalidOperation:
            raise ValidationError(f"{field_name} invalide")

    if not amount.is_finite():
        raise ValidationError(f"{field_name} invalide")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field_name} trop élevé (maximum {MAX_AMOUNT})")
    try:
        amount = amount.quantize(CENT)
    except InvalidOperation:
        raise ValidationError(f"{field_name} invalide")
    if amount <= 0:
        raise ValidationError(f"{field_name} doit être positif")
    return amount
