from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

from .errors import ValidationError


# Maximum unit price: 99,999,999.99, the widest value NUMERIC(10,2) holds
MAX_PRICE = Decimal("99999999.99")
CENTS = Decimal("0.01")

PRODUCT_STATUSES = ("available", "not available")
USER_ROLES = ("admin", "customer", "guest")


def _coerce_int(value: Any, message: str) -> int:
    """
    Strict integer coercion.

    Accepts real ints (not bools) and strings of plain digits with an optional
    leading minus. Rejects floats, decimals and scientific notation.
    """
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(message)
        # Reject scientific notation (e.g., "1e15") and decimal points (e.g., "12.5")
        if "e" in stripped.lower() or "." in stripped:
            raise ValidationError(message)
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(message)
    raise ValidationError(message)


def parse_id(value: Any, label: str) -> int:
    """Positive integer identifier; None, "", non-numeric and zero are all invalid."""
    if value is None:
        raise ValidationError(f"Invalid {label} ID")
    ident = _coerce_int(value, f"Invalid {label} ID")
    if ident <= 0:
        raise ValidationError(f"Invalid {label} ID")
    return ident


def parse_quantity(value: Any, field: str = "quantity", *, allow_zero: bool = False) -> int:
    if value is None:
        raise ValidationError(f"{field} is required")
    qty = _coerce_int(value, f"{field} must be an integer")
    if allow_zero:
        if qty < 0:
            raise ValidationError(f"{field} must be >= 0")
    elif qty <= 0:
        raise ValidationError(f"{field} must be > 0")
    return qty


def to_money(value: Any) -> Decimal:
    """Normalize a stored numeric value to a two-place Decimal."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _coerce_decimal(value: Any, message: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValidationError(message)
    try:
        if isinstance(value, str):
            value = value.strip()
        dec = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(message)
    if not dec.is_finite():
        raise ValidationError(message)
    return dec


def parse_money(value: Any, field: str) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required")
    amount = _coerce_decimal(value, f"{field} must be a number")
    if amount < 0:
        raise ValidationError(f"{field} must be >= 0")
    if amount > MAX_PRICE:
        raise ValidationError(f"{field} cannot exceed {MAX_PRICE:,}")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_percentage(value: Any) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Invalid discount percentage")
    pct = _coerce_decimal(value, "Invalid discount percentage")
    if pct < 0 or pct > 100:
        raise ValidationError("Discount percentage must be between 0 and 100")
    return pct


def require_fields(data: dict, fields: Iterable[str]) -> None:
    """Raise if any field is absent, None or blank."""
    missing = []
    for f in fields:
        v = data.get(f)
        if v is None or (isinstance(v, str) and not v.strip()):
            missing.append(f)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def parse_choice(value: Any, field: str, choices: Iterable[str]) -> str:
    choices = tuple(choices)
    s = str(value).strip() if value is not None else ""
    if s not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(choices)}")
    return s
