from decimal import Decimal, InvalidOperation

from utils.exceptions import ValidationError


def format_currency(amount: Decimal | float, symbol: str = "₹") -> str:
    """Format an amount as a currency string, e.g. '₹1,234.56'."""
    return f"{symbol}{amount:,.2f}"


def format_signed(amount: Decimal | float, symbol: str = "₹") -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def to_decimal(value) -> Decimal:
    """Coerce user or store input to Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        result = Decimal(str(value).strip().replace(",", ""))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid amount: {value!r}") from None
    if not result.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return result


def parse_positive_amount(value, label: str = "Amount") -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{label} is required.")
    amount = to_decimal(value)
    if amount <= 0:
        raise ValidationError(f"{label} must be positive.")
    return amount
