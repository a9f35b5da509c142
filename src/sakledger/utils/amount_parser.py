"""Amount parsing and formatting utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a Rupiah amount string into a Decimal.

    Handles various formats:
    - "1000000"
    - "Rp 1,000,000"
    - "IDR 1000000.50"
    - "1,250,000.75"

    Negative amounts are rejected because journal lines carry the sign in
    the debit or credit side.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"^(rp\.?|idr)\s*", "", amount_str.strip(), flags=re.IGNORECASE)
    cleaned = cleaned.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: '{amount_str}'")
    return amount


def format_rupiah(amount: Decimal) -> str:
    """Format an amount as Rupiah with Indonesian separators (Rp 1.234.567,89)."""
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.2f}"
    # Swap separators: 1,234.56 -> 1.234,56
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}Rp {text}"
