import math
from utils.constants import CURRENCY_SYMBOL


def format_currency(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format a float as currency string, e.g. '€1,234.56' or '-€50.00'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_signed(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_share(share: float) -> str:
    return f"{share:.1f}%"


def parse_amount(value) -> float | None:
    """Parse user input into a finite float, returning None when it isn't one.

    Accepts numbers and strings such as '1,250.50' or ' -40 '.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value or "").strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None
