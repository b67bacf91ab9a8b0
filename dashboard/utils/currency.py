"""
Currency formatting for display records.

Amounts are stored as integer cents; they become a decimal currency string
only here, at the display boundary.
"""

from decimal import Decimal
from typing import Optional, Union

Cents = Union[int, str, Decimal]


def format_currency(amount: Optional[Cents]) -> str:
    """
    Format an amount in cents as a US dollar string.

    Args:
        amount: Amount in cents. NULL aggregates (None) and numeric strings
            such as "0" are accepted; None is treated as 0.

    Returns:
        The en-US currency rendering, e.g. 123456 -> "$1,234.56".

    Example:
        >>> format_currency(0)
        '$0.00'
        >>> format_currency(-1999)
        '-$19.99'
    """
    cents = Decimal(amount if amount is not None else 0)
    dollars = cents / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
