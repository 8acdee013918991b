from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from django.utils import timezone

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def format_currency(cents: Optional[int]) -> str:
    """Format integer cents as US dollars, accounting style: ``$1,234.56`` / ``($5.00)``."""
    value = Decimal(cents or 0) / 100
    text = f"${abs(value):,.2f}"
    return f"({text})" if value < 0 else text


def format_date(value: Optional[date] = None) -> str:
    """Render a date as ``January 1, 2024``; defaults to today."""
    if value is None:
        value = timezone.localdate()
    elif isinstance(value, datetime):
        value = timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    return f"{value:%B} {value.day}, {value.year}"


def currency_string_to_cents(raw: str) -> int:
    """Parse a price typed by an admin ("$1,234.56", "12", "12.5") into integer cents.

    Raises ValueError for text that does not hold a number.
    """
    cleaned = _NON_NUMERIC.sub("", str(raw or ""))
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"'{raw}' is not a valid price") from None
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
