from datetime import date, datetime, timezone as dt_timezone

import pytest
from django.template import Context, Template

from core.formatting import currency_string_to_cents, format_currency, format_date


@pytest.mark.parametrize("cents, expected", [
    (0, "$0.00"),
    (5, "$0.05"),
    (123456, "$1,234.56"),
    (-500, "($5.00)"),
    (None, "$0.00"),
])
def test_format_currency(cents, expected):
    assert format_currency(cents) == expected


def test_format_date():
    assert format_date(date(2024, 1, 1)) == "January 1, 2024"
    assert format_date(datetime(2024, 3, 9, 12, tzinfo=dt_timezone.utc)) == "March 9, 2024"


@pytest.mark.parametrize("raw, cents", [
    ("$1,234.56", 123456),
    ("12", 1200),
    ("0.005", 1),
    ("  7.5 ", 750),
])
def test_currency_string_to_cents(raw, cents):
    assert currency_string_to_cents(raw) == cents


def test_currency_string_rejects_text():
    with pytest.raises(ValueError):
        currency_string_to_cents("free")


def test_template_filters():
    rendered = Template("{% load storefront_format %}{{ p|currency }} {{ p|dollars }} {{ d|long_date }}").render(
        Context({"p": 199999, "d": date(2024, 12, 25)})
    )
    assert rendered == "$1,999.99 1999.99 December 25, 2024"
