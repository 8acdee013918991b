from django import template

from core.formatting import format_currency, format_date

register = template.Library()


@register.filter(name="currency")
def currency(cents):
    return format_currency(cents)


@register.filter(name="long_date")
def long_date(value):
    return format_date(value)


@register.filter(name="dollars")
def dollars(cents):
    """Plain dollar amount for form inputs: 123456 -> "1234.56"."""
    return f"{(cents or 0) / 100:.2f}"
