from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

Number = Union[int, float, str, Decimal]


@dataclass(frozen=True)
class CartLineItem:
    product_id: Union[int, str]
    unit_price: int
    quantity: int


@dataclass(frozen=True)
class CartSummary:
    item_count: int
    subtotal: int
    tax_rate: Decimal
    tax_amount: int
    shipping_fee: int
    grand_total: int


def round_half_up(value: Decimal) -> int:
    """Round to the nearest whole cent, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_summary(line_items: Iterable[CartLineItem], tax_rate: Number, shipping_fee: int) -> CartSummary:
    """
    Derive the cart money fields from its lines.

    All amounts are integer minor units. Tax is applied to the subtotal and
    rounded half-up; shipping is waived for an empty cart. Inputs are taken
    as given: nothing is validated and nothing is persisted here.
    """
    rate = tax_rate if isinstance(tax_rate, Decimal) else Decimal(str(tax_rate))
    item_count = 0
    subtotal = 0
    for item in line_items:
        item_count += item.quantity
        subtotal += item.unit_price * item.quantity

    tax_amount = round_half_up(Decimal(subtotal) * rate)
    shipping = 0 if subtotal == 0 else shipping_fee
    return CartSummary(
        item_count=item_count,
        subtotal=subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
        shipping_fee=shipping,
        grand_total=subtotal + tax_amount + shipping,
    )
