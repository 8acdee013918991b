from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from django.conf import settings
from django.template.defaultfilters import pluralize

from core.errors import NotFound, StorefrontError

from ..storage import CartItemRecord, CartRecord, CartStore, Id
from .totals import CartSummary, compute_summary

logger = logging.getLogger(__name__)


class CartNotFound(NotFound):
    default_message = "Cart not found"


class CartService:
    """
    Cart use-cases on top of a CartStore.

    Every line change is followed by ``update_cart``, which recomputes the
    summary from the stored lines and writes it back to the cart.
    """

    def __init__(self, store: CartStore, *, tax_rate: Optional[Decimal] = None, shipping_fee: Optional[int] = None):
        self.store = store
        self.tax_rate = Decimal(str(tax_rate if tax_rate is not None else settings.DEFAULT_TAX_RATE))
        self.shipping_fee = int(shipping_fee if shipping_fee is not None else settings.DEFAULT_SHIPPING_FEE)

    def close(self) -> None:
        self.store.close()

    # -- reads --------------------------------------------------------------

    def fetch_number_of_cart_items(self, owner_id: str) -> int:
        cart = self.store.get_cart(owner_id)
        return cart.num_items_in_cart if cart else 0

    def fetch_or_create_cart(self, owner_id: str, error_if_none: bool = False, lock: bool = False) -> CartRecord:
        cart = self.store.get_cart(owner_id, lock=lock)
        if cart is None:
            if error_if_none:
                raise CartNotFound()
            cart = self.store.create_cart(owner_id, self.tax_rate)
            logger.info("Created cart %s for %s", cart.id, owner_id)
        return cart

    def get_cart_details(self, owner_id: str) -> Tuple[CartRecord, List[CartItemRecord]]:
        cart = self.fetch_or_create_cart(owner_id)
        return cart, self.store.list_items(cart.id)

    def get_cart_by_id(self, cart_id: Id) -> Optional[CartRecord]:
        return self.store.get_cart_by_id(cart_id)

    def list_items(self, cart_id: Id) -> List[CartItemRecord]:
        return self.store.list_items(cart_id)

    # -- writes -------------------------------------------------------------

    def update_cart(self, cart: CartRecord) -> Tuple[CartRecord, List[CartItemRecord]]:
        """Recompute the cart summary from its current lines and persist it."""
        items = self.store.list_items(cart.id)
        summary: CartSummary = compute_summary(
            [item.as_line_item() for item in items],
            cart.tax_rate,
            self.shipping_fee,
        )
        return self.store.save_summary(cart.id, summary), items

    def add_to_cart(self, owner_id: str, product_id: Id, amount: int) -> str:
        amount = int(amount)
        if amount < 1:
            raise StorefrontError("Amount must be at least 1")
        product = self.store.get_product(product_id)
        if product is None:
            raise NotFound("Product not found")

        with self.store.atomic():
            cart = self.fetch_or_create_cart(owner_id, lock=True)
            self.store.add_item(cart.id, product.id, amount)
            self.update_cart(cart)

        verb = "has" if amount == 1 else "have"
        return f"{amount} {product.name}{pluralize(amount)} {verb} been added to your cart"

    def remove_cart_item(self, owner_id: str, item_id: Id) -> str:
        with self.store.atomic():
            cart = self.fetch_or_create_cart(owner_id, error_if_none=True, lock=True)
            if not self.store.remove_item(cart.id, item_id):
                raise NotFound("Cart item not found")
            self.update_cart(cart)
        return "Item removed from cart"

    def update_cart_item(self, owner_id: str, item_id: Id, amount: int) -> str:
        amount = int(amount)
        if amount < 1:
            raise StorefrontError("Amount must be at least 1")
        with self.store.atomic():
            cart = self.fetch_or_create_cart(owner_id, error_if_none=True, lock=True)
            if not self.store.set_item_amount(cart.id, item_id, amount):
                raise NotFound("Cart item not found")
            self.update_cart(cart)
        return "cart updated"

    def delete_cart(self, cart_id: Id) -> None:
        self.store.delete_cart(cart_id)


_service: Optional[CartService] = None


def set_cart_service(service: Optional[CartService]) -> Optional[CartService]:
    """Install *service* as the process-wide cart service; returns the previous one."""
    global _service
    previous, _service = _service, service
    return previous


def get_cart_service() -> CartService:
    global _service
    if _service is None:
        from ..storage import DjangoCartStore
        _service = CartService(DjangoCartStore())
    return _service
