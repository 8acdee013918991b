from __future__ import annotations

import contextlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import ContextManager, List, Optional, Union

from django.db import transaction
from django.db.models import F

from .services.totals import CartLineItem, CartSummary

logger = logging.getLogger(__name__)

Id = Union[int, str]


@dataclass(frozen=True)
class ProductRef:
    id: Id
    name: str
    company: str
    image: str
    price: int


@dataclass(frozen=True)
class CartItemRecord:
    id: Id
    product: ProductRef
    amount: int

    def as_line_item(self) -> CartLineItem:
        return CartLineItem(product_id=self.product.id, unit_price=self.product.price, quantity=self.amount)


@dataclass(frozen=True)
class CartRecord:
    id: Id
    owner_id: str
    num_items_in_cart: int
    cart_total: int
    shipping: int
    tax: int
    tax_rate: Decimal
    order_total: int


class CartStore(ABC):
    """
    Persistence for carts and their lines.

    The cart service only talks to this interface; the Django implementation
    is wired in at start-up and tests swap in an in-memory one.
    """

    def atomic(self) -> ContextManager:
        """Group several writes; stores without transactions run them as-is."""
        return contextlib.nullcontext()

    @abstractmethod
    def get_cart(self, owner_id: str, lock: bool = False) -> Optional[CartRecord]:
        """With *lock*, hold the cart row until the surrounding ``atomic()`` block ends."""

    @abstractmethod
    def get_cart_by_id(self, cart_id: Id) -> Optional[CartRecord]: ...

    @abstractmethod
    def create_cart(self, owner_id: str, tax_rate: Decimal) -> CartRecord:
        """Return the owner's cart, creating it when there is none yet."""

    @abstractmethod
    def delete_cart(self, cart_id: Id) -> None: ...

    @abstractmethod
    def get_product(self, product_id: Id) -> Optional[ProductRef]: ...

    @abstractmethod
    def list_items(self, cart_id: Id) -> List[CartItemRecord]: ...

    @abstractmethod
    def add_item(self, cart_id: Id, product_id: Id, amount: int) -> CartItemRecord:
        """Add *amount* to the product's line, creating the line when missing."""

    @abstractmethod
    def set_item_amount(self, cart_id: Id, item_id: Id, amount: int) -> bool:
        """Return False when the cart has no such line."""

    @abstractmethod
    def remove_item(self, cart_id: Id, item_id: Id) -> bool:
        """Return False when the cart has no such line."""

    @abstractmethod
    def save_summary(self, cart_id: Id, summary: CartSummary) -> CartRecord: ...

    def close(self) -> None:
        """Release resources at process exit."""


class DjangoCartStore(CartStore):
    """CartStore on top of the ``orders`` models."""

    def atomic(self) -> ContextManager:
        return transaction.atomic()

    @staticmethod
    def _cart(cart) -> CartRecord:
        return CartRecord(
            id=cart.pk,
            owner_id=cart.owner_id,
            num_items_in_cart=cart.num_items_in_cart,
            cart_total=cart.cart_total,
            shipping=cart.shipping,
            tax=cart.tax,
            tax_rate=Decimal(cart.tax_rate),
            order_total=cart.order_total,
        )

    @staticmethod
    def _product(product) -> ProductRef:
        return ProductRef(
            id=product.pk,
            name=product.name,
            company=product.company,
            image=product.image,
            price=product.price,
        )

    def _item(self, item) -> CartItemRecord:
        return CartItemRecord(id=item.pk, product=self._product(item.product), amount=item.amount)

    def get_cart(self, owner_id, lock=False):
        from .models import Cart
        qs = Cart.objects.filter(owner_id=owner_id)
        if lock:
            qs = qs.select_for_update()
        cart = qs.first()
        return self._cart(cart) if cart else None

    def get_cart_by_id(self, cart_id):
        from .models import Cart
        cart = Cart.objects.filter(pk=cart_id).first()
        return self._cart(cart) if cart else None

    def create_cart(self, owner_id, tax_rate):
        from .models import Cart
        cart, _ = Cart.objects.get_or_create(owner_id=owner_id, defaults={"tax_rate": tax_rate})
        return self._cart(cart)

    def delete_cart(self, cart_id):
        from .models import Cart
        Cart.objects.filter(pk=cart_id).delete()

    def get_product(self, product_id):
        from catalog.models import Product
        try:
            product = Product.objects.get(pk=product_id)
        except (Product.DoesNotExist, ValueError):
            return None
        return self._product(product)

    def list_items(self, cart_id):
        from .models import CartItem
        return [self._item(i) for i in CartItem.objects.filter(cart_id=cart_id).select_related("product")]

    def add_item(self, cart_id, product_id, amount):
        from .models import CartItem
        item, created = CartItem.objects.get_or_create(
            cart_id=cart_id, product_id=product_id, defaults={"amount": amount},
        )
        if not created:
            CartItem.objects.filter(pk=item.pk).update(amount=F("amount") + amount)
        return self._item(CartItem.objects.select_related("product").get(pk=item.pk))

    def set_item_amount(self, cart_id, item_id, amount):
        from .models import CartItem
        return CartItem.objects.filter(cart_id=cart_id, pk=item_id).update(amount=amount) > 0

    def remove_item(self, cart_id, item_id):
        from .models import CartItem
        deleted, _ = CartItem.objects.filter(cart_id=cart_id, pk=item_id).delete()
        return deleted > 0

    def save_summary(self, cart_id, summary):
        from .models import Cart
        cart = Cart.objects.get(pk=cart_id)
        cart.num_items_in_cart = summary.item_count
        cart.cart_total = summary.subtotal
        cart.tax = summary.tax_amount
        cart.shipping = summary.shipping_fee
        cart.order_total = summary.grand_total
        cart.save(update_fields=["num_items_in_cart", "cart_total", "tax", "shipping", "order_total", "updated_at"])
        return self._cart(cart)

    def close(self):
        from django.db import connections
        connections.close_all()
        logger.debug("Cart store connections closed")
