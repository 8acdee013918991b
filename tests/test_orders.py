from datetime import timedelta
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from accounts.roles import Identity, Role
from core.errors import NotFound, StorefrontError
from orders.models import Cart, CartItem, Order
from orders.services.cart import CartNotFound, CartService
from orders.services.orders import (
    create_order,
    delete_old_unpaid_orders,
    fetch_admin_orders,
    fetch_user_orders,
    finalize_paid_order,
)
from orders.storage import DjangoCartStore
from tests.factories import OrderFactory, ProductFactory


def _identity(user_id="7", email="buyer@example.com"):
    return Identity(user_id=user_id, email=email, display_name="Buyer", role=Role.USER)


@pytest.fixture
def django_service(db):
    return CartService(DjangoCartStore(), tax_rate="0.08", shipping_fee=500)


@pytest.mark.django_db
def test_django_store_persists_summary(django_service):
    product = ProductFactory(price=1999)
    django_service.add_to_cart("7", product.pk, 2)
    cart = Cart.objects.get(owner_id="7")
    assert cart.items.get().amount == 2
    assert cart.cart_total == 3998
    assert cart.tax == 320
    assert cart.shipping == 500
    assert cart.order_total == 3998 + 320 + 500


@pytest.mark.django_db
def test_django_store_add_item_increments_existing_line():
    store = DjangoCartStore()
    product = ProductFactory(price=1000)
    cart = store.create_cart("7", Decimal("0.08"))

    store.add_item(cart.id, product.pk, 1)
    line = store.add_item(cart.id, product.pk, 2)

    assert line.amount == 3
    assert CartItem.objects.filter(cart_id=cart.id).count() == 1


@pytest.mark.django_db
def test_django_store_keeps_one_cart_per_owner():
    store = DjangoCartStore()
    first = store.create_cart("7", Decimal("0.08"))
    second = store.create_cart("7", Decimal("0.08"))
    assert first.id == second.id
    assert Cart.objects.filter(owner_id="7").count() == 1


@pytest.mark.django_db
def test_repeat_add_reuses_locked_cart(django_service):
    product = ProductFactory(price=500)
    django_service.add_to_cart("7", product.pk, 1)
    django_service.add_to_cart("7", product.pk, 1)
    cart = Cart.objects.get(owner_id="7")
    assert cart.items.get().amount == 2
    assert cart.cart_total == 1000


@pytest.mark.django_db
def test_create_order_snapshots_cart(django_service):
    product = ProductFactory(name="Lamp", price=2500)
    django_service.add_to_cart("7", product.pk, 3)

    order, cart_id = create_order(_identity(), service=django_service)

    cart = Cart.objects.get(pk=cart_id)
    assert order.owner_id == "7"
    assert order.email == "buyer@example.com"
    assert order.num_items == 3
    assert order.sub_total == 7500
    assert order.tax == cart.tax
    assert order.shipping == 500
    assert order.order_total == cart.order_total
    assert order.is_paid is False
    item = order.items.get()
    assert (item.product_name, item.amount, item.price) == ("Lamp", 3, 2500)


@pytest.mark.django_db
def test_create_order_requires_email(django_service):
    with pytest.raises(StorefrontError, match="email"):
        create_order(_identity(email=""), service=django_service)


@pytest.mark.django_db
def test_create_order_requires_cart(django_service):
    with pytest.raises(CartNotFound):
        create_order(_identity(), service=django_service)


@pytest.mark.django_db
def test_create_order_rejects_empty_cart(django_service):
    django_service.fetch_or_create_cart("7")
    with pytest.raises(StorefrontError, match="empty"):
        create_order(_identity(), service=django_service)
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_finalize_marks_paid_and_drops_cart(django_service):
    product = ProductFactory()
    django_service.add_to_cart("7", product.pk, 1)
    order, cart_id = create_order(_identity(), service=django_service)

    finalize_paid_order(order.pk, cart_id, service=django_service)
    order.refresh_from_db()
    assert order.is_paid
    assert not Cart.objects.filter(pk=cart_id).exists()

    # a second confirmation is harmless
    finalize_paid_order(order.pk, cart_id, service=django_service)


@pytest.mark.django_db
def test_finalize_unknown_order(django_service):
    with pytest.raises(NotFound):
        finalize_paid_order(999999, None, service=django_service)


@pytest.mark.django_db
def test_user_orders_are_paid_only_newest_first():
    older = OrderFactory(owner_id="7", is_paid=True)
    newer = OrderFactory(owner_id="7", is_paid=True)
    OrderFactory(owner_id="7", is_paid=False)
    OrderFactory(owner_id="8", is_paid=True)
    assert list(fetch_user_orders("7")) == [newer, older]
    assert fetch_admin_orders().count() == 4


def _age(order, minutes):
    Order.objects.filter(pk=order.pk).update(updated_at=timezone.now() - timedelta(minutes=minutes))


@pytest.mark.django_db
def test_delete_old_unpaid_orders():
    stale = OrderFactory(is_paid=False)
    fresh = OrderFactory(is_paid=False)
    paid = OrderFactory(is_paid=True)
    _age(stale, 31)
    _age(fresh, 5)
    _age(paid, 120)

    assert delete_old_unpaid_orders() == 1
    assert set(Order.objects.values_list("pk", flat=True)) == {fresh.pk, paid.pk}


@pytest.mark.django_db
def test_purge_command_reports_count():
    _age(OrderFactory(is_paid=False), 45)
    out = StringIO()
    call_command("purge_unpaid_orders", stdout=out)
    assert "1 old unpaid orders deleted" in out.getvalue()


@pytest.mark.django_db
def test_cart_api_flow(auth_api_client, user):
    product = ProductFactory(name="Stool", price=1000)

    response = auth_api_client.post("/api/cart/items/", {"product_id": product.pk, "amount": 2}, format="json")
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "2 Stools have been added to your cart"
    assert body["cart"]["num_items_in_cart"] == 2
    item_id = body["items"][0]["id"]

    response = auth_api_client.patch(f"/api/cart/items/{item_id}/", {"amount": 5}, format="json")
    assert response.json()["cart"]["cart_total"] == 5000

    response = auth_api_client.delete(f"/api/cart/items/{item_id}/")
    assert response.json()["message"] == "Item removed from cart"
    assert response.json()["cart"]["order_total"] == 0


@pytest.mark.django_db
def test_cart_api_unknown_product(auth_api_client):
    response = auth_api_client.post("/api/cart/items/", {"product_id": 123456, "amount": 1}, format="json")
    assert response.status_code == 404
    assert response.json()["error"] == "Product not found"
