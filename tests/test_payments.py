from unittest.mock import MagicMock, patch

import pytest
import stripe

from orders.models import Cart, Order
from tests.factories import CartFactory, OrderFactory, OrderItemFactory, ProductFactory


@pytest.fixture
def order_and_cart(user):
    owner = str(user.pk)
    order = OrderFactory(owner_id=owner, tax=800, shipping=500)
    OrderItemFactory(order=order, product=ProductFactory(price=5000, image="https://cdn.example.com/a.png"), amount=2)
    cart = CartFactory(owner_id=owner)
    return order, cart


@pytest.mark.django_db
@patch("payments.services.stripe.checkout.Session.create")
def test_payment_creates_embedded_session(mock_create, auth_api_client, order_and_cart):
    order, cart = order_and_cart
    mock_create.return_value = MagicMock(id="cs_test_1", client_secret="secret_123")

    response = auth_api_client.post("/api/payment/", {"orderId": order.pk, "cartId": cart.pk}, format="json")

    assert response.status_code == 200
    assert response.json() == {"clientSecret": "secret_123"}
    kwargs = mock_create.call_args.kwargs
    assert kwargs["ui_mode"] == "embedded"
    assert kwargs["metadata"] == {"order_id": str(order.pk), "cart_id": str(cart.pk)}
    assert kwargs["return_url"].endswith("/api/confirm/?session_id={CHECKOUT_SESSION_ID}")
    lines = kwargs["line_items"]
    assert lines[0]["quantity"] == 2
    assert lines[0]["price_data"]["unit_amount"] == 5000
    assert lines[0]["price_data"]["product_data"]["images"] == ["https://cdn.example.com/a.png"]
    assert [line["price_data"]["product_data"]["name"] for line in lines[1:]] == ["Tax", "Shipping"]
    assert [line["price_data"]["unit_amount"] for line in lines[1:]] == [800, 500]


@pytest.mark.django_db
def test_payment_missing_records(auth_api_client):
    response = auth_api_client.post("/api/payment/", {"orderId": 1, "cartId": 2}, format="json")
    assert response.status_code == 404


@pytest.mark.django_db
@patch("payments.services.stripe.checkout.Session.create", side_effect=stripe.APIConnectionError("down"))
def test_payment_provider_failure(mock_create, auth_api_client, order_and_cart):
    order, cart = order_and_cart
    response = auth_api_client.post("/api/payment/", {"orderId": order.pk, "cartId": cart.pk}, format="json")
    assert response.status_code == 500


@pytest.mark.django_db
@patch("payments.services.stripe.checkout.Session.retrieve")
def test_confirm_marks_order_paid_and_deletes_cart(mock_retrieve, user_client, order_and_cart):
    order, cart = order_and_cart
    mock_retrieve.return_value = {
        "id": "cs_test_1",
        "status": "complete",
        "metadata": {"order_id": str(order.pk), "cart_id": str(cart.pk)},
    }

    response = user_client.get("/api/confirm/", {"session_id": "cs_test_1"})

    assert response.status_code == 302
    assert response["Location"] == "/orders/"
    assert Order.objects.get(pk=order.pk).is_paid
    assert not Cart.objects.filter(pk=cart.pk).exists()


@pytest.mark.django_db
@patch("payments.services.stripe.checkout.Session.retrieve")
def test_confirm_incomplete_session_leaves_order(mock_retrieve, user_client, order_and_cart):
    order, cart = order_and_cart
    mock_retrieve.return_value = {"id": "cs_1", "status": "open", "metadata": {"order_id": str(order.pk)}}
    response = user_client.get("/api/confirm/", {"session_id": "cs_1"})
    assert response.status_code == 302
    assert not Order.objects.get(pk=order.pk).is_paid
    assert Cart.objects.filter(pk=cart.pk).exists()


@pytest.mark.django_db
@patch("payments.services.stripe.checkout.Session.retrieve", side_effect=stripe.InvalidRequestError("nope", "id"))
def test_confirm_provider_failure(mock_retrieve, user_client):
    response = user_client.get("/api/confirm/", {"session_id": "cs_bad"})
    assert response.status_code == 500


@pytest.mark.django_db
def test_webhook_finalizes_completed_checkout(client, settings, order_and_cart):
    order, cart = order_and_cart
    settings.STRIPE_WEBHOOK_SECRET = "whsec_test"
    event = {
        "id": "evt_1",
        "type": "checkout.session.completed",
        "data": {"object": {
            "id": "cs_1",
            "status": "complete",
            "metadata": {"order_id": str(order.pk), "cart_id": str(cart.pk)},
        }},
    }
    with patch("payments.services.stripe.Webhook.construct_event", return_value=event) as construct:
        response = client.post("/api/webhooks/stripe/", data=b"{}", content_type="application/json",
                               HTTP_STRIPE_SIGNATURE="t=1,v1=abc")
    assert response.status_code == 200
    construct.assert_called_once_with(b"{}", "t=1,v1=abc", "whsec_test")
    assert Order.objects.get(pk=order.pk).is_paid


@pytest.mark.django_db
def test_webhook_rejects_bad_signature(client, settings):
    settings.STRIPE_WEBHOOK_SECRET = "whsec_test"
    error = stripe.SignatureVerificationError("bad", "sig")
    with patch("payments.services.stripe.Webhook.construct_event", side_effect=error):
        response = client.post("/api/webhooks/stripe/", data=b"{}", content_type="application/json",
                               HTTP_STRIPE_SIGNATURE="bad")
    assert response.status_code == 400
