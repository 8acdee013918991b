import pytest
from django.contrib.messages import get_messages

from engagement.models import Favorite, Review
from orders.models import Cart, Order
from tests.factories import ProductFactory, ReviewFactory


def _messages(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


@pytest.mark.django_db
def test_home_lists_featured_products(client):
    ProductFactory(name="Featured lamp", featured=True)
    ProductFactory(name="Plain lamp")
    response = client.get("/")
    assert response.status_code == 200
    assert [p.name for p in response.context["products"]] == ["Featured lamp"]


@pytest.mark.django_db
def test_products_search_and_layout(client):
    ProductFactory(name="Oak table")
    ProductFactory(name="Sofa")
    response = client.get("/products/", {"search": "oak", "layout": "list"})
    assert response.context["total"] == 1
    assert response.context["layout"] == "list"


@pytest.mark.django_db
def test_product_detail_and_missing_product(client):
    product = ProductFactory(price=123456)
    ReviewFactory(product=product, rating=4)
    response = client.get(f"/products/{product.pk}/")
    assert response.status_code == 200
    assert response.context["rating"] == 4.0
    assert response.context["rating_count"] == 1
    assert b"$1,234.56" in response.content
    assert client.get("/products/999999/").status_code == 404


@pytest.mark.django_db
def test_guest_cannot_toggle_favorite(client):
    product = ProductFactory()
    response = client.post(f"/products/{product.pk}/favorite/")
    assert response.status_code == 302
    assert response["Location"].startswith("/accounts/login/")
    assert not Favorite.objects.exists()


@pytest.mark.django_db
def test_toggle_favorite_flashes_message(user_client):
    product = ProductFactory()
    response = user_client.post(f"/products/{product.pk}/favorite/")
    assert "Added to Faves" in _messages(response)
    favorite = Favorite.objects.get()

    response = user_client.post(f"/products/{product.pk}/favorite/", {"favorite_id": favorite.pk})
    assert "Removed from Faves" in _messages(response)
    assert not Favorite.objects.exists()


@pytest.mark.django_db
def test_actions_only_return_to_same_site_referers(user_client):
    product = ProductFactory()
    response = user_client.post(f"/products/{product.pk}/favorite/", HTTP_REFERER="https://evil.example/phish")
    assert response["Location"] == f"/products/{product.pk}/"

    response = user_client.post(f"/products/{product.pk}/favorite/", HTTP_REFERER="http://testserver/favorites/")
    assert response["Location"] == "http://testserver/favorites/"


@pytest.mark.django_db
def test_review_submission_uses_identity(user_client, user):
    product = ProductFactory()
    response = user_client.post(f"/products/{product.pk}/reviews/", {"rating": "5", "comment": "Lovely, would buy again."})
    assert response.status_code == 302
    review = Review.objects.get()
    assert review.owner_id == str(user.pk)
    assert review.author_name == "Test"
    assert review.author_image_url.startswith("https://www.gravatar.com/avatar/")

    response = user_client.post(f"/products/{product.pk}/reviews/", {"rating": "5", "comment": "Lovely, would buy again."})
    assert "You have already reviewed this product" in _messages(response)


@pytest.mark.django_db
def test_invalid_review_is_flashed(user_client):
    product = ProductFactory()
    response = user_client.post(f"/products/{product.pk}/reviews/", {"rating": "9", "comment": "bad"})
    assert any("rating" in m for m in _messages(response))
    assert not Review.objects.exists()


@pytest.mark.django_db
def test_cart_add_update_remove(user_client, user):
    product = ProductFactory(name="Desk", price=10000)

    response = user_client.post("/cart/add/", {"product_id": product.pk, "amount": "3"})
    assert "3 Desks have been added to your cart" in _messages(response)
    cart = Cart.objects.get(owner_id=str(user.pk))
    assert cart.num_items_in_cart == 3
    item = cart.items.get()

    response = user_client.post(f"/cart/items/{item.pk}/update/", {"amount": "1"})
    assert "cart updated" in _messages(response)
    cart.refresh_from_db()
    assert cart.cart_total == 10000

    page = user_client.get("/cart/")
    assert page.context["cart"].order_total == cart.order_total
    assert page.context["cart_item_count"] == 1

    response = user_client.post(f"/cart/items/{item.pk}/remove/")
    assert "Item removed from cart" in _messages(response)
    cart.refresh_from_db()
    assert cart.order_total == 0


@pytest.mark.django_db
def test_cart_add_redirect_setting(user_client, settings):
    settings.REDIRECT_AFTER_ADDING_TO_CART = "/cart/"
    product = ProductFactory()
    response = user_client.post("/cart/add/", {"product_id": product.pk, "amount": "1"})
    assert response["Location"] == "/cart/"


@pytest.mark.django_db
def test_place_order_redirects_to_checkout(user_client, user):
    product = ProductFactory()
    user_client.post("/cart/add/", {"product_id": product.pk, "amount": "1"})
    cart = Cart.objects.get(owner_id=str(user.pk))

    response = user_client.post("/cart/order/")

    order = Order.objects.get()
    assert response.status_code == 302
    assert response["Location"] == f"/checkout/?orderId={order.pk}&cartId={cart.pk}"


@pytest.mark.django_db
def test_place_order_without_cart_is_flashed(user_client):
    response = user_client.post("/cart/order/")
    assert response["Location"] == "/cart/"
    assert "Cart not found" in _messages(response)


@pytest.mark.django_db
def test_checkout_page_passes_ids(user_client):
    response = user_client.get("/checkout/", {"orderId": "3", "cartId": "4"})
    assert response.context["order_id"] == "3"
    assert response.context["cart_id"] == "4"
