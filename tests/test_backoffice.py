import pytest
from datetime import timedelta
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from catalog.models import Product
from orders.models import Order
from tests.factories import OrderFactory, ProductFactory

DESCRIPTION = "A sturdy chair made from oak that looks good in any living room."


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


@pytest.mark.django_db
def test_sales_lists_all_orders(admin_client):
    OrderFactory(is_paid=True)
    OrderFactory(is_paid=False)
    response = admin_client.get("/admin/sales/")
    assert len(response.context["orders"]) == 2


@pytest.mark.django_db
def test_create_product_from_form(admin_client, admin_user, media_root):
    image = SimpleUploadedFile("chair.png", b"png-bytes", content_type="image/png")
    response = admin_client.post("/admin/products/create/", {
        "name": "Armchair",
        "company": "Luxora",
        "price": "$199.99",
        "description": DESCRIPTION,
        "featured": "on",
        "image": image,
    })
    assert response.status_code == 302
    product = Product.objects.get()
    assert product.price == 19999
    assert product.featured
    assert product.owner_id == str(admin_user.pk)
    assert product.image.startswith("/media/product-images/")


@pytest.mark.django_db
def test_create_product_shows_errors(admin_client, media_root):
    response = admin_client.post("/admin/products/create/", {"name": "ab", "company": "", "price": "1", "description": "x"})
    assert response.status_code == 400
    assert not Product.objects.exists()


@pytest.mark.django_db
def test_edit_and_delete_product(admin_client):
    product = ProductFactory(image="")
    response = admin_client.post(f"/admin/products/{product.pk}/edit/", {
        "name": "New name", "company": "Luxora", "price": "10", "description": DESCRIPTION,
    })
    assert response.status_code == 302
    product.refresh_from_db()
    assert product.name == "New name"
    assert product.price == 1000
    assert product.featured is False

    admin_client.post(f"/admin/products/{product.pk}/delete/")
    assert not Product.objects.exists()


@pytest.mark.django_db
def test_edit_missing_product_is_404(admin_client):
    assert admin_client.get("/admin/products/999999/edit/").status_code == 404


@pytest.mark.django_db
def test_tasks_purge(admin_client):
    stale = OrderFactory(is_paid=False)
    Order.objects.filter(pk=stale.pk).update(updated_at=timezone.now() - timedelta(hours=1))
    response = admin_client.post("/admin/tasks/")
    assert response.status_code == 302
    assert "1 old unpaid orders deleted" in [str(m) for m in get_messages(response.wsgi_request)]
    assert not Order.objects.exists()
