import pytest

from core.errors import NotFound, StorefrontError, ValidationFailed
from engagement import services
from engagement.models import Favorite
from tests.factories import FavoriteFactory, ProductFactory, ReviewFactory


def _review_data(product, **overrides):
    data = {
        "product_id": product.pk,
        "author_name": "Jane",
        "author_image_url": "https://example.com/jane.png",
        "rating": 5,
        "comment": "Really comfortable chair.",
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_toggle_favorite_round_trip():
    product = ProductFactory()
    assert services.toggle_favorite("u1", product.pk) == "Added to Faves"
    favorite_id = services.fetch_favorite_id("u1", product.pk)
    assert favorite_id is not None
    assert [f.product_id for f in services.fetch_user_favorites("u1")] == [product.pk]

    assert services.toggle_favorite("u1", product.pk, favorite_id) == "Removed from Faves"
    assert services.fetch_favorite_id("u1", product.pk) is None


@pytest.mark.django_db
def test_cannot_remove_someone_elses_favorite():
    favorite = FavoriteFactory(owner_id="owner")
    with pytest.raises(NotFound):
        services.toggle_favorite("intruder", favorite.product_id, favorite.pk)
    assert Favorite.objects.filter(pk=favorite.pk).exists()


@pytest.mark.django_db
def test_create_review_and_reject_duplicate():
    product = ProductFactory()
    review = services.create_review("u1", _review_data(product))
    assert review.rating == 5
    assert services.find_existing_review("u1", product.pk) == review
    with pytest.raises(StorefrontError):
        services.create_review("u1", _review_data(product))


@pytest.mark.django_db
@pytest.mark.parametrize("overrides", [
    {"rating": 0},
    {"rating": 6},
    {"comment": "short"},
    {"comment": "x" * 2001},
    {"author_name": ""},
    {"author_image_url": "not-a-url"},
])
def test_review_validation(overrides):
    product = ProductFactory()
    with pytest.raises(ValidationFailed):
        services.create_review("u1", _review_data(product, **overrides))


@pytest.mark.django_db
def test_rating_summary():
    product = ProductFactory()
    assert services.fetch_product_rating(product.pk) == (0.0, 0)
    ReviewFactory(product=product, rating=5)
    ReviewFactory(product=product, rating=4)
    ReviewFactory(product=product, rating=4)
    assert services.fetch_product_rating(product.pk) == (4.3, 3)


@pytest.mark.django_db
def test_update_and_delete_own_review_only():
    review = ReviewFactory(owner_id="u1", rating=2)
    with pytest.raises(NotFound):
        services.update_review("u2", review.pk, {"rating": 5})

    services.update_review("u1", review.pk, {"rating": 5})
    review.refresh_from_db()
    assert review.rating == 5

    with pytest.raises(ValidationFailed):
        services.update_review("u1", review.pk, {"comment": "bad"})

    with pytest.raises(NotFound):
        services.delete_review("u2", review.pk)
    assert services.delete_review("u1", review.pk) == "Review deleted successfully"
    assert not services.fetch_product_reviews_by_user("u1").exists()
