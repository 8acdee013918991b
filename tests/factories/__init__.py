from .accounts import UserFactory
from .catalog import ProductFactory
from .engagement import FavoriteFactory, ReviewFactory
from .orders import CartFactory, CartItemFactory, OrderFactory, OrderItemFactory

__all__ = [
    "UserFactory",
    "ProductFactory",
    "FavoriteFactory",
    "ReviewFactory",
    "CartFactory",
    "CartItemFactory",
    "OrderFactory",
    "OrderItemFactory",
]
