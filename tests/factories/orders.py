import factory
from decimal import Decimal

from orders.models import Cart, CartItem, Order, OrderItem

from .catalog import ProductFactory


class CartFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Cart

    owner_id = factory.Sequence(lambda n: str(n + 1))
    tax_rate = Decimal("0.08")


class CartItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartItem

    cart = factory.SubFactory(CartFactory)
    product = factory.SubFactory(ProductFactory)
    amount = 1


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    owner_id = factory.Sequence(lambda n: str(n + 1))
    email = factory.LazyAttribute(lambda o: f"buyer{o.owner_id}@example.com")
    num_items = 1
    sub_total = 12999
    tax = 1040
    shipping = 500
    order_total = 14539
    is_paid = False


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    product_name = factory.LazyAttribute(lambda o: o.product.name)
    amount = 1
    price = factory.LazyAttribute(lambda o: o.product.price)
