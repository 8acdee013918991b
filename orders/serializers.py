from rest_framework import serializers

from .models import Order, OrderItem


class AddToCartSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    amount = serializers.IntegerField(min_value=1, max_value=99)


class UpdateCartItemSerializer(serializers.Serializer):
    amount = serializers.IntegerField(min_value=1, max_value=99)


class ProductRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    company = serializers.CharField()
    image = serializers.CharField()
    price = serializers.IntegerField()


class CartItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    amount = serializers.IntegerField()
    product = ProductRefSerializer()


class CartSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    num_items_in_cart = serializers.IntegerField()
    cart_total = serializers.IntegerField()
    shipping = serializers.IntegerField()
    tax = serializers.IntegerField()
    tax_rate = serializers.DecimalField(max_digits=6, decimal_places=4)
    order_total = serializers.IntegerField()


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["id", "product", "product_name", "amount", "price"]


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id", "email", "num_items", "sub_total", "tax", "shipping",
            "order_total", "is_paid", "created_at", "items",
        ]
        read_only_fields = fields
