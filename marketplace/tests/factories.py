from decimal import Decimal

import factory
from django.contrib.auth import get_user_model

from marketplace.models import CartItem, Category, Order, OrderItem, Product, Shipment

User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True
    role = "customer"
    address = factory.Faker("address")
    phone = factory.Sequence(lambda n: f"0812{n:07d}")


class AdminFactory(UserFactory):
    role = "admin"
    email = factory.Sequence(lambda n: f"admin_{n}@example.com")


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    description = factory.Faker("text", max_nb_chars=200)


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    code = factory.Sequence(lambda n: f"SKU-{n:05d}")
    description = factory.Faker("paragraph", nb_sentences=3)
    price = Decimal("25.00")
    stock = 50
    category = factory.SubFactory(CategoryFactory)


class CartItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartItem

    user = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = 1


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    user = factory.SubFactory(UserFactory)
    status = Order.STATUS_PENDING
    total_amount = Decimal("59.98")
    shipping_address = factory.Faker("address")
    shipping_method = "standard"
    shipping_cost = Decimal("9.99")
    payment_method = "credit_card"
    payment_status = Order.PAYMENT_PENDING


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = 1
    price = factory.LazyAttribute(lambda o: o.product.price)


class ShipmentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Shipment

    order = factory.SubFactory(OrderFactory)
    courier = "JNE"
    tracking_number = factory.Sequence(lambda n: f"JNE{n:010d}")
    cost = Decimal("15000.00")
    status = Shipment.STATUS_PENDING
