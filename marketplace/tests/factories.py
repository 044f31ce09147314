import uuid

import factory
from django.contrib.auth import get_user_model
from faker import Faker

from marketplace.models import License, Order, OrderItem, Product, ProductFeedback, ProductSku


User = get_user_model()
fake = Faker()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True


class AdminFactory(UserFactory):
    is_superuser = True
    is_staff = True
    username = factory.Sequence(lambda n: f"admin_{n}")
    email = factory.Sequence(lambda n: f"admin_{n}@example.com")


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    id = factory.LazyFunction(uuid.uuid4)
    product_name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("paragraph", nb_sentences=3)
    category = "Application Software"
    platform_type = factory.Iterator([choice[0] for choice in Product.PLATFORM_CHOICES])
    base_type = "Computer"
    product_url = factory.Faker("url")
    download_url = factory.Faker("url")
    requirement_specification = factory.LazyFunction(lambda: [{"RAM": "4 GB"}, {"Disk": "2 GB"}])
    highlights = factory.LazyFunction(lambda: [fake.sentence(nb_words=4) for _ in range(3)])
    stripe_product_id = factory.Sequence(lambda n: f"prod_test_{n}")


class ProductSkuFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductSku

    product = factory.SubFactory(ProductFactory)
    sku_name = factory.Sequence(lambda n: f"SKU {n}")
    price = factory.Faker("random_int", min=100, max=5000)
    validity = 365
    lifetime = False
    stripe_price_id = factory.Sequence(lambda n: f"price_test_{n}")
    sku_code = factory.LazyFunction(lambda: uuid.uuid4().hex[:12])


class LicenseFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = License

    product_sku = factory.SubFactory(ProductSkuFactory)
    product = factory.LazyAttribute(lambda o: o.product_sku.product)
    license_key = factory.LazyFunction(lambda: "-".join(fake.bothify("?#?#").upper() for _ in range(4)))


class ProductFeedbackFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductFeedback

    product = factory.SubFactory(ProductFactory)
    customer = factory.SubFactory(UserFactory)
    customer_name = factory.LazyAttribute(lambda o: o.customer.username)
    rating = factory.Faker("random_int", min=1, max=5)
    feedback_msg = factory.Faker("sentence")


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    customer = factory.SubFactory(UserFactory)
    customer_email = factory.LazyAttribute(lambda o: o.customer.email)
    order_status = "completed"
    payment_status = "paid"
    total_amount = 0


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    product_name = factory.LazyAttribute(lambda o: o.product.product_name)
    quantity = 1
    price = 999
