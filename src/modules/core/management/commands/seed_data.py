from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from modules.accounts.models import UserRole
from modules.cart.dtos import AddCartItemDTO
from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.cart.services import CartService
from modules.orders.constants import PaymentMethod
from modules.orders.dtos import CheckoutDTO, ShippingDetailsDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.constants import ProductCategory, ProductUnit
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

FARMERS = [
    ("ramesh", "Ramesh Patil", "Green Acres", "Nashik, Maharashtra", 19.9975, 73.7898),
    ("sunita", "Sunita Devi", "Sunrise Organics", "Ludhiana, Punjab", 30.9010, 75.8573),
    ("arjun", "Arjun Reddy", "Deccan Fields", "Guntur, Andhra Pradesh", 16.3067, 80.4365),
]

CONSUMERS = [
    ("priya", "Priya Sharma", "priya@example.com"),
    ("vikram", "Vikram Singh", "vikram@example.com"),
]

CATALOG = [
    ("Tomatoes", ProductCategory.VEGETABLES, ProductUnit.KG, Decimal("30.00")),
    ("Onions", ProductCategory.VEGETABLES, ProductUnit.KG, Decimal("25.00")),
    ("Basmati Rice", ProductCategory.GRAINS, ProductUnit.KG, Decimal("90.00")),
    ("Wheat", ProductCategory.GRAINS, ProductUnit.KG, Decimal("32.00")),
    ("Alphonso Mangoes", ProductCategory.FRUITS, ProductUnit.DOZEN, Decimal("600.00")),
    ("Bananas", ProductCategory.FRUITS, ProductUnit.DOZEN, Decimal("50.00")),
    ("Fresh Milk", ProductCategory.DAIRY, ProductUnit.LITER, Decimal("56.00")),
    ("Paneer", ProductCategory.DAIRY, ProductUnit.GRAM, Decimal("0.40")),
    ("Green Chillies", ProductCategory.VEGETABLES, ProductUnit.KG, Decimal("60.00")),
]


class Command(BaseCommand):
    help = "Seed database with demo farmers, consumers, products, a cart and orders."

    def handle(self, *args, **options):
        rng = random.Random(42)
        self.stdout.write("Seeding development data...")

        with transaction.atomic():
            farmers = self._seed_farmers()
            consumers = self._seed_consumers()
            products = self._seed_products(farmers, rng)
            orders_created = self._seed_orders(consumers, products, rng)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"farmers={len(farmers)}, "
                f"consumers={len(consumers)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_farmers(self) -> list:
        User = get_user_model()
        farmers = []
        for username, name, farm_name, address, lat, lng in FARMERS:
            farmer, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "role": UserRole.FARMER,
                    "name": name,
                    "email": f"{username}@example.com",
                    "farm_name": farm_name,
                    "farm_address": address,
                    "farm_latitude": lat,
                    "farm_longitude": lng,
                    "farm_size_acres": Decimal("12.50"),
                },
            )
            if created:
                farmer.set_password(f"{username}123")
                farmer.save(update_fields=["password"])
            farmers.append(farmer)
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123", role=UserRole.ADMIN)
        return farmers

    def _seed_consumers(self) -> list:
        User = get_user_model()
        consumers = []
        for username, name, email in CONSUMERS:
            consumer, created = User.objects.get_or_create(
                username=username,
                defaults={"role": UserRole.CONSUMER, "name": name, "email": email},
            )
            if created:
                consumer.set_password(f"{username}123")
                consumer.save(update_fields=["password"])
            consumers.append(consumer)
        return consumers

    def _seed_products(self, farmers: list, rng: random.Random) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        today = timezone.localdate()
        for index, (name, category, unit, price) in enumerate(CATALOG):
            farmer = farmers[index % len(farmers)]
            product, _ = Product.objects.get_or_create(
                farmer=farmer,
                name=name,
                defaults={
                    "description": f"{name} from {farmer.farm_name}",
                    "category": category,
                    "unit": unit,
                    "price": price,
                    "quantity": rng.randint(20, 200),
                    "harvest_date": today - timedelta(days=rng.randint(1, 10)),
                    "organic": rng.random() < 0.5,
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(self, consumers: list, products: list[Product], rng: random.Random) -> int:
        """Fill each consumer's cart and check it out; the last cart is left full."""
        self.stdout.write("Creating orders...")
        product_repo = ProductDjangoRepository()
        cart_repo = CartDjangoRepository()
        carts = CartService(repository=cart_repo, product_repository=product_repo)
        orders = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=product_repo,
            cart_repository=cart_repo,
        )

        created = 0
        for index, consumer in enumerate(consumers):
            for product in rng.sample(products, k=3):
                carts.add_item(
                    consumer,
                    AddCartItemDTO(product_id=product.id, quantity=rng.randint(1, 3)),
                )
            if index == len(consumers) - 1:
                break
            placed = orders.checkout(
                consumer,
                CheckoutDTO(
                    payment_method=PaymentMethod.CASH_ON_DELIVERY,
                    shipping=ShippingDetailsDTO(
                        full_name=consumer.display_name,
                        address="12 MG Road",
                        city="Pune",
                        state="Maharashtra",
                        postal_code="411001",
                        phone_number="+919800000000",
                    ),
                    notes="Seed order",
                ),
            )
            created += len(placed)

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created
