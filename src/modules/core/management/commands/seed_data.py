from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.pricing.discounts import price_from_discount
from modules.pricing.models import SpecialPrice
from modules.products.models import Product
from modules.users.models import User, UserRole


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--special-prices",
            type=int,
            default=15,
            help="How many special prices to grant across the seeded users.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users = self._seed_users()
        products = self._seed_products()
        special_prices_created = self._seed_special_prices(
            users, products, options["special_prices"]
        )

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={len(users)}, "
                f"products={len(products)}, "
                f"special_prices={special_prices_created}"
            )
        )

    def _seed_users(self) -> list[User]:
        self.stdout.write("Creating users...")
        users: list[User] = []
        seed_users = [
            ("Ana Souza", "ana@example.com", UserRole.ADMIN),
            ("Bruno Lima", "bruno@example.com", UserRole.SELLER),
            ("Carla Mendes", "carla@example.com", UserRole.CUSTOMER),
            ("Daniel Costa", "daniel@example.com", UserRole.CUSTOMER),
            ("Eduardo Alves", "eduardo@example.com", UserRole.CUSTOMER),
            ("Fernanda Rocha", "fernanda@example.com", UserRole.CUSTOMER),
        ]
        for name, email, role in seed_users:
            user = User.objects.alive().filter(email=email).first()
            if user is None:
                user = User.objects.create(name=name, email=email, role=role)
            users.append(user)
        self.stdout.write(self.style.SUCCESS("Creating users... Done!"))
        return users

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("ELEC-001", "Monitor 27\"", "Electronics", "Acme", Decimal("1299.90")),
            ("ELEC-002", "Mechanical Keyboard", "Electronics", "Keyco", Decimal("399.90")),
            ("ELEC-003", "Gaming Mouse", "Electronics", "Keyco", Decimal("249.90")),
            ("ELEC-004", "Laptop 14\"", "Electronics", "Acme", Decimal("3999.00")),
            ("ELEC-005", "Headset", "Electronics", "Soundly", Decimal("299.90")),
            ("FURN-001", "Office Desk", "Furniture", "Woodworks", Decimal("899.00")),
            ("FURN-002", "Ergonomic Chair", "Furniture", "Woodworks", Decimal("1499.00")),
            ("FURN-003", "Bookshelf", "Furniture", "Woodworks", Decimal("699.00")),
            ("OFF-001", "A4 Paper", "Office", "Papyr", Decimal("29.90")),
            ("OFF-002", "Blue Pen", "Office", "Papyr", Decimal("4.90")),
            ("OFF-003", "Notebook", "Office", "Papyr", Decimal("19.90")),
            ("OFF-004", "Calculator", "Office", "Acme", Decimal("89.90")),
        ]
        for sku, name, category, brand, price in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": f"{name} ({category.lower()})",
                    "price": price,
                    "category": category,
                    "brand": brand,
                    "sku": sku,
                    "stock": random.randint(10, 200),
                    "tags": [category.lower(), brand.lower()],
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_special_prices(
        self, users: list[User], products: list[Product], count: int
    ) -> int:
        self.stdout.write("Creating special prices...")
        if not users or not products:
            self.stdout.write(
                self.style.WARNING("Skipping special prices (no users/products).")
            )
            return 0

        pairs = [(user, product) for user in users for product in products]
        created = 0
        for user, product in random.sample(pairs, k=min(count, len(pairs))):
            discount = random.choice([5, 10, 15, 20, 25])
            _, was_created = SpecialPrice.objects.get_or_create(
                user_id=user.id,
                product_id=product.id,
                defaults={
                    "user_name": user.name,
                    "email": user.email,
                    "product_name": product.name,
                    "special_price": price_from_discount(product.price, discount),
                    "discount": discount,
                    "notes": "Seeded",
                },
            )
            created += int(was_created)

        self.stdout.write(self.style.SUCCESS("Creating special prices... Done!"))
        return created
