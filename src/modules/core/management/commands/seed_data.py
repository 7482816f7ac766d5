from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.customers.dtos import CreateCustomerDTO
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.orders.constants import OrderStatus
from modules.orders.dtos import AmendOrderDTO, OrderLineDTO, PlaceOrderDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

SEED_CUSTOMERS = [
    ("Ana Souza", "ana@example.com", "+55 11 91234-0001"),
    ("Bruno Lima", "bruno@example.com", "+55 21 91234-0002"),
    ("Carla Mendes", "carla@example.com", ""),
    ("Daniel Costa", "daniel@example.com", "+55 31 91234-0004"),
    ("Eduarda Alves", "eduarda@example.com", ""),
    ("Fernanda Rocha", "fernanda@example.com", "+55 41 91234-0006"),
]

SEED_CATALOG = [
    ('Monitor 27"', "Electronics", Decimal("1299.90")),
    ("Mechanical Keyboard", "Electronics", Decimal("399.90")),
    ("Gaming Mouse", "Electronics", Decimal("249.90")),
    ("Headset", "Electronics", Decimal("299.90")),
    ("Office Desk", "Furniture", Decimal("899.00")),
    ("Ergonomic Chair", "Furniture", Decimal("1499.00")),
    ("Bookshelf", "Furniture", Decimal("699.00")),
    ("A4 Paper", "Office", Decimal("29.90")),
    ("Blue Pen", "Office", Decimal("4.90")),
    ("Notebook", "Office", Decimal("19.90")),
    ("Stapler", "Office", Decimal("39.90")),
    ("Calculator", "Office", Decimal("89.90")),
]


class Command(BaseCommand):
    help = "Seed database with a demo catalog, customers and orders."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=20,
            help="Number of orders to place (default: 20).",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        customers = self._seed_customers()
        products = self._seed_products()
        orders_created = self._seed_orders(customers, products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        repository = CustomerDjangoRepository()
        service = CustomerService(repository=repository)
        customers: list[Customer] = []
        for name, email, phone in SEED_CUSTOMERS:
            customer = repository.get_by_email(email)
            if customer is None:
                customer = service.create_customer(
                    CreateCustomerDTO(name=name, email=email, phone=phone)
                )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        repository = ProductDjangoRepository()
        service = ProductService(repository=repository)
        products: list[Product] = []
        for name, category, price in SEED_CATALOG:
            product = repository.get_by_name(name)
            if product is None:
                product = service.create_product(
                    CreateProductDTO(
                        name=name,
                        category=category,
                        price=price,
                        quantity=random.randint(10, 100),
                    )
                )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(
        self, customers: list[Customer], products: list[Product], count: int
    ) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        final_statuses = [
            OrderStatus.PENDING,
            OrderStatus.COMPLETED,
            OrderStatus.COMPLETED,
            OrderStatus.CANCELLED,
        ]

        orders_created = 0
        for _ in range(count):
            lines = [
                OrderLineDTO(product_id=product.id, quantity=random.randint(1, 3))
                for product in random.sample(products, k=random.randint(1, 4))
            ]
            try:
                order = service.place_order(
                    PlaceOrderDTO(customer_id=random.choice(customers).id, lines=lines)
                )
            except InsufficientStock as exc:
                self.stdout.write(self.style.WARNING(f"Skipped order: {exc.message}"))
                continue
            status = random.choice(final_statuses)
            if status != OrderStatus.PENDING:
                service.amend_order(order.id, AmendOrderDTO(status=status))
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
