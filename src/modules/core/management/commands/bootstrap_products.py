from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand

from modules.core.dynamodb import create_products_table, get_dynamodb_resource
from modules.products.dtos import CreateProductDTO
from modules.products.repositories import ProductDynamoDBRepository
from modules.products.services import ProductService

SEED_PRODUCTS = [
    ("Widget", "General purpose widget", 9.99, "tools", "W-1", 25),
    ("Hammer", "16oz claw hammer", 19.90, "tools", "T-HAM-16", 12),
    ("Screwdriver Set", "6 piece precision set", 14.50, "tools", "T-SDS-6", 40),
    ("Desk Lamp", "LED desk lamp, warm white", 34.00, "home", "H-LAMP-1", 8),
    ("Coffee Mug", "350ml ceramic mug", 7.25, "home", "H-MUG-350", 100),
    ("USB-C Cable", "1m braided cable", 11.99, "electronics", "E-USBC-1M", 60),
]


class Command(BaseCommand):
    help = "Create the DynamoDB products table if missing and optionally seed it."

    def add_arguments(self, parser):
        parser.add_argument(
            "--seed",
            action="store_true",
            help="Insert a handful of sample products after creating the table.",
        )

    def handle(self, *args, **options):
        resource = get_dynamodb_resource()
        table_name = settings.PRODUCTS_TABLE

        if table_name in resource.meta.client.list_tables()["TableNames"]:
            self.stdout.write(f"Table '{table_name}' already exists.")
            table = resource.Table(table_name)
        else:
            self.stdout.write(f"Creating table '{table_name}'...")
            table = create_products_table(resource, table_name)

        if options["seed"]:
            created = self._seed(ProductService(ProductDynamoDBRepository(table)))
            self.stdout.write(self.style.SUCCESS(f"Seed completed: products={created}"))
        else:
            self.stdout.write(self.style.SUCCESS("Bootstrap completed."))

    def _seed(self, service: ProductService) -> int:
        for name, description, price, category, sku, stock in SEED_PRODUCTS:
            service.create_product(
                CreateProductDTO(
                    name=name,
                    description=description,
                    price=price,
                    category=category,
                    sku=sku,
                    stock=stock,
                )
            )
        return len(SEED_PRODUCTS)
