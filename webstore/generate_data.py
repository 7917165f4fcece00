"""
Sample data generation for the WebStore database
This script generates data for:
- Categories, Products and Stores (master data)
- Customers
- Stocks (product quantity per store)
- Orders and Order items

Run it against the database configured by DATABASE_URL:
    python -m webstore.generate_data --orders 200
"""
import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from faker import Faker
from loguru import logger
from sqlalchemy.orm import Session

from webstore.config import PENDING_STATUS, REPORT_CATEGORY, setup_logging
from webstore.models import (
    Category,
    Customer,
    Order,
    OrderItem,
    Product,
    Stock,
    Store,
    product_categories,
)
from webstore.utils.database import SessionLocal, create_tables

ORDER_STATUSES = [PENDING_STATUS, "Processing", "Shipped", "Delivered", "Cancelled"]

CATEGORY_NAMES = [
    REPORT_CATEGORY,
    "Books",
    "Clothing",
    "Home & Kitchen",
    "Sports",
    "Beauty",
    "Toys",
    "Groceries",
]

# category -> (base product names, min price, max price)
PRODUCT_TEMPLATES = {
    REPORT_CATEGORY: (["Laptop", "Smartphone", "Bluetooth Headphones", "Tablet", "Smartwatch"], 50, 2000),
    "Books": (["Programming Handbook", "Novel", "Cookbook", "Business Guide"], 5, 60),
    "Clothing": (["T-Shirt", "Jeans", "Sneakers", "Jacket"], 10, 200),
    "Home & Kitchen": (["Rice Cooker", "Desk Lamp", "Bedding Set", "Coffee Maker"], 15, 400),
    "Sports": (["Running Shoes", "Football", "Dumbbells", "Yoga Mat"], 10, 250),
    "Beauty": (["Lipstick", "Face Cream", "Perfume", "Cleanser"], 5, 150),
    "Toys": (["Puzzle", "Building Blocks", "Science Kit", "Board Game"], 5, 120),
    "Groceries": (["Coffee Beans", "Green Tea", "Chocolate", "Fruit Jam"], 2, 40),
}

BRANDS = ["Sony", "Samsung", "Apple", "LG", "Xiaomi", "Adidas", "Nike", "Philips", "Lego"]


class DataGenerator:
    def __init__(self, db: Optional[Session] = None, seed: Optional[int] = None):
        self._owns_session = db is None
        self.db = db if db is not None else SessionLocal()
        self.rng = random.Random(seed)
        self.fake = Faker("en_US")
        if seed is not None:
            self.fake.seed_instance(seed)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._owns_session:
            self.db.close()

    def _commit(self, what: str, objects: list) -> list:
        """Add objects and commit, rolling back and re-raising on failure"""
        self.db.add_all(objects)
        try:
            self.db.commit()
        except Exception as e:
            logger.error(f"Error creating {what}: {e}")
            self.db.rollback()
            raise
        logger.info(f"Created {len(objects)} {what}")
        return objects

    def generate_categories(self, count: int = len(CATEGORY_NAMES)) -> List[Category]:
        """Generate product categories, the report category always comes first"""
        categories = [Category(category_name=name) for name in CATEGORY_NAMES[:count]]
        return self._commit("categories", categories)

    def generate_products(self, count: int = 50) -> List[Product]:
        """Generate products, each linked to one or two existing categories"""
        categories = self.db.query(Category).all()
        if not categories:
            logger.warning("No categories found. Please generate categories first.")
            return []

        products = []
        for _ in range(count):
            primary = self.rng.choice(categories)
            names, min_price, max_price = PRODUCT_TEMPLATES.get(
                primary.category_name, ([self.fake.word().title()], 1, 100)
            )
            price = Decimal(self.rng.randint(min_price * 100, max_price * 100)) / 100

            product = Product(
                product_name=f"{self.rng.choice(BRANDS)} {self.rng.choice(names)}",
                price=price,
            )
            product.categories.append(primary)
            if len(categories) > 1 and self.rng.random() < 0.2:
                secondary = self.rng.choice([c for c in categories if c is not primary])
                product.categories.append(secondary)
            products.append(product)

        return self._commit("products", products)

    def generate_customers(self, count: int = 30) -> List[Customer]:
        """Generate customer accounts with unique emails"""
        customers = []
        for _ in range(count):
            first_name = self.fake.first_name()
            last_name = self.fake.last_name()
            customers.append(Customer(
                first_name=first_name,
                last_name=last_name,
                email=self.fake.unique.email(),
            ))
        return self._commit("customers", customers)

    def generate_stores(self, count: int = 5) -> List[Store]:
        stores = [Store(store_name=f"{self.fake.city()} Store") for _ in range(count)]
        return self._commit("stores", stores)

    def generate_stocks(self, coverage: float = 0.7) -> List[Stock]:
        """Stock a random share of products in every store"""
        stores = self.db.query(Store).all()
        products = self.db.query(Product).all()
        if not stores or not products:
            logger.warning("No stores or products found. Please generate them first.")
            return []

        stocks = []
        for store in stores:
            for product in products:
                if self.rng.random() < coverage:
                    stocks.append(Stock(
                        store_id=store.store_id,
                        product_id=product.product_id,
                        quantity_in_stock=self.rng.randint(0, 200),
                    ))
        return self._commit("stocks", stocks)

    def generate_orders(self, count: int = 100, days_back: int = 60, discount_rate: float = 0.3) -> List[Order]:
        """
        Generate orders with 1-4 items each.

        Args:
            count: Number of orders to create
            days_back: Orders are dated within this many days before now
            discount_rate: Share of order lines that get a discount
        """
        customers = self.db.query(Customer).all()
        products = self.db.query(Product).all()
        if not customers or not products:
            logger.warning("No customers or products found. Please generate them first.")
            return []

        now = datetime.now()
        orders = []
        for _ in range(count):
            order = Order(
                customer=self.rng.choice(customers),
                order_date=now - timedelta(days=self.rng.randint(0, days_back), minutes=self.rng.randint(0, 1439)),
                order_status=self.rng.choice(ORDER_STATUSES),
            )
            for product in self.rng.sample(products, min(self.rng.randint(1, 4), len(products))):
                unit_price = Decimal(product.price)
                discount = Decimal("0.00")
                if self.rng.random() < discount_rate:
                    # up to 20% of the unit price
                    discount = (unit_price * Decimal(self.rng.randint(1, 20)) / 100).quantize(Decimal("0.01"))
                order.order_items.append(OrderItem(
                    product=product,
                    quantity=self.rng.randint(1, 5),
                    unit_price=unit_price,
                    discount=discount,
                ))
            orders.append(order)

        return self._commit("orders", orders)

    def clear_all_data(self):
        """Clear all data from database"""
        logger.info("Clearing all data...")
        try:
            # Delete in dependency order to satisfy foreign keys
            self.db.query(OrderItem).delete()
            self.db.query(Order).delete()
            self.db.query(Stock).delete()
            self.db.execute(product_categories.delete())
            self.db.query(Customer).delete()
            self.db.query(Product).delete()
            self.db.query(Category).delete()
            self.db.query(Store).delete()
            self.db.commit()
        except Exception as e:
            logger.error(f"Error clearing data: {e}")
            self.db.rollback()
            raise
        logger.info("All data cleared")

    def generate_all_data(self, categories=len(CATEGORY_NAMES), products=50, customers=30, stores=5, orders=100):
        """Clear the database and generate a full sample dataset"""
        logger.info("=== Generating Sample Data ===")
        self.clear_all_data()

        categories = self.generate_categories(categories)
        products = self.generate_products(products)
        customers = self.generate_customers(customers)
        stores = self.generate_stores(stores)
        stocks = self.generate_stocks()
        orders = self.generate_orders(orders)

        logger.info("=== Sample Data Generation Complete ===")
        logger.info(
            f"Categories: {len(categories)}, Products: {len(products)}, Customers: {len(customers)}, "
            f"Stores: {len(stores)}, Stocks: {len(stocks)}, Orders: {len(orders)}"
        )


def main():
    """Main function to run data generation"""
    import argparse

    parser = argparse.ArgumentParser(description="Generate sample data for the WebStore database")
    parser.add_argument("--categories", type=int, default=len(CATEGORY_NAMES), help="Number of categories to generate")
    parser.add_argument("--products", type=int, default=50, help="Number of products to generate")
    parser.add_argument("--customers", type=int, default=30, help="Number of customers to generate")
    parser.add_argument("--stores", type=int, default=5, help="Number of stores to generate")
    parser.add_argument("--orders", type=int, default=100, help="Number of orders to generate")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    parser.add_argument("--clear", action="store_true", help="Clear all existing data")

    args = parser.parse_args()
    setup_logging("generate_data")
    create_tables()

    with DataGenerator(seed=args.seed) as generator:
        if args.clear:
            generator.clear_all_data()
        else:
            generator.generate_all_data(
                categories=args.categories,
                products=args.products,
                customers=args.customers,
                stores=args.stores,
                orders=args.orders,
            )


if __name__ == "__main__":
    main()
