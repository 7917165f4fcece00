from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from webstore.models import Category, Customer, Order, OrderItem, Product, Stock, Store
from webstore.utils.database import create_tables

NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def now():
    """Fixed reference time the fixture orders are dated against"""
    return NOW


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def log_messages():
    """Collect loguru messages at WARNING and above"""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(str(msg)), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def store_data(db):
    """
    Three customers, four products, two stores and four orders:

    order 1  Alice  Pending    2 days ago   Headphones x2 (-5.00), Novel x1
    order 2  Alice  Delivered  45 days ago  Laptop x1
    order 3  Bob    Shipped    10 days ago  Novel x3, Headphones x1
    order 4  Bob    Pending    31 days ago  Laptop x1 at 950.00 (-50.00)
    """
    electronics = Category(category_id=1, category_name="Electronics")
    books = Category(category_id=2, category_name="Books")

    laptop = Product(product_id=1, product_name="Laptop", price=Decimal("999.99"), categories=[electronics])
    headphones = Product(product_id=2, product_name="Headphones", price=Decimal("59.50"), categories=[electronics])
    novel = Product(product_id=3, product_name="Novel", price=Decimal("12.00"), categories=[books])
    tablet = Product(product_id=4, product_name="Tablet", price=Decimal("300.00"), categories=[electronics])

    alice = Customer(customer_id=1, first_name="Alice", last_name="Smith", email="alice@example.com")
    bob = Customer(customer_id=2, first_name="Bob", last_name="Jones", email="bob@example.com")
    carol = Customer(customer_id=3, first_name="Carol", last_name="White", email="carol@example.com")

    north = Store(store_id=1, store_name="North Store")
    south = Store(store_id=2, store_name="South Store")

    stocks = [
        Stock(store=north, product=laptop, quantity_in_stock=5),
        Stock(store=south, product=laptop, quantity_in_stock=12),
        Stock(store=north, product=headphones, quantity_in_stock=30),
    ]

    orders = [
        Order(order_id=1, customer=alice, order_status="Pending", order_date=NOW - timedelta(days=2), order_items=[
            OrderItem(order_item_id=1, product=headphones, quantity=2, unit_price=Decimal("59.50"), discount=Decimal("5.00")),
            OrderItem(order_item_id=2, product=novel, quantity=1, unit_price=Decimal("12.00"), discount=Decimal("0.00")),
        ]),
        Order(order_id=2, customer=alice, order_status="Delivered", order_date=NOW - timedelta(days=45), order_items=[
            OrderItem(order_item_id=3, product=laptop, quantity=1, unit_price=Decimal("999.99"), discount=Decimal("0.00")),
        ]),
        Order(order_id=3, customer=bob, order_status="Shipped", order_date=NOW - timedelta(days=10), order_items=[
            OrderItem(order_item_id=4, product=novel, quantity=3, unit_price=Decimal("12.00"), discount=Decimal("0.00")),
            OrderItem(order_item_id=5, product=headphones, quantity=1, unit_price=Decimal("59.50"), discount=Decimal("0.00")),
        ]),
        Order(order_id=4, customer=bob, order_status="Pending", order_date=NOW - timedelta(days=31), order_items=[
            OrderItem(order_item_id=6, product=laptop, quantity=1, unit_price=Decimal("950.00"), discount=Decimal("50.00")),
        ]),
    ]

    db.add_all([electronics, books, laptop, headphones, novel, tablet, alice, bob, carol, north, south])
    db.add_all(stocks)
    db.add_all(orders)
    db.commit()
    return db
