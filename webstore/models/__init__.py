"""
SQLAlchemy models for the WebStore database
"""

# Import all models to make them available when importing from models
from .customer import Customer
from .product import Product, Category, product_categories
from .order import Order, OrderItem
from .store import Store, Stock

__all__ = [
    "Customer",
    "Product",
    "Category",
    "product_categories",
    "Order",
    "OrderItem",
    "Store",
    "Stock",
]
