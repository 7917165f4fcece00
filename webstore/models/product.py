"""
Product and Category models
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Table
from sqlalchemy import DECIMAL
from sqlalchemy.orm import relationship

from webstore.utils.database import Base


product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.product_id"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.category_id"), primary_key=True),
)


class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, index=True)
    category_name = Column(String(100), nullable=False, unique=True)

    # Relationships
    products = relationship("Product", secondary=product_categories, back_populates="categories")

    def __repr__(self):
        return f"<Category(id={self.category_id}, name={self.category_name})>"


class Product(Base):
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, index=True)
    product_name = Column(String(100), nullable=False)
    price = Column(DECIMAL(10, 2), nullable=False)

    # Relationships
    categories = relationship("Category", secondary=product_categories, back_populates="products")
    order_items = relationship("OrderItem", back_populates="product")
    stocks = relationship("Stock", back_populates="product")

    def __repr__(self):
        return f"<Product(id={self.product_id}, name={self.product_name}, price={self.price})>"
