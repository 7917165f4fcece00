"""
Store and Stock models
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from webstore.utils.database import Base


class Store(Base):
    __tablename__ = "stores"

    store_id = Column(Integer, primary_key=True, index=True)
    store_name = Column(String(100), nullable=False)

    # Relationships
    stocks = relationship("Stock", back_populates="store", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Store(id={self.store_id}, name={self.store_name})>"


class Stock(Base):
    __tablename__ = "stocks"

    store_id = Column(Integer, ForeignKey("stores.store_id"), primary_key=True)
    product_id = Column(Integer, ForeignKey("products.product_id"), primary_key=True)
    quantity_in_stock = Column(Integer, nullable=False, default=0)

    # Relationships
    store = relationship("Store", back_populates="stocks")
    product = relationship("Product", back_populates="stocks")

    def __repr__(self):
        return f"<Stock(store_id={self.store_id}, product_id={self.product_id}, quantity={self.quantity_in_stock})>"
