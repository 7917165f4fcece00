"""
Order and OrderItem models
"""
from decimal import Decimal

from sqlalchemy import Column, Integer, String, DateTime, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from webstore.utils.database import Base


class Order(Base):
    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True, index=True)
    order_date = Column(DateTime, nullable=False, server_default=func.now())
    order_status = Column(String(50), nullable=False, default="Pending")
    customer_id = Column(Integer, ForeignKey("customers.customer_id"))

    # Relationships
    customer = relationship("Customer", back_populates="orders")
    order_items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Order(id={self.order_id}, date={self.order_date}, status={self.order_status})>"


class OrderItem(Base):
    __tablename__ = "order_items"

    order_item_id = Column(Integer, primary_key=True, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(DECIMAL(10, 2), nullable=False)
    discount = Column(DECIMAL(10, 2), nullable=False, default=Decimal("0.00"))
    order_id = Column(Integer, ForeignKey("orders.order_id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.product_id"))

    # Relationships
    order = relationship("Order", back_populates="order_items")
    product = relationship("Product", back_populates="order_items")

    @property
    def line_total(self) -> Decimal:
        """unit_price * quantity - discount, not clamped at zero"""
        return Decimal(self.unit_price) * self.quantity - Decimal(self.discount)

    def __repr__(self):
        return f"<OrderItem(id={self.order_item_id}, quantity={self.quantity}, unit_price={self.unit_price})>"
