"""
Customer model
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from webstore.utils.database import Base


class Customer(Base):
    __tablename__ = "customers"

    customer_id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)

    # Relationships
    orders = relationship("Order", back_populates="customer")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Customer(id={self.customer_id}, email={self.email})>"
