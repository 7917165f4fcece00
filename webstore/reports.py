"""
Report queries over the WebStore database

Ten read-only reports. Each one has:
- a fetch_* method that runs the query and returns a list of result rows
- a task* method that prints a header and either the rows or a
  "no data found" message

Related entities are eager-loaded so each report is a single round trip.
The order count report runs one extra query to log orders with no
customer, and the category cross-report runs two queries per product.
"""
import functools
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from webstore.config import (
    CURRENCY_SYMBOL,
    PENDING_STATUS,
    RECENT_ORDER_DAYS,
    REPORT_CATEGORY,
    TOP_CUSTOMERS_LIMIT,
)
from webstore.models import Category, Customer, Order, OrderItem, Product, Stock
from webstore.utils.database import SessionLocal


class ReportQueryError(Exception):
    """Raised when a report query fails at the data source"""

    def __init__(self, report_name: str, message: str = ""):
        self.report_name = report_name
        super().__init__(f"{report_name} query failed: {message}" if message else f"{report_name} query failed")


@dataclass
class CustomerRow:
    first_name: str
    last_name: str
    email: str


@dataclass
class OrderItemCountRow:
    order_id: int
    customer_first_name: str
    order_status: str
    item_count: int


@dataclass
class ProductPriceRow:
    product_name: str
    price: Decimal


@dataclass
class PendingOrderRow:
    customer_first_name: str
    order_id: int
    order_date: datetime
    total_price: Decimal


@dataclass
class CustomerOrderCountRow:
    customer_name: str
    order_count: int


@dataclass
class OrderValueRow:
    customer_first_name: str
    order_id: int
    total: Decimal


@dataclass
class RecentOrderRow:
    order_id: int
    order_date: datetime
    customer_name: str


@dataclass
class ProductSalesRow:
    product_name: str
    total_sold: int


@dataclass
class DiscountedItemRow:
    order_id: int
    customer_name: str
    product_name: str
    discount: Decimal


@dataclass
class CategoryProductRow:
    """A product in the report category, its best-stocked store and the orders containing it"""
    product_name: str
    top_store_name: Optional[str] = None
    order_ids: List[int] = field(default_factory=list)


def report_query(report_name: str):
    """
    Wrap a fetch method so data-source failures surface as ReportQueryError

    Args:
        report_name: Name used in log lines and in the raised error
    """
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            try:
                rows = fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"{report_name} failed: {e}")
                raise ReportQueryError(report_name, str(e)) from e
            logger.debug(f"{report_name}: fetched {len(rows)} rows")
            return rows
        return wrapper
    return decorator


def _sum_decimal(values) -> Decimal:
    return sum((Decimal(v) for v in values), Decimal("0"))


def _print_header(title: str):
    print(f"\n=== {title} ===")


class StoreReports:
    """
    Read-only reports over a WebStore session.

    Pass an existing session to share it with the caller. Without one, a
    session is opened from SessionLocal and closed when the context exits.
    """

    def __init__(self, db: Optional[Session] = None):
        self._owns_session = db is None
        self.db = db if db is not None else SessionLocal()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._owns_session:
            self.db.close()

    def _skip_order_without_customer(self, order: Order) -> bool:
        if order.customer is None:
            logger.warning(f"Order {order.order_id} has no customer (customer_id={order.customer_id}), skipping")
            return True
        return False

    @report_query("customers")
    def fetch_customers(self) -> List[CustomerRow]:
        customers = self.db.query(Customer).order_by(Customer.customer_id).all()
        return [CustomerRow(c.first_name, c.last_name, c.email) for c in customers]

    def task01_list_all_customers(self) -> List[CustomerRow]:
        _print_header("Task 01: List All Customers")
        rows = self.fetch_customers()
        if not rows:
            print("No customers found.")
            return rows

        for row in rows:
            print(f"{row.first_name} {row.last_name} - {row.email}")
        return rows

    @report_query("orders_with_item_count")
    def fetch_orders_with_item_count(self) -> List[OrderItemCountRow]:
        """Every order with the sum of its item quantities"""
        orders = (
            self.db.query(Order)
            .options(joinedload(Order.customer), selectinload(Order.order_items))
            .order_by(Order.order_id)
            .all()
        )

        rows = []
        for order in orders:
            if self._skip_order_without_customer(order):
                continue
            rows.append(OrderItemCountRow(
                order_id=order.order_id,
                customer_first_name=order.customer.first_name,
                order_status=order.order_status,
                item_count=sum(item.quantity for item in order.order_items),
            ))
        return rows

    def task02_list_orders_with_item_count(self) -> List[OrderItemCountRow]:
        _print_header("Task 02: List Orders With Item Count")
        rows = self.fetch_orders_with_item_count()
        if not rows:
            print("No orders found.")
            return rows

        for row in rows:
            print(f"Name: {row.customer_first_name}, Orderstatus: {row.order_status}, Quantity: {row.item_count}")
        print(f"Total items ordered: {sum(row.item_count for row in rows)}")
        return rows

    @report_query("products_by_price")
    def fetch_products_by_price(self) -> List[ProductPriceRow]:
        products = (
            self.db.query(Product)
            .order_by(Product.price.desc(), Product.product_id)
            .all()
        )
        return [ProductPriceRow(p.product_name, Decimal(p.price)) for p in products]

    def task03_list_products_by_descending_price(self) -> List[ProductPriceRow]:
        _print_header("Task 03: List Products By Descending Price")
        rows = self.fetch_products_by_price()
        if not rows:
            print("No products found.")
            return rows

        for row in rows:
            print(f"{row.product_name}: {row.price}")
        return rows

    @report_query("pending_orders_with_total")
    def fetch_pending_orders_with_total(self) -> List[PendingOrderRow]:
        """Pending orders with sum(unit_price * quantity - discount) over their items"""
        orders = (
            self.db.query(Order)
            .filter(Order.order_status == PENDING_STATUS)
            .options(joinedload(Order.customer), selectinload(Order.order_items))
            .order_by(Order.order_id)
            .all()
        )

        rows = []
        for order in orders:
            if self._skip_order_without_customer(order):
                continue
            rows.append(PendingOrderRow(
                customer_first_name=order.customer.first_name,
                order_id=order.order_id,
                order_date=order.order_date,
                total_price=_sum_decimal(item.line_total for item in order.order_items),
            ))
        return rows

    def task04_list_pending_orders_with_total_price(self) -> List[PendingOrderRow]:
        _print_header("Task 04: List Pending Orders With Total Price")
        rows = self.fetch_pending_orders_with_total()
        if not rows:
            print("No orders found.")
            return rows

        for row in rows:
            print(f"Name: {row.customer_first_name} ID: {row.order_id} Date: {row.order_date} Price: {row.total_price}")
        return rows

    @report_query("order_count_per_customer")
    def fetch_order_count_per_customer(self) -> List[CustomerOrderCountRow]:
        """Customers who placed at least one order, with their order count"""
        orphan_ids = (
            self.db.query(Order.order_id, Order.customer_id)
            .outerjoin(Customer, Order.customer_id == Customer.customer_id)
            .filter(Customer.customer_id.is_(None))
            .order_by(Order.order_id)
            .all()
        )
        for order_id, customer_id in orphan_ids:
            logger.warning(f"Order {order_id} has no customer (customer_id={customer_id}), skipping")

        order_count = func.count(Order.order_id).label("order_count")
        results = (
            self.db.query(Customer, order_count)
            .join(Order, Order.customer_id == Customer.customer_id)
            .group_by(Customer.customer_id)
            .order_by(Customer.customer_id)
            .all()
        )
        return [CustomerOrderCountRow(customer.full_name, int(count)) for customer, count in results]

    def task05_order_count_per_customer(self) -> List[CustomerOrderCountRow]:
        _print_header("Task 05: Order Count Per Customer")
        rows = self.fetch_order_count_per_customer()
        if not rows:
            print("No orders found.")
            return rows

        for row in rows:
            print(f"Full name: {row.customer_name}, Order count: {row.order_count}")
        return rows

    @report_query("top_customers_by_order_value")
    def fetch_top_customers_by_order_value(self, limit: int = TOP_CUSTOMERS_LIMIT) -> List[OrderValueRow]:
        """
        Highest-value orders and who placed them.

        The value of an order is the sum of its items' unit_price. Orders are
        ranked individually, so a customer with several orders can appear
        more than once.
        """
        orders = (
            self.db.query(Order)
            .options(joinedload(Order.customer), selectinload(Order.order_items))
            .order_by(Order.order_id)
            .all()
        )

        ranked = []
        for order in orders:
            if self._skip_order_without_customer(order):
                continue
            ranked.append(OrderValueRow(
                customer_first_name=order.customer.first_name,
                order_id=order.order_id,
                total=_sum_decimal(item.unit_price for item in order.order_items),
            ))

        # sort is stable, ties keep order_id order
        ranked.sort(key=lambda row: row.total, reverse=True)
        return ranked[:max(limit, 0)]

    def task06_top3_customers_by_order_value(self) -> List[OrderValueRow]:
        _print_header("Task 06: Top 3 Customers By Order Value")
        rows = self.fetch_top_customers_by_order_value()
        if not rows:
            print("No customers found.")
            return rows

        for row in rows:
            print(f"Name: {row.customer_first_name} Total: {row.total}")
        return rows

    @report_query("recent_orders")
    def fetch_recent_orders(self, now: Optional[datetime] = None, days: int = RECENT_ORDER_DAYS) -> List[RecentOrderRow]:
        """Orders placed on or after now - days"""
        cutoff = (now or datetime.now()) - timedelta(days=days)
        orders = (
            self.db.query(Order)
            .filter(Order.order_date >= cutoff)
            .options(joinedload(Order.customer))
            .order_by(Order.order_id)
            .all()
        )

        rows = []
        for order in orders:
            if self._skip_order_without_customer(order):
                continue
            rows.append(RecentOrderRow(order.order_id, order.order_date, order.customer.full_name))
        return rows

    def task07_recent_orders(self, now: Optional[datetime] = None) -> List[RecentOrderRow]:
        _print_header("Task 07: Recent Orders")
        rows = self.fetch_recent_orders(now=now)
        if not rows:
            print(f"No orders found from past {RECENT_ORDER_DAYS} days.")
            return rows

        for row in rows:
            print(f"ID: {row.order_id}, Date: {row.order_date}, Name: {row.customer_name}")
        return rows

    @report_query("total_sold_per_product")
    def fetch_total_sold_per_product(self) -> List[ProductSalesRow]:
        """Every product with its total sold quantity, never-sold products count 0"""
        total_sold = func.coalesce(func.sum(OrderItem.quantity), 0).label("total_sold")
        results = (
            self.db.query(Product.product_name, total_sold)
            .outerjoin(OrderItem, OrderItem.product_id == Product.product_id)
            .group_by(Product.product_id, Product.product_name)
            .order_by(total_sold.desc(), Product.product_id)
            .all()
        )
        return [ProductSalesRow(name, int(sold)) for name, sold in results]

    def task08_total_sold_per_product(self) -> List[ProductSalesRow]:
        _print_header("Task 08: Total Sold Per Product")
        rows = self.fetch_total_sold_per_product()
        if not rows:
            print("No products found.")
            return rows

        for row in rows:
            print(f"Name: {row.product_name} Total sold: {row.total_sold}")
        return rows

    @report_query("discounted_orders")
    def fetch_discounted_orders(self) -> List[DiscountedItemRow]:
        """The discounted items of every order that has at least one"""
        orders = (
            self.db.query(Order)
            .filter(Order.order_items.any(OrderItem.discount > 0))
            .options(
                joinedload(Order.customer),
                selectinload(Order.order_items).joinedload(OrderItem.product),
            )
            .order_by(Order.order_id)
            .all()
        )

        rows = []
        for order in orders:
            if self._skip_order_without_customer(order):
                continue
            for item in sorted(order.order_items, key=lambda i: i.order_item_id):
                if item.discount <= 0:
                    continue
                if item.product is None:
                    logger.warning(f"Order item {item.order_item_id} has no product (product_id={item.product_id}), skipping")
                    continue
                rows.append(DiscountedItemRow(
                    order_id=order.order_id,
                    customer_name=order.customer.full_name,
                    product_name=item.product.product_name,
                    discount=Decimal(item.discount),
                ))
        return rows

    def task09_discounted_orders(self) -> List[DiscountedItemRow]:
        _print_header("Task 09: Discounted Orders")
        rows = self.fetch_discounted_orders()
        if not rows:
            print("No discounted orders found.")
            return rows

        for row in rows:
            print(
                f"ID: {row.order_id}, Name: {row.customer_name}, "
                f"Product name: {row.product_name}, Discount: -{row.discount}{CURRENCY_SYMBOL}"
            )
        return rows

    @report_query("category_cross_report")
    def fetch_category_cross_report(self, category_name: str = REPORT_CATEGORY) -> List[CategoryProductRow]:
        """
        For every product in category_name: the store holding most of it and
        the orders that contain it. Runs two queries per matching product.
        """
        products = (
            self.db.query(Product)
            .filter(Product.categories.any(Category.category_name == category_name))
            .order_by(Product.product_id)
            .all()
        )

        rows = []
        for product in products:
            order_ids = (
                self.db.query(Order.order_id)
                .filter(Order.order_items.any(OrderItem.product_id == product.product_id))
                .order_by(Order.order_id)
                .all()
            )
            stocks = (
                self.db.query(Stock)
                .options(joinedload(Stock.store))
                .filter(Stock.product_id == product.product_id)
                .order_by(Stock.quantity_in_stock.desc(), Stock.store_id)
                .all()
            )

            # highest stock row whose store still exists
            top_store_name = None
            for stock in stocks:
                if stock.store is None:
                    logger.warning(f"Stock for product {product.product_id} references missing store {stock.store_id}, skipping")
                    continue
                top_store_name = stock.store.store_name
                break

            rows.append(CategoryProductRow(
                product_name=product.product_name,
                top_store_name=top_store_name,
                order_ids=[order_id for (order_id,) in order_ids],
            ))
        return rows

    def task10_advanced_query_example(self, category_name: str = REPORT_CATEGORY) -> List[CategoryProductRow]:
        _print_header("Task 10: Advanced Query Example")
        rows = self.fetch_category_cross_report(category_name=category_name)
        if not rows:
            print(f"No products found in category {category_name}.")
            return rows

        for row in rows:
            if row.top_store_name is not None:
                print(f"{row.product_name} has highest stock in {row.top_store_name}")
            for order_id in row.order_ids:
                print(f"Order ID: {order_id} containts: {row.product_name}")
        return rows

    def run_all(self):
        """Print every report in order"""
        self.task01_list_all_customers()
        self.task02_list_orders_with_item_count()
        self.task03_list_products_by_descending_price()
        self.task04_list_pending_orders_with_total_price()
        self.task05_order_count_per_customer()
        self.task06_top3_customers_by_order_value()
        self.task07_recent_orders()
        self.task08_total_sold_per_product()
        self.task09_discounted_orders()
        self.task10_advanced_query_example()
