"""
Product record definition.

The products table is owned by this module: `init_schema` drops and
recreates it (reset mode) or creates it when missing (create mode).
"""

from loguru import logger
from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

from .config import SCHEMA_MODES


Base = declarative_base()


class Product(Base):
    """
    A single inventory record

    Attributes:
        id (int): Identifier assigned by the database
        product_code (str): Unique product code
        product_name (str): Display name, used by the list filter
        qty (int): Quantity on hand
        price (Decimal): Unit price, two decimal places
        amount (Decimal): Total amount, two decimal places
        remark (str | None): Free text note
        location (str | None): Storage location
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_code = Column(String(255), nullable=False, unique=True)
    product_name = Column(String(255), nullable=False)
    qty = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    remark = Column(Text)
    location = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'product_code': self.product_code,
            'product_name': self.product_name,
            'qty': self.qty,
            'price': self.price,
            'amount': self.amount,
            'remark': self.remark,
            'location': self.location,
        }

    def __repr__(self):
        return f'<Product {self.product_code}>'


# Columns a form submission may set
EDITABLE_FIELDS = ('product_code', 'product_name', 'qty', 'price', 'amount', 'remark', 'location')


def init_schema(engine, mode="reset"):
    """
    Create the products table on a freshly connected engine

    Args:
        engine (Engine): Engine of the new connection
        mode (str): "reset" drops the table first and loses every row,
            "create" only creates it when it does not exist yet

    Raises:
        ValueError: Unknown mode
    """
    if mode not in SCHEMA_MODES:
        raise ValueError(f"Unknown schema mode {mode!r}, expected one of {SCHEMA_MODES}")

    if mode == "reset":
        Base.metadata.drop_all(engine, tables=[Product.__table__])
    Base.metadata.create_all(engine, tables=[Product.__table__])
    logger.info(f"Product table ready (mode={mode})")
