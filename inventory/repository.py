"""
Product storage operations.

All reads and writes of products go through `ProductRepository`, which
borrows sessions from the application's `DatabaseHandle`.
"""

from decimal import Decimal, InvalidOperation

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.exc import DataError, IntegrityError

from .errors import ConstraintViolationError, ProductNotFoundError
from .models import EDITABLE_FIELDS, Product


CENTS = Decimal('0.01')
# Limits of the Integer and Numeric(10, 2) columns
MAX_INT = 2 ** 31 - 1
MIN_INT = -2 ** 31
MAX_MONEY = Decimal(10) ** 8
OPTIONAL_TEXT_FIELDS = ('remark', 'location')


def _to_int(name, value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConstraintViolationError(f"{name} must be a whole number, got {value!r}")
    if not MIN_INT <= number <= MAX_INT:
        raise ConstraintViolationError(f"{name} is out of range, got {value!r}")
    return number


def _to_decimal(name, value):
    try:
        number = Decimal(str(value).strip())
        if not number.is_finite():
            raise InvalidOperation()
        number = number.quantize(CENTS)
    except InvalidOperation:
        raise ConstraintViolationError(f"{name} must be a decimal number, got {value!r}")
    if abs(number) >= MAX_MONEY:
        raise ConstraintViolationError(f"{name} is out of range, got {value!r}")
    return number


def clean_fields(fields):
    """
    Keep the editable product fields and convert them to their column types

    Args:
        fields (Mapping): Submitted form values or JSON body

    Returns:
        dict: Values keyed by column name. Keys missing from `fields` are left out

    Raises:
        ConstraintViolationError: A value cannot be converted
    """
    cleaned = {}
    for name in EDITABLE_FIELDS:
        if name not in fields:
            continue
        value = fields.get(name)
        if value is None:
            cleaned[name] = None
        elif name == 'qty':
            cleaned[name] = _to_int(name, value)
        elif name in ('price', 'amount'):
            cleaned[name] = _to_decimal(name, value)
        elif name in OPTIONAL_TEXT_FIELDS:
            cleaned[name] = str(value).strip() or None
        else:
            cleaned[name] = str(value).strip()
    return cleaned


class ProductRepository:
    """
    CRUD and search operations on the products table

    Args:
        handle (DatabaseHandle): Source of database sessions
    """
    def __init__(self, handle):
        self.handle = handle

    def list(self, name_filter=None):
        """
        Products whose name contains `name_filter`, or all products when it is empty

        Args:
            name_filter (str | None): Substring to look for in product_name

        Returns:
            list[Product]: Matching products ordered by id
        """
        query = select(Product).order_by(Product.id)
        if name_filter:
            query = query.where(Product.product_name.contains(name_filter, autoescape=True))
        with self.handle.session() as session:
            return list(session.scalars(query))

    def create(self, fields):
        """
        Insert a product

        Args:
            fields (Mapping): Values for the new product

        Returns:
            Product: The stored product with its assigned id

        Raises:
            ConstraintViolationError: Duplicate product_code, missing required
                field or a value of the wrong type
        """
        product = Product(**clean_fields(fields))
        with self.handle.session() as session:
            session.add(product)
            try:
                session.commit()
            except (IntegrityError, DataError) as e:
                session.rollback()
                raise ConstraintViolationError(f"Could not save product: {e.orig}") from e
            session.refresh(product)
        logger.debug(f"Created product {product.id} ({product.product_code})")
        return product

    def get(self, product_id):
        """
        Fetch one product by id

        Args:
            product_id (int): id of the product

        Returns:
            Product: The stored product

        Raises:
            ProductNotFoundError: No product has this id
        """
        with self.handle.session() as session:
            product = session.get(Product, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def update(self, product_id, fields):
        """
        Overwrite the given fields of one product. Unknown ids change nothing.

        Returns:
            int: Number of updated rows, 0 or 1
        """
        values = clean_fields(fields)
        if not values:
            return 0
        statement = update(Product).where(Product.id == product_id).values(**values)
        with self.handle.session() as session:
            try:
                result = session.execute(statement, execution_options={'synchronize_session': False})
                session.commit()
            except (IntegrityError, DataError) as e:
                session.rollback()
                raise ConstraintViolationError(f"Could not update product {product_id}: {e.orig}") from e
        logger.debug(f"Updated product {product_id}: {sorted(values)} ({result.rowcount} row)")
        return result.rowcount

    def delete(self, product_id):
        """Remove one product. Returns the number of deleted rows."""
        statement = delete(Product).where(Product.id == product_id)
        with self.handle.session() as session:
            result = session.execute(statement, execution_options={'synchronize_session': False})
            session.commit()
        logger.debug(f"Deleted product {product_id} ({result.rowcount} row)")
        return result.rowcount
