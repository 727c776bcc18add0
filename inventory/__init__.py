"""
Inventory package initialization.

This file makes the `inventory` folder a Python package. It exposes the
Flask application factory and the database pieces for use by external
tools and tests
"""

from .app import create_app
from .database import ConnectionConfig, DatabaseHandle
from .models import Product, init_schema
from .repository import ProductRepository

__all__ = ["create_app", "ConnectionConfig", "DatabaseHandle", "Product", "ProductRepository", "init_schema"]
