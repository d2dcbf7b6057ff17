"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from inventory_gateway.models.base import Base, create_all_tables, drop_all_tables
from inventory_gateway.models.product import Product
from inventory_gateway.models.user import User
from inventory_gateway.models.summary import (
    ExpenseByCategory,
    ExpenseSummary,
    PurchaseSummary,
    SalesSummary,
)

__all__ = [
    "Base",
    "Product",
    "User",
    "SalesSummary",
    "PurchaseSummary",
    "ExpenseSummary",
    "ExpenseByCategory",
    "create_all_tables",
    "drop_all_tables",
]
