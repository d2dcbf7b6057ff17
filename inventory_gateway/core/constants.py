"""
Application-wide constants.

Centralize table names, cache tags and status codes here.
"""

from enum import Enum


# ========================================
# Cache Tags
# ========================================

class CacheTag(str, Enum):
    """
    Resource kinds used to tag cached query results.

    A mutation declares the tags it makes stale; every cached read
    carrying one of those tags is dropped and refetched on next use.
    """

    DASHBOARD_METRICS = "DashboardMetrics"
    PRODUCTS = "Products"
    USERS = "Users"
    EXPENSES = "Expenses"


# ========================================
# Table Names
# ========================================

class TableName(str, Enum):
    """Tables owned by the backing store."""

    PRODUCTS = "products"
    USERS = "users"
    SALES_SUMMARY = "sales_summary"
    PURCHASE_SUMMARY = "purchase_summary"
    EXPENSE_SUMMARY = "expense_summary"
    EXPENSE_BY_CATEGORY = "expense_by_category"


# ========================================
# Limits & Status Codes
# ========================================

DEFAULT_POPULAR_PRODUCTS_LIMIT = 5

HTTP_INTERNAL_SERVER_ERROR = 500

RATING_MIN = 0
RATING_MAX = 5
