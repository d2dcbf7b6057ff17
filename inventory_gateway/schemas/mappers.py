"""
Row Mappers
===========

One explicit function per table turning a backend row (anything that
supports `row["column"]`, e.g. SQLAlchemy's RowMapping or a plain dict)
into its typed view model.

Required columns must be present; a missing one raises RowMappingError
instead of leaking a half-shaped record. Optional columns default to None.
"""

from decimal import Decimal
from typing import Any, Mapping

from inventory_gateway.core.constants import TableName
from inventory_gateway.core.exceptions import RowMappingError
from inventory_gateway.schemas.views import (
    ExpenseByCategorySummary,
    ExpenseSummary,
    Product,
    PurchaseSummary,
    SalesSummary,
    User,
)


def _required(row: Mapping[str, Any], table: TableName, field: str) -> Any:
    try:
        value = row[field]
    except KeyError:
        raise RowMappingError(table.value, field) from None
    if value is None:
        raise RowMappingError(table.value, field)
    return value


def _optional(row: Mapping[str, Any], field: str) -> Any:
    return row.get(field)


def render_amount(value: Any) -> str:
    """
    Render a numeric amount as text in its shortest decimal form.

    500 -> "500", 2500.5 -> "2500.5", Decimal("12.50") -> "12.5"
    """
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        # repr() is the shortest string that round-trips the float
        value = Decimal(repr(value))
    return format(Decimal(value).normalize(), "f")


def map_product(row: Mapping[str, Any]) -> Product:
    table = TableName.PRODUCTS
    return Product(
        product_id=_required(row, table, "product_id"),
        name=_required(row, table, "name"),
        price=_required(row, table, "price"),
        rating=_optional(row, "rating"),
        stock_quantity=_required(row, table, "stock_quantity"),
    )


def map_user(row: Mapping[str, Any]) -> User:
    table = TableName.USERS
    return User(
        user_id=_required(row, table, "user_id"),
        name=_required(row, table, "name"),
        email=_required(row, table, "email"),
    )


def map_sales_summary(row: Mapping[str, Any]) -> SalesSummary:
    table = TableName.SALES_SUMMARY
    return SalesSummary(
        sales_summary_id=_required(row, table, "sales_summary_id"),
        total_value=_required(row, table, "total_value"),
        change_percentage=_optional(row, "change_percentage"),
        date=_required(row, table, "date"),
    )


def map_purchase_summary(row: Mapping[str, Any]) -> PurchaseSummary:
    table = TableName.PURCHASE_SUMMARY
    return PurchaseSummary(
        purchase_summary_id=_required(row, table, "purchase_summary_id"),
        total_purchased=_required(row, table, "total_purchased"),
        change_percentage=_optional(row, "change_percentage"),
        date=_required(row, table, "date"),
    )


def map_expense_summary(row: Mapping[str, Any]) -> ExpenseSummary:
    table = TableName.EXPENSE_SUMMARY
    return ExpenseSummary(
        expense_summary_id=_required(row, table, "expense_summary_id"),
        total_expenses=_required(row, table, "total_expenses"),
        date=_required(row, table, "date"),
    )


def map_expense_by_category(row: Mapping[str, Any]) -> ExpenseByCategorySummary:
    table = TableName.EXPENSE_BY_CATEGORY
    return ExpenseByCategorySummary(
        expense_by_category_summary_id=_required(row, table, "expense_by_category_id"),
        category=_required(row, table, "category"),
        amount=render_amount(_required(row, table, "amount")),
        date=_required(row, table, "date"),
    )
