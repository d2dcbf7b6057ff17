"""View models and the row mappers that build them."""

from inventory_gateway.schemas.views import (
    DashboardMetrics,
    ExpenseByCategorySummary,
    ExpenseSummary,
    NewProduct,
    Product,
    PurchaseSummary,
    SalesSummary,
    User,
)
from inventory_gateway.schemas.mappers import (
    map_expense_by_category,
    map_expense_summary,
    map_product,
    map_purchase_summary,
    map_sales_summary,
    map_user,
    render_amount,
)

__all__ = [
    "DashboardMetrics",
    "ExpenseByCategorySummary",
    "ExpenseSummary",
    "NewProduct",
    "Product",
    "PurchaseSummary",
    "SalesSummary",
    "User",
    "map_expense_by_category",
    "map_expense_summary",
    "map_product",
    "map_purchase_summary",
    "map_sales_summary",
    "map_user",
    "render_amount",
]
