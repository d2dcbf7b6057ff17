"""
View Models
===========

The camelCase, UI-facing shapes returned by the gateway.

Attributes use Python names; `model_dump(by_alias=True)` (or
`model_dump_json(by_alias=True)`) produces the camelCase wire form.
Audit timestamps never appear here.
"""

import datetime
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ViewModel(BaseModel):
    """Base for every view model: camelCase aliases, accepts either name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Product(ViewModel):
    product_id: uuid.UUID
    name: str
    price: float
    rating: Optional[float] = None
    stock_quantity: int


class NewProduct(ViewModel):
    """
    Input for create_product.

    No range checks here: negative prices or out-of-range ratings are
    passed through and rejected by storage constraints.
    """

    name: str
    price: float
    rating: Optional[float] = None
    stock_quantity: int


class User(ViewModel):
    user_id: uuid.UUID
    name: str
    email: str


class SalesSummary(ViewModel):
    sales_summary_id: uuid.UUID
    total_value: float
    change_percentage: Optional[float] = None
    date: datetime.date


class PurchaseSummary(ViewModel):
    purchase_summary_id: uuid.UUID
    total_purchased: float
    change_percentage: Optional[float] = None
    date: datetime.date


class ExpenseSummary(ViewModel):
    expense_summary_id: uuid.UUID
    total_expenses: float
    date: datetime.date


class ExpenseByCategorySummary(ViewModel):
    """Expense per category; `amount` is text even though storage is numeric."""

    expense_by_category_summary_id: uuid.UUID
    category: str
    amount: str
    date: datetime.date


class DashboardMetrics(ViewModel):
    """Composite of the five dashboard reads. Assembled per fetch, never stored."""

    popular_products: List[Product] = Field(default_factory=list)
    sales_summary: List[SalesSummary] = Field(default_factory=list)
    purchase_summary: List[PurchaseSummary] = Field(default_factory=list)
    expense_summary: List[ExpenseSummary] = Field(default_factory=list)
    expense_by_category_summary: List[ExpenseByCategorySummary] = Field(default_factory=list)
