"""
Summary models.

Daily aggregates shown on the dashboard. One row per date by convention;
nothing in storage enforces it. These tables are read-only from the
gateway's point of view and are filled by seeding.
"""

import uuid
import datetime
from typing import Optional

from sqlalchemy import Date, Index, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from inventory_gateway.core.constants import TableName
from inventory_gateway.models.base import (
    Base,
    CreatedAtMixin,
    uuid_primary_key,
)


class SalesSummary(CreatedAtMixin, Base):
    """Total sales value per day, with the change against the previous day."""

    __tablename__ = TableName.SALES_SUMMARY.value

    sales_summary_id: Mapped[uuid.UUID] = uuid_primary_key("sales_summary_id")
    total_value: Mapped[float] = mapped_column(
        Numeric(asdecimal=False), nullable=False, default=0, server_default="0"
    )
    change_percentage: Mapped[Optional[float]] = mapped_column(
        Numeric(asdecimal=False), nullable=True
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("idx_sales_summary_date", "date"),
    )


class PurchaseSummary(CreatedAtMixin, Base):
    """Total purchased value per day."""

    __tablename__ = TableName.PURCHASE_SUMMARY.value

    purchase_summary_id: Mapped[uuid.UUID] = uuid_primary_key("purchase_summary_id")
    total_purchased: Mapped[float] = mapped_column(
        Numeric(asdecimal=False), nullable=False, default=0, server_default="0"
    )
    change_percentage: Mapped[Optional[float]] = mapped_column(
        Numeric(asdecimal=False), nullable=True
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("idx_purchase_summary_date", "date"),
    )


class ExpenseSummary(CreatedAtMixin, Base):
    """Total expenses per day."""

    __tablename__ = TableName.EXPENSE_SUMMARY.value

    expense_summary_id: Mapped[uuid.UUID] = uuid_primary_key("expense_summary_id")
    total_expenses: Mapped[float] = mapped_column(
        Numeric(asdecimal=False), nullable=False, default=0, server_default="0"
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("idx_expense_summary_date", "date"),
    )


class ExpenseByCategory(CreatedAtMixin, Base):
    """Expense amount per category and day."""

    __tablename__ = TableName.EXPENSE_BY_CATEGORY.value

    expense_by_category_id: Mapped[uuid.UUID] = uuid_primary_key("expense_by_category_id")
    category: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[float] = mapped_column(
        Numeric(asdecimal=False), nullable=False, default=0, server_default="0"
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("idx_expense_by_category_date", "date"),
    )
