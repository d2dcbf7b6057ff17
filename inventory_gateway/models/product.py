"""
Product model.

A Product is a stocked item. Storage enforces the commercial invariants:
price and stock can never go negative, and a rating, when present, sits
in [0, 5]. The gateway itself validates nothing beyond these constraints.
"""

import uuid
from typing import Optional

from sqlalchemy import CheckConstraint, Index, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from inventory_gateway.core.constants import RATING_MAX, RATING_MIN, TableName
from inventory_gateway.models.base import (
    Base,
    TimestampMixin,
    uuid_primary_key,
)


class Product(TimestampMixin, Base):
    """
    Stocked product.

    Attributes:
        product_id: Generated UUID primary key
        name: Display name (searched case-insensitively)
        price: Unit price, >= 0
        rating: Optional customer rating in [0, 5]
        stock_quantity: Units on hand, >= 0
        created_at / updated_at: Audit timestamps (never surfaced)
    """

    __tablename__ = TableName.PRODUCTS.value

    product_id: Mapped[uuid.UUID] = uuid_primary_key("product_id")

    name: Mapped[str] = mapped_column(Text, nullable=False)

    price: Mapped[float] = mapped_column(
        Numeric(asdecimal=False),
        nullable=False
    )

    rating: Mapped[Optional[float]] = mapped_column(
        Numeric(asdecimal=False),
        nullable=True
    )

    stock_quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0"
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint(
            f"rating >= {RATING_MIN} AND rating <= {RATING_MAX}",
            name="ck_products_rating_range"
        ),
        CheckConstraint(
            "stock_quantity >= 0",
            name="ck_products_stock_non_negative"
        ),
        Index("idx_products_name", "name"),
    )

    def __repr__(self) -> str:
        return (
            f"<Product(product_id={self.product_id}, name='{self.name}', "
            f"price={self.price}, stock_quantity={self.stock_quantity})>"
        )
