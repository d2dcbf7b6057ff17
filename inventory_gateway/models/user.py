"""User model. Email uniqueness is enforced by storage."""

import uuid

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from inventory_gateway.core.constants import TableName
from inventory_gateway.models.base import (
    Base,
    CreatedAtMixin,
    uuid_primary_key,
)


class User(CreatedAtMixin, Base):
    __tablename__ = TableName.USERS.value

    user_id: Mapped[uuid.UUID] = uuid_primary_key("user_id")
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    __table_args__ = (
        Index("idx_users_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email='{self.email}')>"
