"""
PlotRegistry Backend — Block and Customer SQLAlchemy Models
===========================================================

What:  ORM models for the entities a Plot refers to.
Who:   PlotService checks Block existence on create/update and loads both
       tables to populate `blockId` / `customerId` on reads.

Both tables are managed outside the plot API; only the columns needed
to identify and display a record are mapped here.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from app.database import Base


class Block(Base):
    """A larger parcel containing one or more plots."""

    __tablename__ = "blocks"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Display name of the block, e.g. 'Block A'",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Block(id={self.id}, name='{self.name}')>"


class Customer(Base):
    """A buyer a plot may be assigned to."""

    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True, default=None)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name='{self.name}')>"
