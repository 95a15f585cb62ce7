"""
PlotRegistry Backend — Plot SQLAlchemy Model
============================================

What:  ORM model representing the `plots` table, plus the enumerations
       its type, unit and category columns are restricted to.
Who:   Used by PlotService for CRUD operations and by Alembic for schema management.

Table Design:
    - UUID primary key, assigned on insert
    - block_id / customer_id: plain UUID columns, no foreign keys; the service
      checks block existence before every write
    - plot_number: unique index; a violation on flush is reported as a conflict
    - plot_type / area_unit / category: short strings holding enum values
    - created_at / updated_at: UTC timestamps
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Float, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from app.database import Base


PLOT_NUMBER_MAX_LENGTH = 50


class PlotType(str, enum.Enum):
    SHOP = "shop"
    HOUSE = "house"


class AreaUnit(str, enum.Enum):
    KANAL = "kanal"
    MARLA = "marla"


class PlotCategory(str, enum.Enum):
    COMMERCIAL = "commercial"
    RESIDENTIAL = "residential"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Plot(Base):
    """
    A subdivided, individually numbered unit of land within a block.

    Lifecycle:
        1. Created by PlotService.create_plot after validation
        2. Every mutable column replaced by PlotService.update_plot
        3. Removed permanently by PlotService.delete_plot

    Query Patterns:
        - List all: ORDER BY created_at (insertion order)
        - Duplicate check: WHERE plot_number = :n [AND id != :id]
          → Uses uq_plots_plot_number
    """

    __tablename__ = "plots"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ── References ────────────────────────────────────────────────────────
    block_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        comment="Block this plot belongs to",
    )
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        default=None,
        comment="Customer the plot is assigned to, if any",
    )

    # ── Plot Details ──────────────────────────────────────────────────────
    plot_number: Mapped[str] = mapped_column(String(PLOT_NUMBER_MAX_LENGTH), nullable=False)
    plot_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="shop or house",
    )
    area_unit: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="kanal or marla",
    )
    area: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="commercial or residential",
    )
    is_cornered: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=None)

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("uq_plots_plot_number", "plot_number", unique=True),
        Index("idx_plots_block_id", "block_id"),
        Index("idx_plots_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Plot(id={self.id}, plot_number='{self.plot_number}', "
            f"block_id={self.block_id})>"
        )
