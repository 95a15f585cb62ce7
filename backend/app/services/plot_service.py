"""
PlotRegistry Backend — Plot Service (Business Logic)
====================================================

What:  Validation, referential checks and persistence for plots.
How:   Each operation runs against the request's AsyncSession; failures are
       raised as app.exceptions types and turned into responses by main.py.
Who:   Called by the /plots route handlers.

Write Flow (create / update):
    ┌──────────┐   ┌────────────┐   ┌────────────┐   ┌─────────────┐   ┌───────┐
    │ Required │──▶│ Enum/range │──▶│ Block      │──▶│ plotNumber  │──▶│ Flush │
    │ fields   │   │ checks     │   │ exists?    │   │ unused?     │   │       │
    └──────────┘   └────────────┘   └────────────┘   └─────────────┘   └───────┘
        400             400              409              409          409 on
                                                                       unique index

    All enum/range checks are evaluated and reported together, and a failure
    stops the write. The plotNumber lookup gives the caller a readable
    message; the unique index on plot_number is what actually guarantees
    uniqueness when two writers race past the lookup.

Reads populate `blockId` / `customerId` with the referenced records by
fetching the blocks and customers for the whole result set in one query each.
"""

import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    PlotRegistryError,
    ValidationError,
)
from app.models.block import Block, Customer
from app.models.plot import PLOT_NUMBER_MAX_LENGTH, AreaUnit, Plot, PlotCategory, PlotType
from app.schemas.plot import (
    BlockResponse,
    CustomerResponse,
    MessageResponse,
    PlotCreateRequest,
    PlotDeleteRequest,
    PlotDetail,
    PlotDetailResponse,
    PlotListResponse,
    PlotMutationResponse,
    PlotResponse,
    PlotUpdateRequest,
)

logger = logging.getLogger(__name__)

# attribute name → wire name, in the order they are reported
REQUIRED_FIELDS = {
    "block_id": "blockId",
    "plot_number": "plotNumber",
    "plot_type": "plotType",
    "area": "area",
    "area_unit": "areaUnit",
    "category": "category",
}

ALLOWED_AREA_UNITS = {unit.value for unit in AreaUnit}
ALLOWED_CATEGORIES = {category.value for category in PlotCategory}
ALLOWED_PLOT_TYPES = {plot_type.value for plot_type in PlotType}


def parse_id(value: object) -> Optional[uuid.UUID]:
    """Returns the UUID for an identifier, or None if it is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class PlotService:
    """
    Business logic layer for plot operations.

    Responsibilities:
        - list_plots():  every plot, references populated
        - get_plot():    one plot, references populated
        - create_plot(): validate, check block and plot number, insert
        - update_plot(): validate, check block and plot number, replace all fields
        - delete_plot(): remove a plot

    Error Handling Strategy:
        Client mistakes raise ValidationError / NotFoundError / ConflictError.
        Unexpected SQLAlchemy failures are logged and wrapped in DatabaseError
        so driver details never reach the response.
    """

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_plots(self, db: AsyncSession) -> PlotListResponse:
        """
        Return every plot in insertion order.

        Raises:
            NotFoundError: No plots exist (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Plot).order_by(Plot.created_at, Plot.id))
            plots = list(result.scalars().all())
            if not plots:
                raise NotFoundError(message="No plot found")

            data = await self._populate(db, plots)
            return PlotListResponse(message="List of found plots", data=data)

        except PlotRegistryError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error listing plots: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve plots. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_plot(self, db: AsyncSession, plot_id: Optional[str]) -> PlotDetailResponse:
        """
        Return a single plot with its block and customer populated.

        A malformed identifier cannot match any plot and is reported the
        same way as an unknown one.

        Raises:
            ValidationError: plot_id is empty (→ 400)
            NotFoundError: No plot has this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        if not plot_id:
            raise ValidationError(message="Please provide plot id", field="id")

        try:
            plot = await self._find_plot(db, plot_id)
            if plot is None:
                raise NotFoundError(message="No plot found", resource_id=str(plot_id))

            [detail] = await self._populate(db, [plot])
            return PlotDetailResponse(message="Found plot", data=detail)

        except PlotRegistryError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching plot %s: %s", plot_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the plot. Please try again.",
                context={"plot_id": str(plot_id)},
            )

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_plot(
        self, db: AsyncSession, payload: PlotCreateRequest
    ) -> PlotMutationResponse:
        """
        Validate and insert a new plot.

        Validation order:
            1. Required fields present        → ValidationError
            2. Enum values and positive area  → ValidationError (all reported)
            3. Block exists                   → ConflictError
            4. plotNumber unused              → ConflictError

        Returns:
            PlotMutationResponse with the stored plot (bare reference ids)

        Raises:
            ValidationError, ConflictError as above; ValidationError if the
            insert is rejected for another reason; DatabaseError on query failure.
        """
        self._check_required(payload)
        self._check_values(payload)
        plot_number = str(payload.plot_number)

        try:
            block_id = await self._require_block(db, payload.block_id)
            await self._check_duplicate_number(db, plot_number)

            plot = Plot(
                block_id=block_id,
                plot_number=plot_number,
                plot_type=payload.plot_type,
                area=payload.area,
                area_unit=payload.area_unit,
                category=payload.category,
                is_cornered=payload.is_cornered,
            )
            db.add(plot)
            await self._flush(db, plot_number, invalid_message="Invalid plot data received!")
            logger.info("Plot %s created: %s", plot.id, plot_number)

            return PlotMutationResponse(
                message=f"New Plot with {plot.plot_number} created",
                data=PlotResponse.model_validate(plot),
            )

        except PlotRegistryError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error creating plot %s: %s", plot_number, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the plot. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_plot(
        self, db: AsyncSession, payload: PlotUpdateRequest
    ) -> PlotMutationResponse:
        """
        Replace every mutable field of an existing plot.

        All fields must be resupplied, even for a partial change. Keeping the
        plot's own plotNumber is not a conflict; taking another plot's is.

        Raises:
            ValidationError: id or a required field missing, plot not found,
                             bad enum value or non-positive area (→ 400)
            ConflictError: Block missing or plotNumber taken (→ 409)
            DatabaseError: Query execution failed (→ 500)
        """
        if not payload.id:
            raise ValidationError(message="All fields are required", field="id")
        self._check_required(payload)

        try:
            plot = await self._find_plot(db, payload.id)
            if plot is None:
                raise ValidationError(
                    message="No plot found!",
                    context={"resource": "plot", "resource_id": str(payload.id)},
                )

            self._check_values(payload)
            plot_number = str(payload.plot_number)
            block_id = await self._require_block(db, payload.block_id)
            await self._check_duplicate_number(db, plot_number, exclude_id=plot.id)

            plot.block_id = block_id
            plot.plot_number = plot_number
            plot.plot_type = payload.plot_type
            plot.area_unit = payload.area_unit
            plot.area = payload.area
            plot.category = payload.category
            plot.is_cornered = payload.is_cornered
            plot.updated_at = datetime.now(timezone.utc)

            await self._flush(db, plot_number, invalid_message="Invalid plot data received!")
            logger.info("Plot %s updated: %s", plot.id, plot_number)

            return PlotMutationResponse(
                message=f"{plot.plot_number} updated!",
                data=PlotResponse.model_validate(plot),
            )

        except PlotRegistryError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating plot %s: %s", payload.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the plot. Please try again.",
                context={"plot_id": str(payload.id)},
            )

    async def delete_plot(
        self, db: AsyncSession, payload: PlotDeleteRequest
    ) -> MessageResponse:
        """
        Permanently remove a plot.

        Raises:
            ValidationError: id missing, or no plot has this id (→ 400)
            DatabaseError: Query execution failed (→ 500)
        """
        if not payload.id:
            raise ValidationError(message="Plot ID Required", field="id")

        try:
            plot = await self._find_plot(db, payload.id)
            if plot is None:
                raise ValidationError(
                    message="Plot not found!",
                    context={"resource": "plot", "resource_id": str(payload.id)},
                )

            plot_id, plot_number = plot.id, plot.plot_number
            await db.delete(plot)
            await db.flush()
            logger.info("Plot %s deleted: %s", plot_id, plot_number)

            return MessageResponse(message=f"Plot {plot_number} with ID {plot_id} deleted")

        except PlotRegistryError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting plot %s: %s", payload.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the plot. Please try again.",
                context={"plot_id": str(payload.id)},
            )

    # ── Validation Helpers ────────────────────────────────────────────────

    @staticmethod
    def _check_required(payload: PlotCreateRequest) -> None:
        missing = [
            wire_name
            for attr, wire_name in REQUIRED_FIELDS.items()
            if not getattr(payload, attr)
        ]
        if missing:
            raise ValidationError(
                message="All fields are required",
                context={"missing": missing},
            )

    @staticmethod
    def _check_values(payload: PlotCreateRequest) -> None:
        """Evaluates every enum/range rule, then raises once for all failures."""
        errors = []
        if payload.area_unit not in ALLOWED_AREA_UNITS:
            errors.append({"field": "areaUnit", "message": "Invalid unit for area!"})
        if payload.category not in ALLOWED_CATEGORIES:
            errors.append({"field": "category", "message": "Invalid plot category!"})
        if payload.plot_type not in ALLOWED_PLOT_TYPES:
            errors.append({"field": "plotType", "message": "Invalid plot type!"})
        # NaN and Infinity parse as floats and slip past a plain `<= 0`
        if payload.area is not None and not (math.isfinite(payload.area) and payload.area > 0):
            errors.append({"field": "area", "message": "Area must be a positive number!"})
        if payload.plot_number is not None and len(str(payload.plot_number)) > PLOT_NUMBER_MAX_LENGTH:
            errors.append({
                "field": "plotNumber",
                "message": f"Plot number must be at most {PLOT_NUMBER_MAX_LENGTH} characters!",
            })

        if errors:
            raise ValidationError(
                message=" ".join(error["message"] for error in errors),
                context={"errors": errors},
            )

    # ── Store Helpers ─────────────────────────────────────────────────────

    @staticmethod
    async def _find_plot(db: AsyncSession, plot_id: object) -> Optional[Plot]:
        uid = parse_id(plot_id)
        if uid is None:
            return None
        result = await db.execute(select(Plot).where(Plot.id == uid))
        return result.scalar_one_or_none()

    @staticmethod
    async def _require_block(db: AsyncSession, block_id: Optional[str]) -> uuid.UUID:
        uid = parse_id(block_id)
        block = None
        if uid is not None:
            result = await db.execute(select(Block).where(Block.id == uid))
            block = result.scalar_one_or_none()
        if block is None:
            raise ConflictError(message="Block not found!", context={"block_id": str(block_id)})
        return block.id

    @staticmethod
    async def _check_duplicate_number(
        db: AsyncSession, plot_number: str, exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        query = select(Plot).where(Plot.plot_number == plot_number)
        if exclude_id is not None:
            query = query.where(Plot.id != exclude_id)
        result = await db.execute(query.limit(1))
        if result.scalars().first() is not None:
            raise ConflictError(
                message="Duplicate plot number",
                context={"plot_number": plot_number},
            )

    @staticmethod
    async def _flush(db: AsyncSession, plot_number: str, invalid_message: str) -> None:
        """
        Flush pending changes, mapping constraint violations to client errors.

        The only unique constraint on plots is plot_number, so an
        IntegrityError here means another writer took the number first.
        """
        try:
            await db.flush()
        except IntegrityError as e:
            if "plot_number" in str(e.orig):
                logger.warning("Unique index rejected plot number %s", plot_number)
                raise ConflictError(
                    message="Duplicate plot number",
                    context={"plot_number": plot_number},
                )
            logger.warning("Store rejected plot %s: %s", plot_number, str(e.orig))
            raise ValidationError(message=invalid_message)
        except DataError as e:
            # Values the column types cannot hold (length, range)
            logger.warning("Store rejected plot %s: %s", plot_number, str(e.orig))
            raise ValidationError(message=invalid_message)

    async def _populate(self, db: AsyncSession, plots: Sequence[Plot]) -> List[PlotDetail]:
        """Replaces block_id / customer_id with the referenced records."""
        blocks = await self._load_by_ids(db, Block, (plot.block_id for plot in plots))
        customers = await self._load_by_ids(
            db, Customer, (plot.customer_id for plot in plots)
        )
        return [
            self._to_detail(plot, blocks.get(plot.block_id), customers.get(plot.customer_id))
            for plot in plots
        ]

    @staticmethod
    async def _load_by_ids(db: AsyncSession, model, ids: Iterable[Optional[uuid.UUID]]) -> Dict:
        wanted = {uid for uid in ids if uid is not None}
        if not wanted:
            return {}
        result = await db.execute(select(model).where(model.id.in_(wanted)))
        return {record.id: record for record in result.scalars().all()}

    @staticmethod
    def _to_detail(
        plot: Plot, block: Optional[Block], customer: Optional[Customer]
    ) -> PlotDetail:
        return PlotDetail(
            id=plot.id,
            block_id=BlockResponse.model_validate(block) if block else None,
            customer_id=CustomerResponse.model_validate(customer) if customer else None,
            plot_number=plot.plot_number,
            plot_type=plot.plot_type,
            area_unit=plot.area_unit,
            area=plot.area,
            category=plot.category,
            is_cornered=plot.is_cornered,
            created_at=plot.created_at,
            updated_at=plot.updated_at,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
# PlotService is stateless; the session is passed to every call
plot_service = PlotService()
