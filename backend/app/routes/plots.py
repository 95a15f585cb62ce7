"""
PlotRegistry Backend — Plot Route Handlers
==========================================

What:  HTTP surface for plots.
How:   Parses the request, delegates to PlotService, returns the envelope.
       Errors raised by the service are rendered by the handlers in main.py.

Routes:
    GET    /plots        list all plots (references populated)
    GET    /plots/{id}   one plot (references populated)
    POST   /plots        create (201)
    PATCH  /plots        update; plot id in the body
    DELETE /plots        delete; plot id in the body
"""

import logging

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.plot import (
    ErrorResponse,
    MessageResponse,
    PlotCreateRequest,
    PlotDeleteRequest,
    PlotDetailResponse,
    PlotListResponse,
    PlotMutationResponse,
    PlotUpdateRequest,
)
from app.services.plot_service import plot_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plots", tags=["Plots"])

_bad_request = {400: {"description": "Invalid or missing input", "model": ErrorResponse}}
_conflict = {409: {"description": "Block missing or duplicate plot number", "model": ErrorResponse}}
_not_found = {404: {"description": "No matching plot", "model": ErrorResponse}}


@router.get(
    "",
    response_model=PlotListResponse,
    responses={**_not_found},
    summary="List all plots",
)
async def list_plots(db: AsyncSession = Depends(get_db_session)) -> PlotListResponse:
    return await plot_service.list_plots(db)


@router.get(
    "/{plot_id}",
    response_model=PlotDetailResponse,
    responses={**_bad_request, **_not_found},
    summary="Get a single plot by ID",
)
async def get_plot(
    plot_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PlotDetailResponse:
    return await plot_service.get_plot(db, plot_id)


@router.post(
    "",
    response_model=PlotMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_bad_request, **_conflict},
    summary="Create a plot",
)
async def create_plot(
    payload: PlotCreateRequest = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> PlotMutationResponse:
    return await plot_service.create_plot(db, payload)


@router.patch(
    "",
    response_model=PlotMutationResponse,
    responses={**_bad_request, **_conflict},
    summary="Update a plot",
    description="Replaces every field of the plot named by `id` in the body.",
)
async def update_plot(
    payload: PlotUpdateRequest = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> PlotMutationResponse:
    return await plot_service.update_plot(db, payload)


@router.delete(
    "",
    response_model=MessageResponse,
    responses={**_bad_request},
    summary="Delete a plot",
)
async def delete_plot(
    payload: PlotDeleteRequest = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await plot_service.delete_plot(db, payload)
