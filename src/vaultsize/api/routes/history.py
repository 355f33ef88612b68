"""History endpoints."""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from vaultsize.api.deps import AggregatorDep
from vaultsize.core.aggregator import HistoryAggregator
from vaultsize.core.chart import build_chart_config, to_chart_points
from vaultsize.core.errors import CatalogUnavailableError, HistoryError
from vaultsize.core.types import ChartPoint, SizeHistory

logger = logging.getLogger(__name__)

router = APIRouter()


class ChartResponse(BaseModel):
    """Chart points plus a renderer-ready config."""

    points: list[ChartPoint]
    config: dict


def _vault_name(aggregator: HistoryAggregator) -> str:
    name = getattr(aggregator.catalog, "name", None)
    return name if isinstance(name, str) and name else "vault"


@router.get("/history", response_model=SizeHistory)
async def get_history(aggregator: AggregatorDep) -> SizeHistory:
    """
    Get the persisted history without running a cycle.

    Returns:
        Current size history
    """
    try:
        return await asyncio.to_thread(aggregator.get_history)
    except HistoryError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        ) from e


@router.post("/history/update", response_model=SizeHistory)
async def update_history(aggregator: AggregatorDep) -> SizeHistory:
    """
    Run one aggregation cycle (manual trigger).

    Returns:
        Updated size history
    """
    try:
        return await asyncio.to_thread(aggregator.update)
    except CatalogUnavailableError as e:
        logger.warning("Update skipped: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Vault unavailable: {e}",
        ) from e
    except HistoryError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        ) from e


@router.get("/history/chart", response_model=ChartResponse)
async def get_chart(aggregator: AggregatorDep) -> ChartResponse:
    """
    Get the history as XY chart data.

    Returns:
        Chart points and chart config
    """
    try:
        history = await asyncio.to_thread(aggregator.get_history)
    except HistoryError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        ) from e

    return ChartResponse(
        points=to_chart_points(history),
        config=build_chart_config(history, _vault_name(aggregator)),
    )
