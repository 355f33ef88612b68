"""FastAPI dependencies for the vault size API."""

from typing import Annotated

from fastapi import Depends

from vaultsize.core.aggregator import HistoryAggregator, get_aggregator


async def get_aggregator_instance() -> HistoryAggregator:
    """
    Get HistoryAggregator instance for request processing.

    Returns:
        HistoryAggregator instance
    """
    return get_aggregator()


AggregatorDep = Annotated[HistoryAggregator, Depends(get_aggregator_instance)]
