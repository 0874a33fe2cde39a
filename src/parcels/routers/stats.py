import logging

from fastapi import APIRouter, Depends

from parcels.deps import get_aggregator
from parcels.models.stats import FILTER_NAMES, DashboardStats, StatsFilter
from parcels.services.stats import StatusAggregator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DashboardStats)
async def get_stats(filter: str = "general", aggregator: StatusAggregator = Depends(get_aggregator)):
    """Dashboard counts and totals for general, air or sea shipments."""
    stats_filter = FILTER_NAMES.get(filter.strip().lower())
    if stats_filter is None:
        logger.warning(f"Unknown stats filter {filter!r}, using general")
        stats_filter = StatsFilter.GENERAL
    return await aggregator.compute_stats(stats_filter)
