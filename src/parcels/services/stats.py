import logging
import math
import unicodedata
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from parcels.errors import ValidationError
from parcels.models.history import latest_label
from parcels.models.shipment import ShipmentMode
from parcels.models.stats import Bucket, DashboardStats, StatsFilter, StatusCounts
from parcels.storage.base import HISTORY, SHIPMENTS, Eq, In, Store

logger = logging.getLogger(__name__)

# Checked in order; the first keyword found in the normalized status wins.
STATUS_RULES: list[tuple[str, Bucket]] = [
    ("listo", Bucket.READY),
    ("recib", Bucket.RECEIVED),
    ("transit", Bucket.IN_TRANSIT),
    ("aduan", Bucket.CUSTOMS),
]

FILTER_MODES: dict[StatsFilter, ShipmentMode | None] = {
    StatsFilter.GENERAL: None,
    StatsFilter.AIR: ShipmentMode.AIR,
    StatsFilter.SEA: ShipmentMode.SEA,
}

_CENT = Decimal("0.01")
_EPSILON = Decimal("1e-9")


def normalize_status(label: str) -> str:
    """Trim, lower-case and strip diacritics."""
    decomposed = unicodedata.normalize("NFKD", label.strip().lower())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def bucket_for(label: str | None) -> Bucket | None:
    if not label:
        return None
    status = normalize_status(label)
    for keyword, bucket in STATUS_RULES:
        if keyword in status:
            return bucket
    return None


def to_number(value: Any) -> float | None:
    """Coerce a stored weight or rate. Missing is 0, garbage is None."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def round_money(value: float) -> float:
    """Round to cents, half away from zero."""
    amount = Decimal(repr(value))
    amount += _EPSILON if amount >= 0 else -_EPSILON
    return float(amount.quantize(_CENT, rounding=ROUND_HALF_UP))


def sum_revenue_and_weight(shipments: list[dict[str, Any]]) -> tuple[float, float]:
    revenue = 0.0
    weight = 0.0
    for shipment in shipments:
        pounds = to_number(shipment.get("peso_libras"))
        if pounds is None:
            continue
        rate = to_number(shipment.get("tarifa_usd")) or 0.0
        weight += pounds
        revenue += pounds * rate
    return round_money(revenue), round_money(weight)


class StatusAggregator:
    def __init__(self, store: Store):
        self.store = store

    async def compute_stats(self, stats_filter: StatsFilter | str = StatsFilter.GENERAL) -> DashboardStats:
        try:
            stats_filter = StatsFilter(stats_filter)
        except ValueError as e:
            raise ValidationError(f"Unknown stats filter: {stats_filter!r}") from e
        mode = FILTER_MODES[stats_filter]
        filters = [Eq("tipo_envio_id", int(mode))] if mode is not None else []
        shipments = await self.store.find_many(
            SHIPMENTS, filters, columns=["codigo_seguimiento", "tarifa_usd", "peso_libras"]
        )

        codes = {s["codigo_seguimiento"] for s in shipments if s.get("codigo_seguimiento")}
        if codes:
            rows = await self.store.find_many(HISTORY, [In("codigo_seguimiento", sorted(codes))])
        else:
            logger.warning(f"No tracking codes for filter {stats_filter.value}; scanning all history rows")
            rows = await self.store.find_many(HISTORY)

        counts = StatusCounts()
        for row in rows:
            bucket = bucket_for(latest_label(row))
            if bucket is not None:
                counts.add(bucket)

        revenue, total_weight = sum_revenue_and_weight(shipments)
        return DashboardStats(
            counts=counts,
            revenue=revenue,
            total_weight=total_weight,
            total=counts.total,
        )
