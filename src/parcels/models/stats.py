from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StatsFilter(str, Enum):
    GENERAL = "general"
    AIR = "air"
    SEA = "sea"


FILTER_NAMES: dict[str, StatsFilter] = {
    "general": StatsFilter.GENERAL,
    "air": StatsFilter.AIR,
    "aereo": StatsFilter.AIR,
    "sea": StatsFilter.SEA,
    "maritimo": StatsFilter.SEA,
}


class Bucket(str, Enum):
    READY = "ready"
    RECEIVED = "received"
    IN_TRANSIT = "in_transit"
    CUSTOMS = "customs"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusCounts(_CamelModel):
    ready: int = 0
    received: int = 0
    in_transit: int = 0
    customs: int = 0

    def add(self, bucket: Bucket) -> None:
        setattr(self, bucket.value, getattr(self, bucket.value) + 1)

    @property
    def total(self) -> int:
        return self.ready + self.received + self.in_transit + self.customs


class DashboardStats(_CamelModel):
    counts: StatusCounts
    revenue: float
    total_weight: float
    total: int
