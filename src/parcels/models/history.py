from datetime import date
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from parcels.models.fields import StoredDate

SLOT_COUNT = 4


def label_column(slot: int) -> str:
    return f"estado{slot}"


def date_column(slot: int) -> str:
    return f"fecha{slot}"


def empty_slots() -> dict[str, None]:
    row: dict[str, None] = {}
    for slot in range(1, SLOT_COUNT + 1):
        row[label_column(slot)] = None
        row[date_column(slot)] = None
    return row


def is_blank(label: Any) -> bool:
    """A slot is free when its label is missing or only whitespace."""
    return not (isinstance(label, str) and label.strip())


def latest_label(row: Mapping[str, Any]) -> str | None:
    """Label of the highest-numbered occupied slot of a stored history row."""
    for slot in range(SLOT_COUNT, 0, -1):
        label = row.get(label_column(slot))
        if not is_blank(label):
            return label
    return None


class HistorySlot(BaseModel):
    label: str | None = None
    on: StoredDate = None

    @property
    def is_free(self) -> bool:
        return is_blank(self.label)


class HistoryRow(BaseModel):
    """Four-slot status timeline for one tracking code."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    tracking_code: str = Field(alias="codigo_seguimiento")
    status1: str | None = Field(None, alias="estado1")
    date1: StoredDate = Field(None, alias="fecha1")
    status2: str | None = Field(None, alias="estado2")
    date2: StoredDate = Field(None, alias="fecha2")
    status3: str | None = Field(None, alias="estado3")
    date3: StoredDate = Field(None, alias="fecha3")
    status4: str | None = Field(None, alias="estado4")
    date4: StoredDate = Field(None, alias="fecha4")

    def slots(self) -> list[HistorySlot]:
        return [
            HistorySlot(label=getattr(self, f"status{n}"), on=getattr(self, f"date{n}"))
            for n in range(1, SLOT_COUNT + 1)
        ]

    def target_slot(self) -> int:
        """First free slot, or the last slot once all are taken."""
        for n, slot in enumerate(self.slots(), start=1):
            if slot.is_free:
                return n
        return SLOT_COUNT

    def latest_status(self) -> str | None:
        return latest_label(self.model_dump(by_alias=True))


class StatusPush(BaseModel):
    label: str = Field(validation_alias=AliasChoices("estado", "status"))
    on: date | None = Field(None, validation_alias=AliasChoices("fecha", "fecha_estado"))
