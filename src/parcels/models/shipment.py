from datetime import date, datetime
from enum import IntEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from parcels.models.fields import StoredDate, Text


class ShipmentMode(IntEnum):
    AIR = 1
    SEA = 2


MODE_NAMES: dict[str, ShipmentMode] = {
    "air": ShipmentMode.AIR,
    "aereo": ShipmentMode.AIR,
    "sea": ShipmentMode.SEA,
    "maritimo": ShipmentMode.SEA,
}


class Shipment(BaseModel):
    """A shipment row as stored. Weight and rate are kept raw."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    customer_name: str | None = Field(None, alias="nombre_cliente")
    tracking_code: str | None = Field(None, alias="codigo_seguimiento")
    phone: str | None = Field(None, alias="telefono")
    mode: int | None = Field(None, alias="tipo_envio_id")
    weight_lb: float | str | None = Field(None, alias="peso_libras")
    rate_usd: float | str | None = Field(None, alias="tarifa_usd")
    status_date: StoredDate = Field(None, alias="fecha_estado")
    created_at: datetime | date | None = None


class ShipmentIntake(BaseModel):
    """Intake payload. Accepts the field spellings older clients send."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    customer_name: Text = Field(
        None, validation_alias=AliasChoices("nombre_cliente", "cliente", "nombre")
    )
    tracking_code: Text = Field(None, validation_alias=AliasChoices("codigo_seguimiento", "codigo"))
    phone: Text = Field(None, validation_alias=AliasChoices("telefono", "phone"))
    mode: ShipmentMode | None = Field(None, validation_alias=AliasChoices("tipo_envio_id", "tipo"))
    weight_lb: float | None = Field(None, validation_alias=AliasChoices("peso_libras", "peso"))
    rate_usd: float | None = Field(None, validation_alias=AliasChoices("tarifa_usd", "tarifa"))
    status_date: date | None = Field(None, validation_alias=AliasChoices("fecha_estado", "fecha"))

    @field_validator("mode", mode="before")
    @classmethod
    def parse_mode(cls, value: Any) -> Any:
        if isinstance(value, str):
            name = value.strip().lower()
            if not name:
                return None
            if name in MODE_NAMES:
                return MODE_NAMES[name]
            if name.isdigit():
                return int(name)
        return value

    def to_row(self) -> dict[str, Any]:
        return {
            "nombre_cliente": self.customer_name,
            "codigo_seguimiento": self.tracking_code,
            "telefono": self.phone,
            "tipo_envio_id": int(self.mode) if self.mode is not None else None,
            "peso_libras": self.weight_lb,
            "tarifa_usd": self.rate_usd,
            "fecha_estado": self.status_date.isoformat() if self.status_date else None,
        }


class ShipmentUpdate(BaseModel):
    """Changes to a shipment, plus an optional status label for its history."""

    weight_lb: float | None = Field(None, validation_alias=AliasChoices("peso_libras", "peso"))
    rate_usd: float | None = Field(None, validation_alias=AliasChoices("tarifa_usd", "tarifa"))
    status_date: date | None = Field(None, validation_alias=AliasChoices("fecha_estado", "fecha"))
    status: Text = Field(None, validation_alias=AliasChoices("estado", "status"))

    def changes(self) -> dict[str, Any]:
        """Columns to write, limited to fields the caller actually sent."""
        columns = {
            "weight_lb": ("peso_libras", self.weight_lb),
            "rate_usd": ("tarifa_usd", self.rate_usd),
            "status_date": (
                "fecha_estado",
                self.status_date.isoformat() if self.status_date else None,
            ),
        }
        return {
            column: value
            for field, (column, value) in columns.items()
            if field in self.model_fields_set
        }


class ShipmentSearch(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Text = Field(None, validation_alias=AliasChoices("nombre", "nombre_cliente"))
    phone: Text = Field(None, validation_alias=AliasChoices("telefono", "phone"))
