import abc
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

SHIPMENTS = "paquetes"
HISTORY = "historial"
REMINDERS = "recordatorios"

# Column names per table, used by adapters to reject unknown columns.
SCHEMA: dict[str, tuple[str, ...]] = {
    SHIPMENTS: (
        "id",
        "nombre_cliente",
        "codigo_seguimiento",
        "telefono",
        "tipo_envio_id",
        "peso_libras",
        "tarifa_usd",
        "fecha_estado",
        "created_at",
    ),
    HISTORY: (
        "id",
        "codigo_seguimiento",
        "estado1",
        "fecha1",
        "estado2",
        "fecha2",
        "estado3",
        "fecha3",
        "estado4",
        "fecha4",
    ),
    REMINDERS: ("id", "titulo", "descripcion", "fecha_limite"),
}

Row = dict[str, Any]


@dataclass(frozen=True)
class Eq:
    """Exact match. A value of None matches NULL."""

    column: str
    value: Any


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match."""

    column: str
    text: str


@dataclass(frozen=True)
class In:
    """Set membership."""

    column: str
    values: tuple[Any, ...]

    def __init__(self, column: str, values: Iterable[Any]):
        object.__setattr__(self, "column", column)
        object.__setattr__(self, "values", tuple(values))


Filter = Eq | Contains | In


def check_columns(table: str, columns: Iterable[str]) -> None:
    """Raise ValueError for a table or column outside SCHEMA."""
    known = SCHEMA.get(table)
    if known is None:
        raise ValueError(f"Unknown table: {table}")
    unknown = [c for c in columns if c not in known]
    if unknown:
        raise ValueError(f"Unknown columns for {table}: {', '.join(unknown)}")


class Store(abc.ABC):
    """Async filter-based access to the shipment store.

    Filters in a sequence are combined with AND. Implementations raise
    ``StoreError`` on backend failure and ``ConflictError`` when an insert
    violates a uniqueness constraint.
    """

    @abc.abstractmethod
    async def find_one(self, table: str, filters: Sequence[Filter]) -> Row | None: ...

    @abc.abstractmethod
    async def find_many(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        columns: Sequence[str] | None = None,
        order_by: str | None = None,
    ) -> list[Row]: ...

    @abc.abstractmethod
    async def insert(self, table: str, row: Row) -> Row: ...

    @abc.abstractmethod
    async def update(self, table: str, filters: Sequence[Filter], changes: Row) -> list[Row]: ...

    @abc.abstractmethod
    async def delete(self, table: str, filters: Sequence[Filter]) -> list[Row]: ...

    async def close(self) -> None:
        """Release adapter resources."""
