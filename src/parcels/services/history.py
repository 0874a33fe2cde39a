import logging
from datetime import date

from parcels.errors import ConflictError, NotFoundError, ValidationError
from parcels.models.history import HistoryRow, date_column, empty_slots, label_column
from parcels.storage.base import HISTORY, Eq, Store

logger = logging.getLogger(__name__)

MAX_PUSH_ATTEMPTS = 5


def _require_code(code: str | None) -> str:
    if not code or not code.strip():
        raise ValidationError("codigo_seguimiento is required for history operations")
    return code.strip()


class HistoryLedger:
    """Four-slot status history per tracking code.

    Slot writes are conditional on the label read just before the write, so
    two concurrent pushes for the same code land in separate slots instead of
    overwriting each other.
    """

    def __init__(self, store: Store):
        self.store = store

    async def get(self, code: str | None) -> HistoryRow:
        code = _require_code(code)
        row = await self.store.find_one(HISTORY, [Eq("codigo_seguimiento", code)])
        if row is None:
            raise NotFoundError(f"No history for {code}")
        return HistoryRow.model_validate(row)

    async def ensure(self, code: str | None) -> HistoryRow:
        """Return the history row for a code, creating an empty one if missing."""
        code = _require_code(code)
        row = await self.store.find_one(HISTORY, [Eq("codigo_seguimiento", code)])
        if row is not None:
            return HistoryRow.model_validate(row)

        try:
            row = await self.store.insert(HISTORY, {"codigo_seguimiento": code, **empty_slots()})
            logger.info(f"Created history for {code}")
        except ConflictError:
            # Another caller created it between our read and insert.
            row = await self.store.find_one(HISTORY, [Eq("codigo_seguimiento", code)])
            if row is None:
                raise
        return HistoryRow.model_validate(row)

    async def push(self, code: str | None, label: str | None, on: date | None = None) -> HistoryRow:
        """Write a status into the first free slot, or slot 4 when full."""
        code = _require_code(code)
        if not label or not label.strip():
            raise ValidationError("estado is required to push a status")
        on = on or date.today()

        for attempt in range(1, MAX_PUSH_ATTEMPTS + 1):
            current = await self.ensure(code)
            slot = current.target_slot()
            previous = getattr(current, f"status{slot}")

            updated = await self.store.update(
                HISTORY,
                [Eq("codigo_seguimiento", code), Eq(label_column(slot), previous)],
                {label_column(slot): label, date_column(slot): on.isoformat()},
            )
            if updated:
                return HistoryRow.model_validate(updated[0])

            logger.warning(f"Slot {slot} of {code} changed concurrently (attempt {attempt})")

        raise ConflictError(f"Could not record status for {code} after {MAX_PUSH_ATTEMPTS} attempts")
