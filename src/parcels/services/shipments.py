import logging

from parcels.errors import NotFoundError, StoreError, ValidationError
from parcels.models.shipment import Shipment, ShipmentIntake, ShipmentSearch, ShipmentUpdate
from parcels.services.history import HistoryLedger
from parcels.storage.base import SHIPMENTS, Contains, Eq, Store

logger = logging.getLogger(__name__)


class ShipmentService:
    def __init__(self, store: Store, ledger: HistoryLedger):
        self.store = store
        self.ledger = ledger

    async def create(self, intake: ShipmentIntake) -> Shipment:
        """Insert a shipment and make sure its history row exists."""
        row = await self.store.insert(SHIPMENTS, intake.to_row())
        shipment = Shipment.model_validate(row)

        if shipment.tracking_code:
            try:
                await self.ledger.ensure(shipment.tracking_code)
            except StoreError:
                # The shipment is saved; a missing history row is created on first push.
                logger.exception(f"Could not create history for {shipment.tracking_code}")

        return shipment

    async def find(self, code: str | None = None) -> list[Shipment]:
        filters = [Eq("codigo_seguimiento", code)] if code else []
        rows = await self.store.find_many(SHIPMENTS, filters)
        return [Shipment.model_validate(r) for r in rows]

    async def get(self, shipment_id: int) -> Shipment:
        row = await self.store.find_one(SHIPMENTS, [Eq("id", shipment_id)])
        if row is None:
            raise NotFoundError(f"No shipment with id {shipment_id}")
        return Shipment.model_validate(row)

    async def update(self, code: str, update: ShipmentUpdate) -> list[Shipment]:
        """Update shipments by tracking code and record any new status."""
        code = (code or "").strip()
        if not code:
            raise ValidationError("codigo_seguimiento is required to update a shipment")
        changes = update.changes()
        if not changes and not update.status:
            raise ValidationError("No fields to update")

        rows = await self.store.update(SHIPMENTS, [Eq("codigo_seguimiento", code)], changes)
        if not rows:
            raise NotFoundError(f"No shipment with tracking code {code}")

        if update.status:
            try:
                await self.ledger.push(code, update.status, update.status_date)
            except StoreError:
                logger.exception(f"Could not record status {update.status!r} for {code}")

        return [Shipment.model_validate(r) for r in rows]

    async def search(self, query: ShipmentSearch) -> list[Shipment]:
        """Find shipments by customer name (contains) or phone (exact)."""
        if not query.name and not query.phone:
            raise ValidationError("nombre or telefono is required to search")

        found: dict[int, dict] = {}
        if query.name:
            for row in await self.store.find_many(SHIPMENTS, [Contains("nombre_cliente", query.name)]):
                found[row["id"]] = row
        if query.phone:
            for row in await self.store.find_many(SHIPMENTS, [Eq("telefono", query.phone)]):
                found[row["id"]] = row

        return [Shipment.model_validate(found[k]) for k in sorted(found)]
