from fastapi import Request

from parcels.services.history import HistoryLedger
from parcels.services.reminders import ReminderService
from parcels.services.shipments import ShipmentService
from parcels.services.stats import StatusAggregator
from parcels.storage.base import Store


def get_store(request: Request) -> Store:
    """Store built at startup and kept on the app state."""
    return request.app.state.store


def get_ledger(request: Request) -> HistoryLedger:
    return HistoryLedger(get_store(request))


def get_shipments(request: Request) -> ShipmentService:
    store = get_store(request)
    return ShipmentService(store, HistoryLedger(store))


def get_aggregator(request: Request) -> StatusAggregator:
    return StatusAggregator(get_store(request))


def get_reminders(request: Request) -> ReminderService:
    return ReminderService(get_store(request))
