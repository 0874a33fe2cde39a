from fastapi import APIRouter, Depends

from parcels.deps import get_ledger
from parcels.models.history import HistoryRow, StatusPush
from parcels.services.history import HistoryLedger

router = APIRouter()


@router.get("", response_model=HistoryRow)
async def get_history(codigo: str | None = None, ledger: HistoryLedger = Depends(get_ledger)):
    """History row for a tracking code."""
    return await ledger.get(codigo)


@router.post("/{codigo}", response_model=HistoryRow)
async def push_status(codigo: str, push: StatusPush, ledger: HistoryLedger = Depends(get_ledger)):
    """Append a status to the history of a tracking code."""
    return await ledger.push(codigo, push.label, push.on)
