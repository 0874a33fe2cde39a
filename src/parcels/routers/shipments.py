from fastapi import APIRouter, Depends

from parcels.deps import get_shipments
from parcels.models.shipment import Shipment, ShipmentIntake, ShipmentSearch, ShipmentUpdate
from parcels.services.shipments import ShipmentService

router = APIRouter()


@router.post("", response_model=Shipment, status_code=201)
async def create_shipment(
    intake: ShipmentIntake, service: ShipmentService = Depends(get_shipments)
):
    """Register a shipment; its history row is created when it has a code."""
    return await service.create(intake)


@router.get("", response_model=list[Shipment])
async def list_shipments(codigo: str | None = None, service: ShipmentService = Depends(get_shipments)):
    """List shipments, optionally by exact tracking code."""
    return await service.find(codigo)


@router.post("/search", response_model=list[Shipment])
async def search_shipments(query: ShipmentSearch, service: ShipmentService = Depends(get_shipments)):
    """Search by customer name or phone."""
    return await service.search(query)


@router.get("/{shipment_id}", response_model=Shipment)
async def get_shipment(shipment_id: int, service: ShipmentService = Depends(get_shipments)):
    return await service.get(shipment_id)


@router.api_route("/{codigo}", methods=["PUT", "PATCH"], response_model=list[Shipment])
async def update_shipment(
    codigo: str, update: ShipmentUpdate, service: ShipmentService = Depends(get_shipments)
):
    """Update weight, rate or status date; `estado` is appended to the history."""
    return await service.update(codigo, update)
