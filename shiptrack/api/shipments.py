from typing import List

from fastapi import APIRouter, Depends, HTTPException

from shiptrack.api.deps import get_current_principal, get_shipment_service
from shiptrack.core.errors import NotFoundError, UnauthorizedError
from shiptrack.schemas import (
    CompleteDelivery,
    Principal,
    ShipmentCreate,
    ShipmentOut,
    ShipmentStats,
    ShipmentUpdate,
)
from shiptrack.services.shipment_service import ShipmentService

router = APIRouter()  # main.py mounts at /api/shipments


@router.get("", response_model=List[ShipmentOut])
def list_shipments(principal: Principal = Depends(get_current_principal),
                   service: ShipmentService = Depends(get_shipment_service)):
    return service.list_for(principal)


@router.get("/stats", response_model=ShipmentStats)
def shipment_stats(principal: Principal = Depends(get_current_principal),
                   service: ShipmentService = Depends(get_shipment_service)):
    return service.stats(principal)


@router.get("/{shipment_id}", response_model=ShipmentOut)
def get_shipment(shipment_id: int,
                 principal: Principal = Depends(get_current_principal),
                 service: ShipmentService = Depends(get_shipment_service)):
    try:
        return service.get_by_id(shipment_id, principal)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Shipment not found") from None
    except UnauthorizedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from None


@router.post("", response_model=ShipmentOut, status_code=201)
def create_shipment(payload: ShipmentCreate,
                    principal: Principal = Depends(get_current_principal),
                    service: ShipmentService = Depends(get_shipment_service)):
    return service.create(payload.model_dump(exclude_unset=True), principal)


@router.put("/{shipment_id}", response_model=ShipmentOut)
def update_shipment(shipment_id: int, payload: ShipmentUpdate,
                    principal: Principal = Depends(get_current_principal),
                    service: ShipmentService = Depends(get_shipment_service)):
    try:
        return service.update(shipment_id, payload.model_dump(exclude_unset=True), principal)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Shipment not found") from None
    except UnauthorizedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from None


@router.post("/{shipment_id}/complete", response_model=ShipmentOut)
def complete_delivery(shipment_id: int, payload: CompleteDelivery,
                      principal: Principal = Depends(get_current_principal),
                      service: ShipmentService = Depends(get_shipment_service)):
    try:
        return service.complete_delivery(shipment_id, payload.model_dump(exclude_none=True), principal)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Shipment not found") from None
    except UnauthorizedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from None


@router.delete("/{shipment_id}")
def delete_shipment(shipment_id: int,
                    principal: Principal = Depends(get_current_principal),
                    service: ShipmentService = Depends(get_shipment_service)):
    try:
        service.delete(shipment_id, principal)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Shipment not found") from None
    except UnauthorizedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from None
    return {"message": "Shipment deleted"}
