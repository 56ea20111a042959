from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from core.query import InventoryFilter
from core.service import ActionKind, InventoryAction, InventoryService, MutationResult
from schemas.inventory import (
    InventoryActionOut,
    InventoryActionRequest,
    InventoryAdjustRequest,
    InventoryItemIn,
    InventoryItemOut,
    InventoryStatus,
    InventorySummaryOut,
    InventoryViewOut,
)

router = APIRouter()


def get_inventory_service(request: Request) -> InventoryService:
    return request.app.state.inventory


def _filters(search: str, status_filter: str) -> InventoryFilter:
    return InventoryFilter(search=search, status=status_filter)


def _raise_for(result: MutationResult) -> None:
    if result.reason == "validation":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    if result.reason == "duplicate_sku":
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.error)
    if result.reason == "not_found":
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    if result.reason == "rejected":
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Quantity cannot go below zero")


@router.get("/items", response_model=List[InventoryItemOut])
def list_items(
    search: str = Query(""),
    status_filter: InventoryStatus = Query("all", alias="status"),
    service: InventoryService = Depends(get_inventory_service),
):
    view = service.view(_filters(search, status_filter))
    return [InventoryItemOut.model_validate(item) for item in view.items]


@router.get("/items/{item_id}", response_model=InventoryItemOut)
def get_item(item_id: str, service: InventoryService = Depends(get_inventory_service)):
    item = service.repository.find(item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return InventoryItemOut.model_validate(item)


@router.post("/items", response_model=InventoryActionOut, status_code=status.HTTP_201_CREATED)
def create_item(payload: InventoryItemIn, service: InventoryService = Depends(get_inventory_service)):
    result = service.submit(payload.model_dump())
    _raise_for(result)
    return InventoryActionOut.model_validate(result, from_attributes=True)


@router.put("/items/{item_id}", response_model=InventoryActionOut)
def update_item(
    item_id: str,
    payload: InventoryItemIn,
    service: InventoryService = Depends(get_inventory_service),
):
    result = service.submit(payload.model_dump(), editing_id=item_id)
    _raise_for(result)
    return InventoryActionOut.model_validate(result, from_attributes=True)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: str,
    confirm: bool = Query(False),
    service: InventoryService = Depends(get_inventory_service),
):
    if not confirm:
        message = service.confirmation_message(item_id) or "Deletion must be confirmed"
        raise HTTPException(status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail=message)

    # an id that is already gone is not an error for the caller
    service.remove(item_id, confirmed=True)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/items/{item_id}/adjust", response_model=InventoryActionOut)
def adjust_item(
    item_id: str,
    payload: InventoryAdjustRequest,
    service: InventoryService = Depends(get_inventory_service),
):
    result = service.adjust(item_id, payload.delta)
    _raise_for(result)
    return InventoryActionOut.model_validate(result, from_attributes=True)


@router.post("/actions", response_model=InventoryActionOut)
def run_action(
    payload: InventoryActionRequest,
    service: InventoryService = Depends(get_inventory_service),
):
    action = InventoryAction(kind=ActionKind(payload.kind), id=payload.id)
    result = service.dispatch(action, confirmed=payload.confirmed)
    return InventoryActionOut.model_validate(result, from_attributes=True)


@router.get("/summary", response_model=InventorySummaryOut)
def get_summary(service: InventoryService = Depends(get_inventory_service)):
    return InventorySummaryOut.model_validate(service.view().summary)


@router.get("/view", response_model=InventoryViewOut)
def get_view(
    search: str = Query(""),
    status_filter: InventoryStatus = Query("all", alias="status"),
    service: InventoryService = Depends(get_inventory_service),
):
    view = service.view(_filters(search, status_filter))
    return InventoryViewOut(
        items=[InventoryItemOut.model_validate(item) for item in view.items],
        summary=InventorySummaryOut.model_validate(view.summary),
        empty_message=view.empty_message,
    )
