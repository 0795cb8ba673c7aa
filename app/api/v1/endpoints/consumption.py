"""
Consumption endpoints.

Dose logging CRUD.  Edits may only change the mg / consumed_at pair.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.consumption import (
    ConsumptionEventCreate,
    ConsumptionEventResponse,
    ConsumptionEventUpdate,
)
from app.services.consumption_service import ConsumptionService

router = APIRouter()


@router.post("", summary="Log a dose.", response_model=ConsumptionEventResponse,
             status_code=status.HTTP_201_CREATED, )
def log_dose(data: ConsumptionEventCreate, db: Session = Depends(get_db), ):
    return ConsumptionService(db).create(data)


@router.get("", summary="List logged doses.", response_model=list[ConsumptionEventResponse], )
def list_doses(start: Optional[datetime.datetime] = Query(None, description="Range start (inclusive)"),
               end: Optional[datetime.datetime] = Query(None, description="Range end (inclusive)"),
               skip: int = Query(0, ge=0, description="Records to skip"),
               limit: int = Query(100, ge=1, le=500, description="Max records to return"),
               db: Session = Depends(get_db), ):
    """
    Query doses. Filter precedence:
    - start (+ optional end): returns doses in range, oldest first
    - no filters: returns paginated list (most recent first)
    """
    service = ConsumptionService(db)
    if start:
        return service.get_range(start, end)
    return service.get_latest(skip, limit)


@router.get("/{event_id}", summary="Get a logged dose.", response_model=ConsumptionEventResponse, )
def get_dose(event_id: int, db: Session = Depends(get_db), ):
    return ConsumptionService(db).get_by_id(event_id)


@router.patch("/{event_id}", summary="Edit the amount or time of a dose.", response_model=ConsumptionEventResponse, )
def update_dose(event_id: int, data: ConsumptionEventUpdate, db: Session = Depends(get_db), ):
    return ConsumptionService(db).update(event_id, data)


@router.delete("/{event_id}", summary="Delete a logged dose.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_dose(event_id: int, db: Session = Depends(get_db), ):
    ConsumptionService(db).delete(event_id)
