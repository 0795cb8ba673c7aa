"""
Sleep check-in endpoints.

One check-in per local date; the previous day's caffeine is captured on
submission.
"""

import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session

from app.api.dependencies import get_now
from app.db.session import get_db
from app.schemas.sleep_checkin import CheckinPromptResponse, SleepCheckinCreate, SleepCheckinResponse
from app.services.sleep_checkin_service import SleepCheckinService

router = APIRouter()


@router.post("", summary="Record today's sleep check-in.", response_model=SleepCheckinResponse, )
def submit_checkin(data: SleepCheckinCreate, response: Response,
                   replace: bool = Query(True, description="Replace an existing check-in for today"),
                   now: datetime.datetime = Depends(get_now), db: Session = Depends(get_db), ):
    """Creates today's check-in, or replaces it (409 when ``replace=false``)."""
    entry, created = SleepCheckinService(db).submit(data, now, replace=replace)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return entry


@router.get("", summary="List sleep check-ins.", response_model=list[SleepCheckinResponse], )
def list_checkins(db: Session = Depends(get_db), ):
    return SleepCheckinService(db).get_all()


@router.get("/prompt", summary="Should the morning check-in prompt be shown?", response_model=CheckinPromptResponse, )
def get_prompt(now: datetime.datetime = Depends(get_now), db: Session = Depends(get_db), ):
    return SleepCheckinService(db).prompt(now)


@router.get("/{date}", summary="Get the check-in for a date.", response_model=SleepCheckinResponse, )
def get_checkin(date: datetime.date, db: Session = Depends(get_db), ):
    return SleepCheckinService(db).get_by_date(date)


@router.delete("/{checkin_id}", summary="Delete a sleep check-in.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_checkin(checkin_id: int, db: Session = Depends(get_db), ):
    SleepCheckinService(db).delete(checkin_id)
