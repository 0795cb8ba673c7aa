"""
Preference endpoints — bedtime, daily limit, sensitivity, timezone.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.preferences import PreferencesResponse, PreferencesUpdate
from app.services.preferences_service import PreferencesService

router = APIRouter()


@router.get("", summary="Get user preferences.", response_model=PreferencesResponse, )
def get_preferences(db: Session = Depends(get_db), ):
    return PreferencesService(db).get_response()


@router.patch("", summary="Update user preferences.", response_model=PreferencesResponse, )
def update_preferences(data: PreferencesUpdate, db: Session = Depends(get_db), ):
    return PreferencesService(db).update(data)
