"""
Shared API dependencies.

Reusable FastAPI dependencies for services and the reference instant.
"""

import datetime
from typing import Optional

from fastapi import Depends, Query
from sqlmodel import Session

from app.db.session import get_db
from app.services.caffeine_service import CaffeineService


def get_caffeine_service(db: Session = Depends(get_db)) -> CaffeineService:
    return CaffeineService(db)


def get_now(
    as_of: Optional[datetime.datetime] = Query(
        None, description="Reference instant (defaults to now, in the user's timezone)"
    ),
    service: CaffeineService = Depends(get_caffeine_service),
) -> datetime.datetime:
    """Sample ``now`` once per request, in the user's timezone."""
    return service.resolve_now(as_of)
