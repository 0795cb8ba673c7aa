"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.consumption_event import ConsumptionEvent  # noqa: F401
from app.models.sleep_checkin import SleepCheckin  # noqa: F401
from app.models.user_preferences import UserPreferences  # noqa: F401
