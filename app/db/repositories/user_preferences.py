"""User preferences repository."""

from typing import Optional

from sqlmodel import Session, select

from app.models.user_preferences import UserPreferences


class UserPreferencesRepository:
    """Repository for the single UserPreferences row."""

    def __init__(self, session: Session):
        self.session = session

    def get(self) -> Optional[UserPreferences]:
        statement = select(UserPreferences).order_by(UserPreferences.id)
        return self.session.exec(statement).first()

    def create(self, preferences: UserPreferences) -> UserPreferences:
        self.session.add(preferences)
        self.session.commit()
        self.session.refresh(preferences)
        return preferences

    def update(self, preferences: UserPreferences) -> UserPreferences:
        self.session.add(preferences)
        self.session.commit()
        self.session.refresh(preferences)
        return preferences

    def get_or_create(self, defaults: UserPreferences) -> UserPreferences:
        """Get the preferences row, or store ``defaults`` as the first one."""
        existing = self.get()
        if existing:
            return existing
        return self.create(defaults)
