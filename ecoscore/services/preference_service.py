from sqlalchemy.orm import Session
from typing import Any, Dict

from ecoscore.middleware.transaction_handler import transactional
from ecoscore.models.user_preference import UserPreference


class PreferenceService:
    def __init__(self, db: Session):
        self.db = db

    @transactional
    def get_or_create(self, user_id: int) -> UserPreference:
        """Préférences de l'utilisateur, créées avec les valeurs par défaut au besoin"""
        prefs = (
            self.db.query(UserPreference)
            .filter(UserPreference.user_id == user_id)
            .first()
        )
        if prefs:
            return prefs

        prefs = UserPreference(
            user_id=user_id,
            enable_price_drop_notifications=True,
            enable_new_alternative_notifications=True,
            price_drop_threshold=10.0,
            preferred_categories=[],
            min_eco_score=50,
        )
        self.db.add(prefs)
        self.db.flush()
        return prefs

    @transactional
    def update(self, user_id: int, update_data: Dict[str, Any]) -> UserPreference:
        prefs = self.get_or_create(user_id)
        for key, value in update_data.items():
            setattr(prefs, key, value)
        return prefs
