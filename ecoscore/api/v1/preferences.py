from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ecoscore.core.database import get_db
from ecoscore.core.dependencies import get_current_user
from ecoscore.models.user import User
from ecoscore.schemas.preference import PreferenceResponse, PreferenceUpdate
from ecoscore.services.preference_service import PreferenceService

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("", response_model=PreferenceResponse)
def get_preferences(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PreferenceService(db).get_or_create(current_user.id)


@router.put("", response_model=PreferenceResponse)
def update_preferences(
    request: PreferenceUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PreferenceService(db).update(
        current_user.id, request.dict(exclude_unset=True)
    )
