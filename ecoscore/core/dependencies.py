from datetime import datetime
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from ecoscore.core.database import get_db
from ecoscore.core.security import decode_token
from ecoscore.models.user import User
from ecoscore.services.open_food_facts import OpenFoodFactsClient

security = HTTPBearer(auto_error=False)


def _upsert_user_from_payload(payload: dict, db: Session) -> Optional[User]:
    open_id = payload.get("sub")
    if not open_id:
        return None

    open_id = str(open_id)
    user = db.query(User).filter(User.open_id == open_id).first()

    if not user:
        user = User(open_id=open_id)
        db.add(user)

    if payload.get("name"):
        user.name = payload["name"]
    if payload.get("email"):
        user.email = payload["email"]
    user.last_signed_in = datetime.utcnow()

    db.commit()
    db.refresh(user)
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)
    user = _upsert_user_from_payload(payload, db)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except HTTPException:
        return None

    return _upsert_user_from_payload(payload, db)


def get_product_source(request: Request) -> OpenFoodFactsClient:
    """Client Open Food Facts créé dans le lifespan de l'application"""
    return request.app.state.product_source
