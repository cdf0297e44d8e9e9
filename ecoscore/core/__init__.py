from ecoscore.core.config import settings
from ecoscore.core.database import Base, engine, SessionLocal, get_db
from ecoscore.core.security import create_access_token, decode_token

__all__ = [
    "settings",
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "create_access_token",
    "decode_token",
]
