from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ecoscore.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    open_id = Column(String(64), unique=True, index=True, nullable=False)
    name = Column(String)
    email = Column(String(320))
    role = Column(String(20), default="user", nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_signed_in = Column(DateTime, default=datetime.utcnow)

    favorites = relationship(
        "Favorite", back_populates="user", cascade="all, delete-orphan"
    )
    comparisons = relationship(
        "Comparison", back_populates="user", cascade="all, delete-orphan"
    )
    batch_shares = relationship(
        "BatchShare", back_populates="user", cascade="all, delete-orphan"
    )
    notifications = relationship(
        "Notification", back_populates="user", cascade="all, delete-orphan"
    )
    preferences = relationship(
        "UserPreference",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User(id={self.id}, open_id={self.open_id}, email={self.email})>"
