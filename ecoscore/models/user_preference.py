from sqlalchemy import Column, Integer, Boolean, Float, ForeignKey, JSON, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ecoscore.core.database import Base


class UserPreference(Base):
    __tablename__ = "user_preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    enable_price_drop_notifications = Column(Boolean, default=True, nullable=False)
    enable_new_alternative_notifications = Column(Boolean, default=True, nullable=False)
    price_drop_threshold = Column(Float, default=10.0)
    preferred_categories = Column(JSON, default=list)
    min_eco_score = Column(Integer, default=50)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="preferences")

    def __repr__(self):
        return f"<UserPreference(user_id={self.user_id}, min_eco_score={self.min_eco_score})>"
