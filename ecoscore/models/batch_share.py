from sqlalchemy import Column, Integer, String, Text, ForeignKey, JSON, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ecoscore.core.database import Base


class BatchShare(Base):
    """Lien public vers une comparaison par lot (liste de codes-barres)"""

    __tablename__ = "batch_shares"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    share_token = Column(String(64), unique=True, index=True, nullable=False)
    title = Column(String(255))
    description = Column(Text)
    product_barcodes = Column(JSON, default=list, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)

    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="batch_shares")

    def is_expired(self, now: datetime = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or datetime.utcnow())

    def __repr__(self):
        return f"<BatchShare(id={self.id}, token={self.share_token}, views={self.view_count})>"
