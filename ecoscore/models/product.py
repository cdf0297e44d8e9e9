from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ecoscore.core.database import Base


class Product(Base):
    """Produit mis en cache depuis Open Food Facts"""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    barcode = Column(String(64), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False, index=True)
    brand = Column(String(255))
    category = Column(String(255), index=True)

    eco_score = Column(Integer)
    eco_score_grade = Column(String(10))

    environmental_footprint = Column(Integer)
    packaging_sustainability = Column(Integer)
    carbon_impact = Column(Integer)

    image_url = Column(String(500))
    price = Column(String)
    country = Column(String(100))

    last_updated = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)

    favorites = relationship(
        "Favorite", back_populates="product", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Product(id={self.id}, barcode={self.barcode}, name={self.name})>"
