from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, Float

from freshbite.data.database import Base


class RecipeModel(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String(500))
    category = Column(String(50), index=True)
    offer = Column(String(100))
    rating = Column(Float)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
