from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from freshbite.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    password = Column(String(255), nullable=False)

    first_name = Column(String(100))
    last_name = Column(String(100))
    phone = Column(String(30))
    profile_picture = Column(String(255))

    membership_type = Column(String(20), nullable=False, default="none")  # none, bronze, silver, gold
    membership_expires_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
