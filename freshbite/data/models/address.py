from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Float, Boolean, Text

from freshbite.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class AddressModel(Base):
    __tablename__ = "user_addresses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    label = Column(String(50), nullable=False, default="Other")
    address_line = Column(String(255), nullable=False, default="")
    landmark = Column(String(255), nullable=False, default="")
    city = Column(String(100), nullable=False, default="")
    state = Column(String(100), nullable=False, default="")
    postal_code = Column(String(20), nullable=False, default="")
    country = Column(String(100), nullable=False, default="")

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    place_id = Column(String(100), nullable=False, default="")
    formatted_address = Column(String(500), nullable=False, default="")
    instructions = Column(Text, nullable=False, default="")

    is_default = Column(Boolean, nullable=False, default=False)
    # updated_at ustawiane recznie w repo, masowe zmiany flagi default go nie ruszaja
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now)
