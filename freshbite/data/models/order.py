from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from freshbite.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    address_id = Column(Integer, ForeignKey("user_addresses.id", ondelete="SET NULL"), nullable=True)

    total_amount = Column(Numeric(10, 2), nullable=False)
    delivery_address = Column(String(500), nullable=False)
    payment_id = Column(String(100))
    payment_status = Column(String(30), nullable=False, default="pending")
    status = Column(String(20), nullable=False, default="pending")  # pending, packed, on_the_way, arriving, delivered
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        order_by="OrderItemModel.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    address = relationship("AddressModel", lazy="joined")
