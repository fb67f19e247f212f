# freshbite/services/membership_service.py
from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from freshbite.domain.exceptions import NotFound, ValidationError
from freshbite.domain.schemas import CurrentUser
from freshbite.repos.user_repo import UserRepo
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)

MEMBERSHIP_TIERS = ("bronze", "silver", "gold")
MEMBERSHIP_DURATION = timedelta(days=365)

BENEFITS = {
    "bronze": {
        "name": "Bronze",
        "price": Decimal("9.99"),
        "benefits": [
            "5% discount on all orders",
            "Free delivery on orders above $30",
            "Priority customer support",
            "Early access to new items",
        ],
    },
    "silver": {
        "name": "Silver",
        "price": Decimal("19.99"),
        "benefits": [
            "All Bronze benefits",
            "10% discount on all orders",
            "Free delivery on orders above $20",
            "Birthday special offer",
            "Monthly exclusive deals",
        ],
    },
    "gold": {
        "name": "Gold",
        "price": Decimal("39.99"),
        "benefits": [
            "All Silver benefits",
            "15% discount on all orders",
            "Free delivery on all orders",
            "VIP customer support",
            "Exclusive events access",
            "Quarterly free meal",
        ],
    },
}


def is_membership_active(membership_type: str | None, expires_at: datetime | None, now: datetime | None = None) -> bool:
    if not membership_type or membership_type == "none":
        return False
    if expires_at is None:
        return True

    now = now or datetime.now(timezone.utc)
    # sqlite zwraca naive datetime
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at > now


class MembershipService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def get_membership(self, current: CurrentUser) -> Dict[str, Any]:
        user = self.repo.get_user(current.id)
        if not user:
            raise NotFound("User not found")

        return {
            "membership_type": user.membership_type,
            "membership_expires_at": user.membership_expires_at,
            "is_active": is_membership_active(user.membership_type, user.membership_expires_at),
        }

    def upgrade(self, current: CurrentUser, membership_type: str) -> datetime:
        if membership_type not in MEMBERSHIP_TIERS:
            raise ValidationError("Invalid membership type")

        user = self.repo.get_user(current.id)
        if not user:
            raise NotFound("User not found")

        expires_at = datetime.now(timezone.utc) + MEMBERSHIP_DURATION

        try:
            self.repo.update_user(
                user,
                {"membership_type": membership_type, "membership_expires_at": expires_at},
            )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"User {user.id} upgraded to {membership_type} until {expires_at.isoformat()}")
        return expires_at

    @staticmethod
    def benefits() -> Dict[str, Any]:
        return BENEFITS
