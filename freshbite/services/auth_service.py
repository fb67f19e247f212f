# freshbite/services/auth_service.py
import json
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freshbite.data.models.address import AddressModel
from freshbite.data.models.user import UserModel
from freshbite.domain.exceptions import AuthenticationError, Conflict, NotFound, ValidationError
from freshbite.domain.schemas import AddressIn, CurrentUser
from freshbite.repos.address_repo import AddressRepo
from freshbite.repos.user_repo import UserRepo
from freshbite.services.address_service import sanitize_address_payload
from freshbite.services.storage_service import public_url
from freshbite.utils.security import hash_password, verify_password, create_access_token
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)


def serialize_user(user: UserModel) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "phone": user.phone,
        "profile_picture": public_url(user.profile_picture),
        "membership_type": user.membership_type,
        "membership_expires_at": user.membership_expires_at,
        "created_at": user.created_at,
    }


def parse_primary_address(raw: str | None) -> AddressIn | None:
    """primary_address z formularza rejestracji (JSON string); zly payload jest pomijany."""
    if not raw:
        return None

    try:
        return AddressIn.model_validate(json.loads(raw))
    except ValueError as e:
        logger.warning(f"Invalid primary_address payload: {e}")
        return None


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.addresses = AddressRepo(db)

    def register(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
        profile_picture: str | None = None,
        primary_address: AddressIn | None = None,
    ) -> Dict[str, Any]:
        """
        Use Case: Rejestracja.
        user + opcjonalny adres domyslny w jednej transakcji
        """
        if self.repo.exists(username, email):
            raise Conflict("Username or email already registered")

        address_fields = None
        if primary_address is not None:
            try:
                address_fields = sanitize_address_payload(primary_address)
            except ValidationError:
                logger.warning(f"Primary address for {username} has no coordinates, skipping")

        try:
            user = self.repo.create_user(
                UserModel(
                    username=username,
                    email=email,
                    password=hash_password(password),
                    first_name=first_name,
                    last_name=last_name,
                    phone=phone,
                    profile_picture=profile_picture,
                )
            )

            if address_fields:
                address_fields["label"] = primary_address.label or "Primary"
                self.addresses.add_address(
                    AddressModel(user_id=user.id, is_default=True, **address_fields)
                )

            self.repo.commit()
        except IntegrityError:
            # rownolegla rejestracja tego samego username/email minela exists()
            self.repo.rollback()
            logger.info(f"Concurrent registration for {username} / {email} rejected")
            raise Conflict("Username or email already registered")
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"User {user.id} registered (primary address: {address_fields is not None})")
        return serialize_user(user)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self.repo.get_by_email(email)

        if not user or not verify_password(password, user.password):
            logger.info(f"Failed login for {email}")
            raise AuthenticationError("Invalid credentials")

        token = create_access_token(user.id, user.username)
        logger.info(f"User {user.id} logged in")

        return {
            "message": "Login successful",
            "token": token,
            "user": serialize_user(user),
        }

    def get_profile(self, current: CurrentUser) -> Dict[str, Any]:
        user = self.repo.get_user(current.id)
        if not user:
            raise NotFound("User not found")
        return serialize_user(user)

    def update_profile(self, current: CurrentUser, fields: Dict[str, Any]) -> Dict[str, Any]:
        """fields: tylko przeslane pola (first_name, last_name, phone, profile_picture)."""
        updates = {name: value for name, value in fields.items() if value is not None}
        if not updates:
            raise ValidationError("No fields to update")

        user = self.repo.get_user(current.id)
        if not user:
            raise NotFound("User not found")

        try:
            self.repo.update_user(user, updates)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"User {user.id} updated fields {sorted(updates)}")
        return serialize_user(user)
