# freshbite/services/address_service.py
import math
from typing import Dict, Any

from sqlalchemy.orm import Session

from freshbite.data.models.address import AddressModel
from freshbite.domain.exceptions import ValidationError, NotFound, LimitExceeded
from freshbite.domain.schemas import AddressIn, CurrentUser
from freshbite.repos.address_repo import AddressRepo
from freshbite.utils.settings import MAX_ADDRESSES
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)


def parse_coordinate(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def sanitize_address_payload(payload: AddressIn) -> Dict[str, Any]:
    """
    Normalizuje payload adresu do kolumn tabeli
    brak lub nieliczbowe wspolrzedne -> ValidationError
    """
    latitude = parse_coordinate(payload.latitude)
    longitude = parse_coordinate(payload.longitude)

    if latitude is None or longitude is None:
        raise ValidationError("Latitude and longitude are required")

    return {
        "label": payload.label or "Other",
        "address_line": payload.address_line or payload.formatted_address or "",
        "landmark": payload.landmark or "",
        "city": payload.city or "",
        "state": payload.state or "",
        "postal_code": payload.postal_code or "",
        "country": payload.country or "",
        "latitude": latitude,
        "longitude": longitude,
        "place_id": str(payload.place_id) if payload.place_id is not None else "",
        "formatted_address": payload.formatted_address or payload.address_line or "",
        "instructions": payload.instructions or "",
    }


class AddressService:
    """
    Adresy dostawy usera
    - max MAX_ADDRESSES adresow
    - dokladnie jeden default gdy user ma jakikolwiek adres
    kazda zmiana flagi default to jeden UPDATE w tej samej transakcji co reszta zapisu
    """

    def __init__(self, db: Session):
        self.repo = AddressRepo(db)

    #query
    def list_addresses(self, user: CurrentUser) -> list[AddressModel]:
        return self.repo.list_for_user(user.id)

    def get_primary(self, user: CurrentUser) -> AddressModel:
        address = self.repo.get_primary(user.id)
        if not address:
            raise NotFound("No address found")
        return address

    def get_owned(self, user: CurrentUser, address_id: int) -> AddressModel:
        address = self.repo.get_owned(address_id, user.id)
        if not address:
            raise NotFound("Address not found")
        return address

    #commands
    # kazda zmiana zaczyna sie od lock_owner: limit i flaga default sprawdzane pod blokada
    def create_address(self, user: CurrentUser, payload: AddressIn) -> AddressModel:
        fields = sanitize_address_payload(payload)

        try:
            self.repo.lock_owner(user.id)

            total = self.repo.count_for_user(user.id)
            if total >= MAX_ADDRESSES:
                raise LimitExceeded(f"You can only save up to {MAX_ADDRESSES} addresses.")

            make_default = bool(payload.is_default) or total == 0
            address = self.repo.add_address(
                AddressModel(user_id=user.id, is_default=make_default, **fields)
            )
            if make_default:
                self.repo.set_single_default(user.id, address.id)

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Address {address.id} created for user {user.id} (default={make_default})")
        return address

    def update_address(self, user: CurrentUser, address_id: int, payload: AddressIn) -> AddressModel:
        fields = sanitize_address_payload(payload)

        try:
            self.repo.lock_owner(user.id)
            address = self.get_owned(user, address_id)

            self.repo.update_address(address, fields)

            if payload.is_default:
                self.repo.set_single_default(user.id, address.id)
            elif payload.is_default is False and address.is_default:
                # zdjecie flagi przenosi ja na ostatnio aktualizowany inny adres
                successor = self.repo.most_recent(user.id, exclude_id=address.id)
                if successor:
                    self.repo.set_single_default(user.id, successor.id)

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Address {address.id} updated for user {user.id}")
        return address

    def delete_address(self, user: CurrentUser, address_id: int):
        try:
            self.repo.lock_owner(user.id)
            address = self.get_owned(user, address_id)
            was_default = address.is_default

            self.repo.delete_address(address)

            if was_default:
                successor = self.repo.most_recent(user.id)
                if successor:
                    self.repo.set_single_default(user.id, successor.id)
                    logger.info(f"Address {successor.id} promoted to default for user {user.id}")

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Address {address_id} deleted for user {user.id}")

    def set_default(self, user: CurrentUser, address_id: int) -> AddressModel:
        try:
            self.repo.lock_owner(user.id)
            address = self.get_owned(user, address_id)

            self.repo.set_single_default(user.id, address.id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Address {address.id} set as default for user {user.id}")
        return address
