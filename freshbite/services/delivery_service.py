# freshbite/services/delivery_service.py
from typing import Dict, Any, List

from requests import RequestException
from sqlalchemy.orm import Session

from freshbite.data.models.address import AddressModel
from freshbite.domain.exceptions import NotFound
from freshbite.domain.schemas import CurrentUser
from freshbite.repos.address_repo import AddressRepo
from freshbite.repos.order_repo import OrderRepo
from freshbite.services.routing_client import RoutingClient
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)

STORE_COORDS = {
    "latitude": 12.96762,
    "longitude": 80.15031,
    "formatted_address": "Pallavaram Saravana Stores, Chennai",
    "label": "Kitchen Hub",
}

FALLBACK_ETA_MINUTES = 18
FALLBACK_DISTANCE_KM = 6.0
MIN_ETA_MINUTES = 5

# pozycja kuriera na trasie dla kazdego statusu zamowienia
STATUS_PROGRESS = {
    "pending": 0.0,
    "packed": 0.1,
    "on_the_way": 0.5,
    "arriving": 0.85,
    "delivered": 1.0,
}


def interpolate_position(path: List[Dict[str, float]], progress: float) -> Dict[str, float] | None:
    """
    Punkt na lamanej path po przejechaniu ulamka progress (0..1)
    ulamek liczony po wierzcholkach, nie po dlugosci odcinkow
    """
    if not path:
        return None

    progress = min(max(progress, 0.0), 1.0)
    if progress >= 1 or len(path) == 1:
        return dict(path[-1])

    scaled = progress * (len(path) - 1)
    lower = int(scaled)
    upper = min(lower + 1, len(path) - 1)
    ratio = scaled - lower
    start, end = path[lower], path[upper]

    return {
        "lat": start["lat"] + (end["lat"] - start["lat"]) * ratio,
        "lng": start["lng"] + (end["lng"] - start["lng"]) * ratio,
    }


def _destination(address: AddressModel) -> Dict[str, Any]:
    return {
        "id": address.id,
        "label": address.label,
        "formatted_address": address.formatted_address or address.address_line,
        "latitude": float(address.latitude),
        "longitude": float(address.longitude),
        "city": address.city,
        "state": address.state,
        "postal_code": address.postal_code,
        "country": address.country,
    }


class DeliveryService:
    """
    Trasa z kuchni do adresu usera (OSRM) i symulowane sledzenie kuriera
    niedostepny OSRM -> prosta trasa z domyslnym ETA i dystansem
    """

    def __init__(self, db: Session, routing_client: RoutingClient):
        self.addresses = AddressRepo(db)
        self.orders = OrderRepo(db)
        self.routing_client = routing_client

    def _resolve_address(self, user: CurrentUser, address_id: int | None) -> AddressModel | None:
        if address_id:
            return self.addresses.get_owned(address_id, user.id)
        return self.addresses.get_primary(user.id)

    def get_route(self, user: CurrentUser, address_id: int | None = None) -> Dict[str, Any]:
        address = self._resolve_address(user, address_id)
        if not address:
            raise NotFound("No address available for route")

        return self._route_to(address)

    def _route_to(self, address: AddressModel) -> Dict[str, Any]:
        destination = _destination(address)

        path = [
            {"lat": STORE_COORDS["latitude"], "lng": STORE_COORDS["longitude"]},
            {"lat": destination["latitude"], "lng": destination["longitude"]},
        ]
        eta_minutes = FALLBACK_ETA_MINUTES
        distance_km = FALLBACK_DISTANCE_KM

        try:
            best = self.routing_client.fetch_route(
                STORE_COORDS["latitude"],
                STORE_COORDS["longitude"],
                destination["latitude"],
                destination["longitude"],
            )
            if best:
                path = [{"lat": lat, "lng": lng} for lng, lat in best["geometry"]["coordinates"]]
                eta_minutes = max(MIN_ETA_MINUTES, round(best["duration"] / 60))
                distance_km = round(best["distance"] / 1000, 1)
        except (RequestException, KeyError, TypeError, ValueError) as e:
            logger.warning(f"OSRM route fallback: {e}")

        return {
            "source": dict(STORE_COORDS),
            "destination": destination,
            "path": path,
            "etaMinutes": eta_minutes,
            "distanceKm": distance_km,
        }

    def track_order(self, user: CurrentUser, order_id: int, progress: float | None = None) -> Dict[str, Any]:
        order = self.orders.get_order(order_id, user.id)
        if not order:
            raise NotFound("Order not found")

        address = order.address or self.addresses.get_primary(user.id)
        if not address:
            raise NotFound("No address available for route")

        route = self._route_to(address)

        if progress is None:
            progress = STATUS_PROGRESS.get(order.status, 0.0)
        progress = min(max(progress, 0.0), 1.0)

        return {
            "order_id": order.id,
            "status": order.status,
            "progress": progress,
            "rider_position": interpolate_position(route["path"], progress),
            "route": route,
        }
