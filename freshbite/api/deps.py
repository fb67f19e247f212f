# freshbite/api/deps.py
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from freshbite.domain.schemas import CurrentUser
from freshbite.services.geocoding_client import GeocodingClient
from freshbite.services.payment_service import PaymentProvider, build_payment_provider
from freshbite.services.routing_client import RoutingClient
from freshbite.utils.security import decode_access_token

bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> CurrentUser:
    """Tozsamosc z tokena Bearer albo 401; dalej przekazywana jawnie do serwisow."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="No token, authorization denied")

    payload = decode_access_token(credentials.credentials)
    if not payload or "id" not in payload:
        raise HTTPException(status_code=401, detail="Token is not valid")

    return CurrentUser(id=payload["id"], username=payload.get("username", ""))


def get_payment_provider(request: Request) -> PaymentProvider:
    provider = getattr(request.app.state, "payment_provider", None)
    if provider is None:
        provider = build_payment_provider()
        request.app.state.payment_provider = provider
    return provider


def get_geocoding_client() -> GeocodingClient:
    return GeocodingClient()


def get_routing_client() -> RoutingClient:
    return RoutingClient()
