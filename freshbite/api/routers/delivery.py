# freshbite/api/routers/delivery.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from freshbite.api.deps import get_current_user, get_routing_client
from freshbite.data.database import get_db
from freshbite.domain.exceptions import NotFound
from freshbite.domain.schemas import CurrentUser, RouteOut, TrackingOut
from freshbite.services.delivery_service import DeliveryService
from freshbite.services.routing_client import RoutingClient

router = APIRouter(prefix="/delivery", tags=["delivery"])


@router.get("/route", response_model=RouteOut)
def get_route(
    address_id: int | None = Query(None, alias="addressId"),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    routing_client: RoutingClient = Depends(get_routing_client),
):
    try:
        return DeliveryService(db, routing_client).get_route(user, address_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/orders/{order_id}/tracking", response_model=TrackingOut)
def track_order(
    order_id: int,
    progress: float | None = Query(None, ge=0, le=1),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    routing_client: RoutingClient = Depends(get_routing_client),
):
    try:
        return DeliveryService(db, routing_client).track_order(user, order_id, progress)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
