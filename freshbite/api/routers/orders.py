# freshbite/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from freshbite.api.deps import get_current_user
from freshbite.data.database import get_db
from freshbite.domain.exceptions import EmptyCart, NoAddress, NotFound, InvalidStatus
from freshbite.domain.schemas import CurrentUser, MessageOut, OrderCreateIn, OrderOut, OrderStatusIn
from freshbite.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/create", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreateIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Tworzy zamowienie z aktualnego koszyka i czysci koszyk.
    """
    svc = get_service(db)
    try:
        return svc.create_order_from_cart(user, payload)
    except (EmptyCart, NoAddress) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).list_orders(user)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Pobiera szczegoly zamowienia.
    """
    try:
        return get_service(db).get_order(user, order_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.put("/{order_id}/status", response_model=MessageOut)
def update_status(
    order_id: int,
    payload: OrderStatusIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        get_service(db).update_status(user, order_id, payload.status)
    except InvalidStatus as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"message": "Order status updated"}
