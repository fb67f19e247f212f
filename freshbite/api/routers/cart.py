# freshbite/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from freshbite.api.deps import get_current_user
from freshbite.data.database import get_db
from freshbite.domain.exceptions import ValidationError, NotFound
from freshbite.domain.schemas import CartAddIn, CartUpdateIn, CartOut, CurrentUser, MessageOut
from freshbite.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).get_cart(user)


@router.post("/add", response_model=MessageOut)
def add_item(
    payload: CartAddIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.add_product(user, payload.recipe_id, payload.quantity)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"message": "Item added to cart", "success": True}


@router.put("/update/{item_id}", response_model=MessageOut)
def update_item(
    item_id: int,
    payload: CartUpdateIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.update_quantity(user, item_id, payload.quantity)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"message": "Cart updated"}


@router.delete("/remove/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_service(db).remove_product(user, item_id)
    return {"message": "Item removed from cart"}


@router.delete("/clear", response_model=MessageOut)
def clear_cart(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_service(db).clear_cart(user)
    return {"message": "Cart cleared"}
