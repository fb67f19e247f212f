# freshbite/api/routers/payment.py
from fastapi import APIRouter, Depends, HTTPException

from freshbite.api.deps import get_current_user, get_payment_provider
from freshbite.domain.exceptions import VerificationFailed
from freshbite.domain.schemas import (
    CurrentUser,
    PaymentIntentIn,
    PaymentIntentOut,
    PaymentKeyOut,
    PaymentVerifyIn,
    PaymentVerifyOut,
)
from freshbite.services.payment_service import PaymentProvider

router = APIRouter(prefix="/payment", tags=["payment"])


@router.get("/key", response_model=PaymentKeyOut)
def get_key(provider: PaymentProvider = Depends(get_payment_provider)):
    return {"key": provider.public_key}


@router.post("/create-order", response_model=PaymentIntentOut)
def create_order(
    payload: PaymentIntentIn,
    user: CurrentUser = Depends(get_current_user),
    provider: PaymentProvider = Depends(get_payment_provider),
):
    return provider.create_intent(payload.amount, payload.currency)


@router.post("/verify", response_model=PaymentVerifyOut)
def verify(
    payload: PaymentVerifyIn,
    user: CurrentUser = Depends(get_current_user),
    provider: PaymentProvider = Depends(get_payment_provider),
):
    try:
        return provider.verify(
            payload.razorpay_order_id,
            payload.razorpay_payment_id,
            payload.razorpay_signature,
        )
    except VerificationFailed as e:
        raise HTTPException(status_code=400, detail=e.message)
