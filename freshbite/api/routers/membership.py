# freshbite/api/routers/membership.py
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from freshbite.api.deps import get_current_user
from freshbite.data.database import get_db
from freshbite.domain.exceptions import ValidationError, NotFound
from freshbite.domain.schemas import (
    CurrentUser,
    MembershipOut,
    MembershipTierOut,
    MembershipUpgradeIn,
    MessageOut,
)
from freshbite.services.membership_service import MembershipService

router = APIRouter(prefix="/membership", tags=["membership"])


@router.get("", response_model=MembershipOut)
def get_membership(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return MembershipService(db).get_membership(user)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/upgrade", response_model=MessageOut)
def upgrade(
    payload: MembershipUpgradeIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        MembershipService(db).upgrade(user, payload.membership_type)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"message": "Membership upgraded successfully"}


@router.get("/benefits", response_model=Dict[str, MembershipTierOut])
def benefits():
    return MembershipService.benefits()
