# freshbite/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from freshbite.api.deps import get_current_user, get_geocoding_client
from freshbite.data.database import get_db
from freshbite.domain.exceptions import ValidationError, NotFound, LimitExceeded, ProviderError
from freshbite.domain.schemas import (
    AddressIn,
    AddressOut,
    AddressSuggestionOut,
    CurrentUser,
    MessageOut,
)
from freshbite.services.address_service import AddressService
from freshbite.services.geocoding_client import GeocodingClient

router = APIRouter(prefix="/addresses", tags=["addresses"])


def get_service(db: Session):
    return AddressService(db)


# geokodowanie publiczne, bez tokena
@router.get("/search", response_model=List[AddressSuggestionOut])
def search(
    q: str | None = Query(None),
    client: GeocodingClient = Depends(get_geocoding_client),
):
    try:
        return client.search(q)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=e.message)


@router.get("/reverse", response_model=AddressSuggestionOut)
def reverse(
    lat: str | None = Query(None),
    lon: str | None = Query(None),
    client: GeocodingClient = Depends(get_geocoding_client),
):
    try:
        return client.reverse(lat, lon)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=e.message)


@router.get("/primary", response_model=AddressOut)
def get_primary(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).get_primary(user)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("", response_model=List[AddressOut])
def list_addresses(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).list_addresses(user)


@router.post("", response_model=AddressOut, status_code=201)
def create_address(
    payload: AddressIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).create_address(user, payload)
    except (ValidationError, LimitExceeded) as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.put("/{address_id}", response_model=AddressOut)
def update_address(
    address_id: int,
    payload: AddressIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).update_address(user, address_id, payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/{address_id}", response_model=MessageOut)
def delete_address(
    address_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        get_service(db).delete_address(user, address_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"message": "Address deleted"}


@router.post("/{address_id}/default", response_model=MessageOut)
def set_default(
    address_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        get_service(db).set_default(user, address_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"message": "Default address updated"}
