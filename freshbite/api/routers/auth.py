# freshbite/api/routers/auth.py
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from freshbite.api.deps import get_current_user
from freshbite.data.database import get_db
from freshbite.domain.exceptions import AuthenticationError, Conflict, NotFound, ValidationError
from freshbite.domain.schemas import CurrentUser, LoginIn, LoginOut, RegisterOut, UserOut
from freshbite.services.auth_service import AuthService, parse_primary_address
from freshbite.services.storage_service import StorageService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterOut)
def register(
    username: str = Form(..., min_length=1, max_length=100),
    email: str = Form(..., min_length=3, max_length=255),
    password: str = Form(..., min_length=1),
    first_name: str | None = Form(None),
    last_name: str | None = Form(None),
    phone: str | None = Form(None),
    primary_address: str | None = Form(None),
    profile_picture: UploadFile | None = File(None),
    db: Session = Depends(get_db),
):
    """
    Rejestracja (multipart): opcjonalne zdjecie i adres domyslny jako JSON.
    Zdjecie zapisane przed nieudana rejestracja jest usuwane.
    """
    service = AuthService(db)
    storage = StorageService()
    address = parse_primary_address(primary_address)
    picture = storage.save(profile_picture)
    try:
        user = service.register(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            profile_picture=picture,
            primary_address=address,
        )
    except Conflict as e:
        storage.discard(picture)
        raise HTTPException(status_code=409, detail=e.message)
    except Exception:
        storage.discard(picture)
        raise
    return {"message": "User registered successfully!", "user": user}


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    try:
        return AuthService(db).login(payload.email, payload.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/me", response_model=UserOut)
def me(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return AuthService(db).get_profile(user)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.put("/update", response_model=UserOut)
def update(
    first_name: str | None = Form(None),
    last_name: str | None = Form(None),
    phone: str | None = Form(None),
    profile_picture: UploadFile | None = File(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    storage = StorageService()
    picture = storage.save(profile_picture)
    fields = {
        "first_name": first_name,
        "last_name": last_name,
        "phone": phone,
        "profile_picture": picture,
    }
    try:
        return AuthService(db).update_profile(user, fields)
    except ValidationError as e:
        storage.discard(picture)
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        storage.discard(picture)
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        storage.discard(picture)
        raise
