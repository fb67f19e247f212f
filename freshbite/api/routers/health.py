from fastapi import APIRouter

from freshbite.domain.schemas import HealthOut

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health():
    return {"message": "Server is running"}
