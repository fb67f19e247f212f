# freshbite/api/__init__.py
from fastapi import APIRouter

from freshbite.api.routers import (
    addresses,
    auth,
    cart,
    delivery,
    health,
    membership,
    orders,
    payment,
    recipes,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(recipes.router)
api_router.include_router(cart.router)
api_router.include_router(addresses.router)
api_router.include_router(orders.router)
api_router.include_router(payment.router)
api_router.include_router(delivery.router)
api_router.include_router(membership.router)
