# freshbite/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List
from decimal import Decimal
from datetime import datetime


class MessageOut(BaseModel):
    message: str
    success: bool | None = None


class CurrentUser(BaseModel):
    """Tozsamosc z tokena, przekazywana jawnie do kazdego serwisu."""

    id: int
    username: str


# =====================================================
# AUTH / PROFILE
# =====================================================
class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    profile_picture: str | None = None
    membership_type: str = "none"
    membership_expires_at: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class LoginOut(BaseModel):
    message: str
    token: str
    user: UserOut


class RegisterOut(BaseModel):
    message: str
    user: UserOut


# =====================================================
# CATALOG
# =====================================================
class RecipeOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Decimal
    image_url: str | None = None
    category: str | None = None
    offer: str | None = None
    rating: float | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# ADDRESSES
# =====================================================
class AddressIn(BaseModel):
    """Wspolrzedne walidowane w serwisie (ValidationError zamiast 422)."""

    label: str | None = None
    address_line: str | None = None
    landmark: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    latitude: float | str | None = None
    longitude: float | str | None = None
    place_id: str | int | None = None
    formatted_address: str | None = None
    instructions: str | None = None
    is_default: bool | None = None


class AddressOut(BaseModel):
    id: int
    user_id: int
    label: str
    address_line: str
    landmark: str
    city: str
    state: str
    postal_code: str
    country: str
    latitude: float
    longitude: float
    place_id: str
    formatted_address: str
    instructions: str
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AddressSuggestionOut(BaseModel):
    place_id: str
    formatted_address: str
    latitude: float
    longitude: float
    city: str = ""
    state: str = ""
    country: str = ""
    postal_code: str = ""


# =====================================================
# CART
# =====================================================
class CartAddIn(BaseModel):
    recipe_id: int | None = None
    quantity: int | None = None


class CartUpdateIn(BaseModel):
    quantity: int


class CartLineOut(BaseModel):
    """Pozycja koszyka z aktualnymi danymi z katalogu (ceny biezace, nie snapshot)."""

    id: int
    user_id: int
    recipe_id: int
    quantity: int
    created_at: datetime
    name: str
    description: str | None = None
    price: Decimal
    image_url: str | None = None
    category: str | None = None
    offer: str | None = None
    rating: float | None = None


class CartOut(BaseModel):
    items: List[CartLineOut]
    subtotal: Decimal


# =====================================================
# ORDERS
# =====================================================
class OrderCreateIn(BaseModel):
    total_amount: Decimal | None = Field(None, ge=0)
    delivery_address: str | None = None
    payment_id: str | None = None
    payment_status: str | None = None
    address_id: int | None = None


class OrderStatusIn(BaseModel):
    status: str


class OrderItemOut(BaseModel):
    id: int
    recipe_id: int
    quantity: int
    price: Decimal
    name: str = ""
    image_url: str = ""


class OrderOut(BaseModel):
    id: int
    user_id: int
    total_amount: Decimal
    delivery_address: str
    payment_id: str | None = None
    payment_status: str
    status: str
    address_id: int | None = None
    created_at: datetime

    address_label: str | None = None
    address_formatted: str | None = None
    address_latitude: float | None = None
    address_longitude: float | None = None
    address_city: str | None = None
    address_state: str | None = None
    address_postal_code: str | None = None
    address_country: str | None = None

    items: List[OrderItemOut] = []


# =====================================================
# PAYMENT
# =====================================================
class PaymentKeyOut(BaseModel):
    key: str


class PaymentIntentIn(BaseModel):
    amount: Decimal = Field(..., gt=0)
    currency: str = "INR"


class PaymentIntentOut(BaseModel):
    id: str
    amount: int
    currency: str


class PaymentVerifyIn(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str | None = None
    razorpay_signature: str | None = None


class PaymentVerifyOut(BaseModel):
    success: bool
    payment_id: str
    message: str
    mode: str


# =====================================================
# MEMBERSHIP
# =====================================================
class MembershipOut(BaseModel):
    membership_type: str
    membership_expires_at: datetime | None = None
    is_active: bool


class MembershipUpgradeIn(BaseModel):
    membership_type: str


class MembershipTierOut(BaseModel):
    name: str
    price: Decimal
    benefits: List[str]


# =====================================================
# DELIVERY
# =====================================================
class PointOut(BaseModel):
    lat: float
    lng: float


class RouteSourceOut(BaseModel):
    latitude: float
    longitude: float
    formatted_address: str
    label: str


class RouteDestinationOut(BaseModel):
    id: int
    label: str
    formatted_address: str
    latitude: float
    longitude: float
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""


class RouteOut(BaseModel):
    source: RouteSourceOut
    destination: RouteDestinationOut
    path: List[PointOut]
    etaMinutes: int
    distanceKm: float


class TrackingOut(BaseModel):
    order_id: int
    status: str
    progress: float
    rider_position: PointOut | None = None
    route: RouteOut


class HealthOut(BaseModel):
    message: str
