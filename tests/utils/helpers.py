from decimal import Decimal

from freshbite.data.models.recipe import RecipeModel
from freshbite.data.models.user import UserModel
from freshbite.domain.schemas import AddressIn, CurrentUser
from freshbite.utils.security import create_access_token, hash_password


class FakeRoutingClient:
    """OSRM w testach: zwraca zadana trase albo rzuca zadany wyjatek."""

    def __init__(self, route=None, error=None):
        self.route = route
        self.error = error
        self.calls = []

    def fetch_route(self, src_lat, src_lng, dst_lat, dst_lng):
        self.calls.append((src_lat, src_lng, dst_lat, dst_lng))
        if self.error:
            raise self.error
        return self.route


def make_user(db, username="alice", password="secret123") -> CurrentUser:
    user = UserModel(
        username=username,
        email=f"{username}@example.com",
        password=hash_password(password),
        first_name=username.title(),
    )
    db.add(user)
    db.commit()
    return CurrentUser(id=user.id, username=user.username)


def make_recipe(db, name="Masala Dosa", price="129.00", category="breakfast") -> RecipeModel:
    recipe = RecipeModel(
        name=name,
        description=f"{name} fresh from the kitchen",
        price=Decimal(price),
        image_url=f"/images/{name.lower().replace(' ', '-')}.jpg",
        category=category,
        rating=4.5,
    )
    db.add(recipe)
    db.commit()
    return recipe


def address_data(label="Home", lat=12.9716, lng=80.2206, **extra) -> dict:
    data = {
        "label": label,
        "address_line": f"{label} street 1",
        "city": "Chennai",
        "state": "Tamil Nadu",
        "postal_code": "600001",
        "country": "India",
        "latitude": lat,
        "longitude": lng,
        "formatted_address": f"{label} street 1, Chennai",
    }
    data.update(extra)
    return data


def address_payload(label="Home", lat=12.9716, lng=80.2206, **extra) -> AddressIn:
    return AddressIn(**address_data(label, lat, lng, **extra))


def auth_headers(user: CurrentUser) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.username)}"}
