import json
import os
from decimal import Decimal

import pytest
from requests import ConnectionError as RequestsConnectionError

from freshbite.api.deps import get_geocoding_client
from freshbite.domain.schemas import CurrentUser
from freshbite.services.geocoding_client import GeocodingClient
from freshbite.utils.settings import UPLOAD_DIR
from tests.utils.helpers import address_data, auth_headers, make_recipe

NOMINATIM_HIT = {
    "place_id": 298471,
    "display_name": "Tidel Park, Taramani, Chennai, Tamil Nadu, India",
    "lat": "12.9890",
    "lon": "80.2480",
    "address": {
        "town": "Taramani",
        "state": "Tamil Nadu",
        "country": "India",
        "postcode": "600113",
    },
}


class StubGeocodingClient(GeocodingClient):
    def __init__(self, response=None, error=None):
        super().__init__(base_url="https://nominatim.test")
        self.response = response
        self.error = error
        self.requests = []

    def _fetch(self, endpoint, params):
        self.requests.append((endpoint, params))
        if self.error:
            raise self.error
        return self.response


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


def uploads():
    os.makedirs(UPLOAD_DIR, exist_ok=True)
    return set(os.listdir(UPLOAD_DIR))


def money(value):
    return Decimal(str(value))


@pytest.fixture()
def headers(user):
    return auth_headers(user)


@pytest.fixture()
def dosa(db):
    return make_recipe(db, "Masala Dosa", "129.00")


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Server is running"}


class TestAuth:
    def test_register_login_me(self, client):
        address = address_data(label=None)
        resp = client.post(
            "/api/auth/register",
            data={
                "username": "carol",
                "email": "carol@example.com",
                "password": "s3cret",
                "first_name": "Carol",
                "primary_address": json.dumps(address),
            },
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["username"] == "carol"
        assert "password" not in resp.json()["user"]

        resp = client.post("/api/auth/login", json={"email": "carol@example.com", "password": "s3cret"})
        assert resp.status_code == 200
        token = resp.json()["token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["first_name"] == "Carol"
        assert me.json()["membership_type"] == "none"

        primary = client.get("/api/addresses/primary", headers={"Authorization": f"Bearer {token}"})
        assert primary.status_code == 200
        assert primary.json()["label"] == "Primary"
        assert primary.json()["is_default"] is True

    def test_register_without_coordinates_skips_address(self, client):
        resp = client.post(
            "/api/auth/register",
            data={
                "username": "dave",
                "email": "dave@example.com",
                "password": "pw",
                "primary_address": json.dumps({"label": "Home", "city": "Chennai"}),
            },
        )
        assert resp.status_code == 200

        token = client.post(
            "/api/auth/login", json={"email": "dave@example.com", "password": "pw"}
        ).json()["token"]
        primary = client.get("/api/addresses/primary", headers={"Authorization": f"Bearer {token}"})
        assert primary.status_code == 404

    def test_duplicate_registration(self, client, user):
        resp = client.post(
            "/api/auth/register",
            data={"username": "alice", "email": "other@example.com", "password": "pw"},
        )
        assert resp.status_code == 409

    def test_wrong_password(self, client, user):
        resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid credentials"

    def test_missing_token(self, client):
        resp = client.get("/api/auth/me")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "No token, authorization denied"

    def test_bad_token(self, client):
        resp = client.get("/api/cart", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token is not valid"

    def test_update_profile(self, client, headers):
        resp = client.put("/api/auth/update", data={"phone": "+91 98400 00000"}, headers=headers)
        assert resp.status_code == 200
        assert resp.json()["phone"] == "+91 98400 00000"
        assert resp.json()["first_name"] == "Alice"

    def test_update_with_nothing(self, client, headers):
        resp = client.put("/api/auth/update", data={}, headers=headers)
        assert resp.status_code == 400

    def test_register_with_picture(self, client):
        before = uploads()
        resp = client.post(
            "/api/auth/register",
            data={"username": "erin", "email": "erin@example.com", "password": "pw"},
            files={"profile_picture": ("me.PNG", PNG_BYTES, "image/png")},
        )
        assert resp.status_code == 200

        [stored] = uploads() - before
        assert stored.endswith(".png")
        assert resp.json()["user"]["profile_picture"] == f"/uploads/{stored}"

    def test_failed_registration_leaves_no_upload(self, client, user):
        before = uploads()
        resp = client.post(
            "/api/auth/register",
            data={"username": "alice", "email": "alice2@example.com", "password": "pw"},
            files={"profile_picture": ("me.png", PNG_BYTES, "image/png")},
        )
        assert resp.status_code == 409
        assert uploads() == before

    def test_failed_update_leaves_no_upload(self, client):
        before = uploads()
        ghost = auth_headers(CurrentUser(id=9999, username="ghost"))
        resp = client.put(
            "/api/auth/update",
            files={"profile_picture": ("me.png", PNG_BYTES, "image/png")},
            headers=ghost,
        )
        assert resp.status_code == 404
        assert uploads() == before


class TestRecipes:
    def test_list_and_filter(self, client, db, dosa):
        make_recipe(db, "Paneer Tikka", "249.00", category="starters")

        assert len(client.get("/api/recipes").json()) == 2
        assert len(client.get("/api/recipes", params={"category": "all"}).json()) == 2

        starters = client.get("/api/recipes", params={"category": "starters"}).json()
        assert [r["name"] for r in starters] == ["Paneer Tikka"]

        found = client.get("/api/recipes", params={"search": "dosa"}).json()
        assert [r["name"] for r in found] == ["Masala Dosa"]

    def test_get_one(self, client, dosa):
        assert client.get(f"/api/recipes/{dosa.id}").json()["name"] == "Masala Dosa"
        assert client.get("/api/recipes/9999").status_code == 404


class TestCart:
    def test_add_update_remove(self, client, headers, dosa):
        resp = client.post("/api/cart/add", json={"recipe_id": dosa.id, "quantity": 2}, headers=headers)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Item added to cart", "success": True}
        client.post("/api/cart/add", json={"recipe_id": dosa.id}, headers=headers)

        cart = client.get("/api/cart", headers=headers).json()
        [line] = cart["items"]
        assert line["quantity"] == 3
        assert money(cart["subtotal"]) == Decimal("387.00")

        assert client.put(f"/api/cart/update/{line['id']}", json={"quantity": 5}, headers=headers).status_code == 200
        assert client.get("/api/cart", headers=headers).json()["items"][0]["quantity"] == 5

        assert client.delete(f"/api/cart/remove/{line['id']}", headers=headers).status_code == 200
        assert client.get("/api/cart", headers=headers).json()["items"] == []

    def test_add_validation(self, client, headers):
        assert client.post("/api/cart/add", json={}, headers=headers).status_code == 400
        assert client.post("/api/cart/add", json={"recipe_id": 404}, headers=headers).status_code == 404

    def test_update_missing_line(self, client, headers):
        assert client.put("/api/cart/update/999", json={"quantity": 2}, headers=headers).status_code == 404
        assert client.put("/api/cart/update/999", json={"quantity": 0}, headers=headers).status_code == 200

    def test_clear(self, client, headers, dosa):
        client.post("/api/cart/add", json={"recipe_id": dosa.id}, headers=headers)
        assert client.delete("/api/cart/clear", headers=headers).json() == {"message": "Cart cleared"}
        assert client.get("/api/cart", headers=headers).json()["items"] == []


class TestAddresses:
    def test_crud(self, client, headers):
        first = client.post("/api/addresses", json=address_data("Home"), headers=headers)
        assert first.status_code == 201
        assert first.json()["is_default"] is True

        second = client.post("/api/addresses", json=address_data("Work", is_default=True), headers=headers)
        assert second.json()["is_default"] is True

        listed = client.get("/api/addresses", headers=headers).json()
        assert [a["label"] for a in listed] == ["Work", "Home"]
        assert [a["is_default"] for a in listed] == [True, False]

        resp = client.post(f"/api/addresses/{first.json()['id']}/default", headers=headers)
        assert resp.json() == {"message": "Default address updated"}
        assert client.get("/api/addresses/primary", headers=headers).json()["label"] == "Home"

        updated = client.put(
            f"/api/addresses/{second.json()['id']}",
            json=address_data("Office", instructions="Ring twice"),
            headers=headers,
        )
        assert updated.status_code == 200
        assert updated.json()["label"] == "Office"
        assert updated.json()["instructions"] == "Ring twice"

        assert client.delete(f"/api/addresses/{first.json()['id']}", headers=headers).status_code == 200
        assert client.get("/api/addresses/primary", headers=headers).json()["label"] == "Office"

    def test_missing_coordinates(self, client, headers):
        resp = client.post("/api/addresses", json={"label": "Home"}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Latitude and longitude are required"

    def test_limit(self, client, headers):
        for i in range(5):
            assert client.post("/api/addresses", json=address_data(f"A{i}"), headers=headers).status_code == 201

        resp = client.post("/api/addresses", json=address_data("A5"), headers=headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "You can only save up to 5 addresses."

    def test_foreign_address(self, client, headers, other_user):
        theirs = client.post("/api/addresses", json=address_data("Bob"), headers=auth_headers(other_user)).json()

        assert client.put(f"/api/addresses/{theirs['id']}", json=address_data("Mine"), headers=headers).status_code == 404
        assert client.delete(f"/api/addresses/{theirs['id']}", headers=headers).status_code == 404
        assert client.post(f"/api/addresses/{theirs['id']}/default", headers=headers).status_code == 404

    def test_primary_missing(self, client, headers):
        assert client.get("/api/addresses/primary", headers=headers).status_code == 404


class TestGeocoding:
    def use(self, app, stub):
        app.dependency_overrides[get_geocoding_client] = lambda: stub
        return stub

    def test_search(self, app, client):
        stub = self.use(app, StubGeocodingClient(response=[NOMINATIM_HIT] * 7))

        resp = client.get("/api/addresses/search", params={"q": "tidel park"})

        assert resp.status_code == 200
        suggestions = resp.json()
        assert len(suggestions) == 5
        assert suggestions[0]["place_id"] == "298471"
        assert suggestions[0]["city"] == "Taramani"
        assert suggestions[0]["latitude"] == 12.989
        assert stub.requests[0] == ("search", {"q": "tidel park"})

    def test_short_query(self, app, client):
        stub = self.use(app, StubGeocodingClient(response=[]))

        assert client.get("/api/addresses/search", params={"q": "ti"}).status_code == 400
        assert stub.requests == []

    def test_reverse(self, app, client):
        self.use(app, StubGeocodingClient(response=NOMINATIM_HIT))

        resp = client.get("/api/addresses/reverse", params={"lat": 12.989, "lon": 80.248})

        assert resp.status_code == 200
        assert resp.json()["postal_code"] == "600113"

    def test_reverse_requires_both_coordinates(self, app, client):
        self.use(app, StubGeocodingClient(response=NOMINATIM_HIT))
        assert client.get("/api/addresses/reverse", params={"lat": 12.989}).status_code == 400

    def test_reverse_rejects_non_numeric_coordinates(self, app, client):
        stub = self.use(app, StubGeocodingClient(response=NOMINATIM_HIT))

        resp = client.get("/api/addresses/reverse", params={"lat": "north", "lon": "80.248"})

        assert resp.status_code == 400
        assert resp.json()["detail"] == "Latitude and longitude are required"
        assert stub.requests == []

    def test_provider_down(self, app, client):
        self.use(app, StubGeocodingClient(error=RequestsConnectionError("down")))

        resp = client.get("/api/addresses/search", params={"q": "tidel park"})

        assert resp.status_code == 502
        assert resp.json()["detail"] == "Unable to fetch address suggestions"


class TestOrders:
    def test_checkout_flow(self, client, headers, dosa):
        client.post("/api/addresses", json=address_data("Home"), headers=headers)
        client.post("/api/cart/add", json={"recipe_id": dosa.id, "quantity": 2}, headers=headers)

        resp = client.post("/api/orders/create", json={"payment_status": "paid"}, headers=headers)
        assert resp.status_code == 201
        order = resp.json()
        assert money(order["total_amount"]) == Decimal("258.00")
        assert order["address_label"] == "Home"
        assert [(i["name"], i["quantity"]) for i in order["items"]] == [("Masala Dosa", 2)]
        assert client.get("/api/cart", headers=headers).json()["items"] == []

        assert [o["id"] for o in client.get("/api/orders", headers=headers).json()] == [order["id"]]
        assert client.get(f"/api/orders/{order['id']}", headers=headers).json()["payment_status"] == "paid"

        resp = client.put(f"/api/orders/{order['id']}/status", json={"status": "packed"}, headers=headers)
        assert resp.json() == {"message": "Order status updated"}

        resp = client.put(f"/api/orders/{order['id']}/status", json={"status": "lost"}, headers=headers)
        assert resp.status_code == 400
        assert client.get(f"/api/orders/{order['id']}", headers=headers).json()["status"] == "packed"

    def test_empty_cart(self, client, headers):
        client.post("/api/addresses", json=address_data("Home"), headers=headers)

        resp = client.post("/api/orders/create", json={}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Cart is empty"

    def test_no_address(self, client, headers, dosa):
        client.post("/api/cart/add", json={"recipe_id": dosa.id}, headers=headers)

        resp = client.post("/api/orders/create", json={}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Please add a delivery address before placing an order"

    def test_foreign_order(self, client, headers, other_user):
        assert client.get("/api/orders/1", headers=auth_headers(other_user)).status_code == 404


class TestPayment:
    def test_key_is_public(self, client):
        assert client.get("/api/payment/key").json() == {"key": "rzp_test_123456"}

    def test_intent_and_verify(self, client, headers):
        intent = client.post("/api/payment/create-order", json={"amount": "199.50"}, headers=headers).json()
        assert intent["id"].startswith("order_mock_")
        assert intent["amount"] == 19950
        assert intent["currency"] == "INR"

        resp = client.post(
            "/api/payment/verify",
            json={"razorpay_order_id": intent["id"], "razorpay_payment_id": "pay_1"},
            headers=headers,
        )
        assert resp.json()["success"] is True
        assert resp.json()["mode"] == "mock"

    def test_amount_must_be_positive(self, client, headers):
        assert client.post("/api/payment/create-order", json={"amount": 0}, headers=headers).status_code == 422

    def test_requires_login(self, client):
        assert client.post("/api/payment/create-order", json={"amount": 10}).status_code == 401


class TestMembership:
    def test_upgrade(self, client, headers):
        assert client.get("/api/membership", headers=headers).json()["is_active"] is False

        resp = client.post("/api/membership/upgrade", json={"membership_type": "gold"}, headers=headers)
        assert resp.status_code == 200

        membership = client.get("/api/membership", headers=headers).json()
        assert membership["membership_type"] == "gold"
        assert membership["is_active"] is True

    def test_invalid_tier(self, client, headers):
        resp = client.post("/api/membership/upgrade", json={"membership_type": "platinum"}, headers=headers)
        assert resp.status_code == 400

    def test_benefits(self, client):
        tiers = client.get("/api/membership/benefits").json()
        assert sorted(tiers) == ["bronze", "gold", "silver"]
        assert money(tiers["gold"]["price"]) == Decimal("39.99")


class TestDelivery:
    def test_route_and_tracking(self, client, headers, routing_client, dosa):
        home = client.post("/api/addresses", json=address_data("Home"), headers=headers).json()

        route = client.get("/api/delivery/route", params={"addressId": home["id"]}, headers=headers).json()
        assert route["destination"]["id"] == home["id"]
        assert route["etaMinutes"] == 18
        assert len(route["path"]) == 2

        client.post("/api/cart/add", json={"recipe_id": dosa.id}, headers=headers)
        order = client.post("/api/orders/create", json={}, headers=headers).json()
        client.put(f"/api/orders/{order['id']}/status", json={"status": "on_the_way"}, headers=headers)

        tracking = client.get(f"/api/delivery/orders/{order['id']}/tracking", headers=headers).json()
        assert tracking["status"] == "on_the_way"
        assert tracking["progress"] == 0.5
        assert tracking["rider_position"]["lat"] == pytest.approx((12.96762 + 12.9716) / 2)

    def test_progress_out_of_range(self, client, headers):
        resp = client.get("/api/delivery/orders/1/tracking", params={"progress": 2}, headers=headers)
        assert resp.status_code == 422

    def test_route_without_address(self, client, headers):
        assert client.get("/api/delivery/route", headers=headers).status_code == 404
