"""Integration tests for the mock storefront API."""

import pytest
from fastapi.testclient import TestClient
from identity.provider import FakeIdentityProvider, HttpIdentityProvider
from ordering.request.errors import RequestRejectedError
from ordering.service import FakeOrderService, HttpOrderService
from shared.storage import MemoryStorage
from storefront.app import create_app
from storefront.session import ShopperSession

ITEMS = [
    {"productId": "veg_tomato", "quantity": 2, "deliveryDay": "Friday"},
    {"productId": "grain_rice", "quantity": 1, "deliveryDay": "Friday"},
]


@pytest.fixture()
def orders():
    return FakeOrderService()


@pytest.fixture()
def client(orders):
    return TestClient(create_app(identity_provider=FakeIdentityProvider(), order_service=orders))


@pytest.fixture()
def token(client):
    handle = client.post("/auth/otp/send", json={"phone": "9876543210"}).json()["handle"]
    return client.post("/auth/otp/verify", json={"handle": handle, "code": "123456"}).json()["token"]


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    def test_health_lists_domains(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert set(response.json()["domains"]) == {"catalogue", "identity", "ordering"}


class TestCatalogueEndpoints:
    def test_list_products(self, client):
        response = client.get("/products")

        assert response.status_code == 200
        products = response.json()
        assert len(products) == 16
        assert products[0]["id"] == "veg_tomato"
        assert "isOrganic" in products[0]

    def test_filter_by_category(self, client):
        response = client.get("/products", params={"category": "Dairy"})
        assert {p["id"] for p in response.json()} == {"dairy_milk", "dairy_ghee", "dairy_paneer"}

    def test_featured(self, client):
        assert len(client.get("/products/featured", params={"count": 3}).json()) == 3

    def test_featured_count_is_bounded(self, client):
        assert client.get("/products/featured", params={"count": 0}).status_code == 422

    def test_categories(self, client):
        assert "Vegetables" in client.get("/products/categories").json()

    def test_get_product(self, client):
        response = client.get("/products/grain_rice")
        assert response.status_code == 200
        assert response.json()["price"] == 80

    def test_unknown_product(self, client):
        assert client.get("/products/nope").status_code == 404

    def test_farmers(self, client):
        farmers = client.get("/farmers").json()
        assert [f["id"] for f in farmers] == ["farmer-1", "farmer-2", "farmer-3"]
        assert client.get("/farmers/farmer-2").json()["farmName"] == "Ganga Dairy Farm"

    def test_unknown_farmer(self, client):
        assert client.get("/farmers/farmer-99").status_code == 404

    def test_farmer_products(self, client):
        products = client.get("/farmers/farmer-2/products").json()
        assert {p["id"] for p in products} == {"dairy_milk", "dairy_ghee", "dairy_paneer"}

    def test_combos(self, client):
        combos = client.get("/combos").json()
        vegetable = next(c for c in combos if c["id"] == "combo-1")

        assert [i["productId"] for i in vegetable["items"]] == ["veg_tomato", "veg_onion"]
        assert vegetable["originalPrice"] == 90
        assert vegetable["price"] == 80


class TestRequestEndpoints:
    def test_create_and_list(self, client, token):
        created = client.post(
            "/requests",
            json={"items": ITEMS, "totalAmount": 180, "deliveryDay": "Friday"},
            headers=_auth(token),
        )

        assert created.status_code == 201
        request_id = created.json()["requestId"]

        listed = client.get("/requests", headers=_auth(token)).json()["requests"]
        assert [r["requestId"] for r in listed] == [request_id]
        assert listed[0]["status"] == "Pending"
        assert listed[0]["totalAmount"] == 180

    def test_idempotency_header(self, client, token):
        body = {"items": ITEMS, "totalAmount": 180, "deliveryDay": "Friday"}
        headers = {**_auth(token), "Idempotency-Key": "abc"}

        first = client.post("/requests", json=body, headers=headers).json()
        second = client.post("/requests", json=body, headers=headers).json()

        assert first["requestId"] == second["requestId"]

    def test_missing_token(self, client):
        response = client.post("/requests", json={"items": ITEMS, "totalAmount": 180, "deliveryDay": "Friday"})
        assert response.status_code == 401

    def test_forged_token(self, client):
        assert client.get("/requests", headers=_auth("mock-token-forged")).status_code == 401

    def test_declined(self, client, token, orders):
        orders.configure(should_succeed=False, failure_reason="No slots left on Friday")

        response = client.post(
            "/requests",
            json={"items": ITEMS, "totalAmount": 180, "deliveryDay": "Friday"},
            headers=_auth(token),
        )

        assert response.status_code == 422
        assert response.json()["success"] is False
        assert response.json()["error"] == "No slots left on Friday"

    def test_order_service_down(self, client, token, orders):
        orders.configure(network_error=True)
        assert client.get("/requests", headers=_auth(token)).status_code == 503

    def test_empty_items_rejected(self, client, token):
        response = client.post(
            "/requests",
            json={"items": [], "totalAmount": 0, "deliveryDay": "Friday"},
            headers=_auth(token),
        )
        assert response.status_code == 422


class TestSessionOverHttp:
    """A shopper session whose adapters talk to the mock API."""

    @pytest.fixture()
    def session(self, client, static_catalogue):
        return ShopperSession.start(
            storage=MemoryStorage(),
            catalogue=static_catalogue,
            identity_provider=HttpIdentityProvider(client=client),
            order_service=HttpOrderService(client=client),
        )

    @pytest.fixture()
    def shopper(self, session):
        session.auth.send_otp("9876543210")
        session.auth.verify_otp("123456")
        session.auth.add_address("12 Station Road", "Bhagalpur", "812001")
        return session

    def test_submit_over_http(self, shopper, static_catalogue):
        shopper.cart.add_item(static_catalogue.get_product("veg_tomato"), 2)

        request = shopper.submit_request("Friday")

        assert request.request_id.startswith("req-")
        assert shopper.cart.get_item_count() == 0
        history = shopper.list_requests()
        assert [r.request_id for r in history] == [request.request_id]
        assert history[0].lines == [{"productId": "veg_tomato", "quantity": 2, "deliveryDay": "Friday"}]

    def test_declined_over_http(self, shopper, static_catalogue, orders):
        orders.configure(should_succeed=False, failure_reason="Outside delivery area")
        shopper.cart.add_item(static_catalogue.get_product("veg_tomato"), 1)

        with pytest.raises(RequestRejectedError):
            shopper.submit_request("Friday")

        assert shopper.cart.get_item_count() == 1
