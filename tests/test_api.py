"""HTTP adapter: status codes and payload shapes."""

import pytest
from fastapi.testclient import TestClient

from digigoods import FixedClock, ProductId
from digigoods.api import create_app
from digigoods.uow import InMemoryStore


@pytest.fixture
def client(store: InMemoryStore, clock: FixedClock) -> TestClient:
    return TestClient(create_app(store.unit_of_work, clock=clock))


def as_user(user_id: int) -> dict[str, str]:
    return {"X-User-Id": str(user_id)}


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout
# ═══════════════════════════════════════════════════════════════════════════════


def test_checkout_ok(client: TestClient, store: InMemoryStore) -> None:
    response = client.post(
        "/checkout",
        json={"userId": 1, "productIds": [1, 2], "discountCodes": ["PRODUCT10", "GENERAL20"]},
        headers=as_user(1),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Order created successfully!"
    assert body["finalPrice"] == 112.0
    assert body["orderId"].startswith("ord_")
    assert store.products[ProductId(1)].stock == 9


def test_checkout_without_codes(client: TestClient) -> None:
    response = client.post("/checkout", json={"userId": 1, "productIds": [2]}, headers=as_user(1))

    assert response.status_code == 200
    assert response.json()["finalPrice"] == 50.0


def test_checkout_requires_caller(client: TestClient) -> None:
    response = client.post("/checkout", json={"userId": 1, "productIds": [1]})

    assert response.status_code == 401
    body = response.json()
    assert body["status"] == 401
    assert body["error"] == "UNAUTHORIZED"
    assert body["path"] == "/checkout"


def test_checkout_for_someone_else(client: TestClient, store: InMemoryStore) -> None:
    response = client.post("/checkout", json={"userId": 2, "productIds": [1]}, headers=as_user(1))

    assert response.status_code == 403
    assert response.json()["error"] == "UNAUTHORIZED_ACCESS"
    assert store.products[ProductId(1)].stock == 10


@pytest.mark.parametrize(
    ("payload", "status", "code"),
    [
        ({"productIds": [99]}, 404, "PRODUCT_NOT_FOUND"),
        ({"productIds": [1], "discountCodes": ["NOPE"]}, 404, "DISCOUNT_NOT_FOUND"),
        ({"productIds": [1], "discountCodes": ["LASTYEAR"]}, 400, "DISCOUNT_EXPIRED"),
        ({"productIds": [1], "discountCodes": ["USEDUP"]}, 409, "DISCOUNT_EXHAUSTED"),
        ({"productIds": [1], "discountCodes": ["EXCESSIVE80"]}, 400, "EXCESSIVE_DISCOUNT"),
        ({"productIds": [3, 3]}, 409, "INSUFFICIENT_STOCK"),
    ],
)
def test_checkout_errors(client: TestClient, payload: dict, status: int, code: str) -> None:
    response = client.post("/checkout", json={"userId": 1, **payload}, headers=as_user(1))

    assert response.status_code == status
    body = response.json()
    assert body["error"] == code
    assert body["status"] == status
    assert body["message"]
    assert body["path"] == "/checkout"


def test_checkout_rejects_empty_cart(client: TestClient) -> None:
    response = client.post("/checkout", json={"userId": 1, "productIds": []}, headers=as_user(1))

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_FAILED"
    assert body["message"].startswith("productIds:")


# ═══════════════════════════════════════════════════════════════════════════════
# Profiles
# ═══════════════════════════════════════════════════════════════════════════════


def test_get_own_profile(client: TestClient) -> None:
    response = client.get("/users/1/profile", headers=as_user(1))

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "alice"
    assert body["firstName"] == "Alice"
    assert body["lastName"] is None


def test_cannot_read_other_profile(client: TestClient) -> None:
    response = client.get("/users/2/profile", headers=as_user(1))

    assert response.status_code == 403


def test_update_profile(client: TestClient) -> None:
    response = client.put(
        "/users/2/profile",
        json={"email": "bob@example.org", "firstName": "Robert", "lastName": "Tables", "phoneNumber": "+15550100"},
        headers=as_user(2),
    )

    assert response.status_code == 200
    assert response.json()["firstName"] == "Robert"
    assert client.get("/users/2/profile", headers=as_user(2)).json()["phoneNumber"] == "+15550100"


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"email": "not-an-email"}, "email"),
        ({"firstName": "x" * 51}, "firstName"),
        ({"phoneNumber": "1" * 21}, "phoneNumber"),
    ],
)
def test_update_profile_validation(client: TestClient, payload: dict, field: str) -> None:
    response = client.put("/users/1/profile", json=payload, headers=as_user(1))

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_FAILED"
    assert response.json()["message"].startswith(field)


def test_profile_of_unknown_user(client: TestClient) -> None:
    response = client.get("/users/42/profile", headers=as_user(42))

    assert response.status_code == 404
    assert response.json()["error"] == "USER_NOT_FOUND"
