"""
API tests for the generic entity routes.

Every entity is served by the same handler set, so most checks run against
products and clients and a parametrized smoke test covers the rest.
"""
import pytest
from fastapi.testclient import TestClient

from app.models import Admin, Cart, Client
from app.models.entity import ENTITIES


class TestListAll:

    @pytest.mark.parametrize("route", sorted(ENTITIES))
    def test_empty_table_is_an_empty_array(self, client: TestClient, route):
        response = client.get(f"/{route}")

        assert response.status_code == 200
        assert response.json() == []

    def test_returns_every_row(self, client: TestClient):
        for name in ("Widget", "Gadget", "Doohickey"):
            client.post("/products", json={"name": name, "price": 1.5})

        response = client.get("/products")

        assert response.status_code == 200
        assert len(response.json()) == 3
        assert {p["name"] for p in response.json()} == {"Widget", "Gadget", "Doohickey"}


class TestGetById:

    @pytest.mark.parametrize("route", sorted(ENTITIES))
    def test_missing_row_is_404(self, client: TestClient, route):
        response = client.get(f"/{route}/999")

        assert response.status_code == 404
        assert response.json() == {"error": f"{ENTITIES[route].name} not found"}

    def test_non_numeric_id_matches_nothing(self, client: TestClient):
        client.post("/products", json={"name": "Widget", "price": 9.99})

        response = client.get("/products/abc")

        assert response.status_code == 404
        assert response.json() == {"error": "product not found"}

    def test_returns_single_object(self, client: TestClient, make_client):
        created = make_client()

        response = client.get(f"/clients/{created['idClient']}")

        assert response.status_code == 200
        assert response.json() == created


class TestListBounded:

    def test_caps_row_count(self, client: TestClient):
        for i in range(5):
            client.post("/products", json={"name": f"P{i}", "price": i})

        response = client.get("/products/quantity/2")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["P0", "P1"]

    def test_limit_above_row_count_returns_all(self, client: TestClient):
        client.post("/products", json={"name": "Only", "price": 1})

        response = client.get("/products/quantity/10")

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_empty_table_is_not_404(self, client: TestClient):
        response = client.get("/companies/quantity/3")

        assert response.status_code == 200
        assert response.json() == []

    def test_negative_count_rejected(self, client: TestClient):
        response = client.get("/products/quantity/-1")

        assert response.status_code == 422

    def test_count_is_not_interpolated(self, client: TestClient):
        client.post("/products", json={"name": "Widget", "price": 1})

        response = client.get("/products/quantity/1; DROP TABLE product")

        assert response.status_code == 422
        assert client.get("/products").status_code == 200


class TestCreate:

    def test_widget_example(self, client: TestClient):
        response = client.post("/products", json={"name": "Widget", "price": 9.99})

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Widget"
        assert body["price"] == 9.99
        assert isinstance(body["idProduct"], int)

        fetched = client.get(f"/products/{body['idProduct']}")
        assert fetched.status_code == 200
        assert fetched.json() == body

    def test_duplicate_key_is_409(self, client: TestClient, make_client):
        make_client(email="dup@example.com")

        response = client.post("/clients", json={"name": "Other", "email": "dup@example.com"})

        assert response.status_code == 409
        assert response.json() == {"error": "duplicate data"}
        # nothing partial left behind
        assert len(client.get("/clients").json()) == 1

    def test_duplicate_explicit_id_is_409(self, client: TestClient):
        client.post("/companies", json={"idCompany": 7, "name": "Acme"})

        response = client.post("/companies", json={"idCompany": 7, "name": "Other"})

        assert response.status_code == 409
        assert response.json() == {"error": "duplicate data"}

    def test_unknown_column_is_500_without_driver_detail(self, client: TestClient):
        response = client.post("/products", json={"name": "Widget", "colour": "red"})

        assert response.status_code == 500
        assert response.json() == {"error": "Error inserting data into product table."}

    def test_missing_required_column_is_500(self, client: TestClient):
        response = client.post("/clients", json={"name": "No email"})

        assert response.status_code == 500
        assert "error" in response.json()
        assert client.get("/clients").json() == []


class TestUpdate:

    def test_missing_row_is_404(self, client: TestClient):
        response = client.put("/products/42", json={"price": 2})

        assert response.status_code == 404
        assert response.json() == {"error": "product not found"}

    def test_merges_only_given_fields(self, client: TestClient):
        created = client.post(
            "/products", json={"name": "Widget", "price": 9.99, "description": "Blue"}
        ).json()

        response = client.put(f"/products/{created['idProduct']}", json={"price": 12.5})

        assert response.status_code == 200
        assert response.json() == {**created, "price": 12.5}

    def test_empty_body_returns_current_row(self, client: TestClient, make_client):
        created = make_client()

        response = client.put(f"/clients/{created['idClient']}", json={})

        assert response.status_code == 200
        assert response.json() == created

    def test_unique_violation_is_409(self, client: TestClient, make_client):
        make_client(email="a@example.com")
        other = make_client(name="Bo", email="b@example.com")

        response = client.put(f"/clients/{other['idClient']}", json={"email": "a@example.com"})

        assert response.status_code == 409
        assert response.json() == {"error": "duplicate data"}


class TestDelete:

    def test_is_idempotent(self, client: TestClient):
        created = client.post("/products", json={"name": "Widget", "price": 1}).json()
        path = f"/products/{created['idProduct']}"

        first = client.delete(path)
        second = client.delete(path)

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json() == {"success": "product deleted"}
        assert client.get(path).status_code == 404

    def test_missing_id_still_succeeds(self, client: TestClient):
        response = client.delete("/admins/12345")

        assert response.status_code == 200
        assert response.json() == {"success": "admin deleted"}


class TestEntitySmoke:

    @pytest.mark.parametrize(
        "route, payload",
        [
            ("admins", {"name": "Root", "email": "root@example.com"}),
            ("clients", {"name": "Ana", "email": "ana@example.com"}),
            ("companies", {"name": "Acme"}),
            ("products", {"name": "Widget", "price": 3}),
        ],
    )
    def test_full_lifecycle(self, client: TestClient, route, payload):
        id_column = ENTITIES[route].id_column

        created = client.post(f"/{route}", json=payload).json()
        entity_id = created[id_column]
        updated = client.put(f"/{route}/{entity_id}", json={"name": "Renamed"})
        deleted = client.delete(f"/{route}/{entity_id}")

        assert updated.status_code == 200
        assert updated.json()["name"] == "Renamed"
        assert deleted.status_code == 200
        assert client.get(f"/{route}").json() == []


class TestColumnValues:

    def test_iso_datetime_accepted_on_create(self, client: TestClient, make_client):
        owner = make_client()

        response = client.post("/carts", json={
            "idClient": owner["idClient"],
            "creationDate": "2024-01-01T10:00:00",
        })

        assert response.status_code == 200
        assert response.json()["creationDate"].startswith("2024-01-01T10:00:00")
        assert response.json()["status"] == "Processing"

    def test_fetched_row_can_be_put_back(self, client: TestClient, make_client):
        created = make_client()
        path = f"/clients/{created['idClient']}"
        fetched = client.get(path).json()

        response = client.put(path, json=fetched)

        assert response.status_code == 200
        assert response.json() == fetched

    def test_unparseable_datetime_is_500(self, client: TestClient, make_client):
        owner = make_client()

        response = client.post("/carts", json={"idClient": owner["idClient"], "creationDate": "yesterday"})

        assert response.status_code == 500
        assert response.json() == {"error": "Error inserting data into cart table."}

    def test_nested_value_is_500_json(self, client: TestClient):
        response = client.post("/products", json={"name": {"en": "Widget"}, "price": 1})

        assert response.status_code == 500
        assert response.json() == {"error": "Error inserting data into product table."}

    def test_update_can_move_row_to_new_id(self, client: TestClient):
        created = client.post("/products", json={"name": "Widget", "price": 1}).json()

        response = client.put(f"/products/{created['idProduct']}", json={"idProduct": 500})

        assert response.status_code == 200
        assert response.json() == {**created, "idProduct": 500}
        assert client.get(f"/products/{created['idProduct']}").status_code == 404
        assert client.get("/products/500").json() == response.json()


class TestOversizedNumbers:

    HUGE = "99999999999999999999"

    def test_get_is_404(self, client: TestClient):
        response = client.get(f"/products/{self.HUGE}")

        assert response.status_code == 404
        assert response.json() == {"error": "product not found"}

    def test_put_is_404(self, client: TestClient):
        response = client.put(f"/products/{self.HUGE}", json={"price": 1})

        assert response.status_code == 404
        assert response.json() == {"error": "product not found"}

    def test_delete_still_succeeds(self, client: TestClient):
        response = client.delete(f"/products/{self.HUGE}")

        assert response.status_code == 200
        assert response.json() == {"success": "product deleted"}

    def test_bounded_list_count_rejected(self, client: TestClient):
        response = client.get(f"/products/quantity/{self.HUGE}")

        assert response.status_code == 422

    def test_oversized_value_in_body_is_500_json(self, client: TestClient):
        response = client.post("/products", json={"name": "Widget", "price": 1, "idCompany": int(self.HUGE)})

        assert response.status_code == 500
        assert response.json() == {"error": "Error inserting data into product table."}


class TestTimestamps:

    @pytest.mark.parametrize(
        "model, column",
        [(Admin, "createdAt"), (Client, "createdAt"), (Cart, "creationDate")],
    )
    def test_column_default_is_timezone_aware(self, model, column):
        default = model.__table__.c[column].default

        assert default.arg(None).tzinfo is not None

    @pytest.mark.parametrize(
        "route, payload, column",
        [
            ("admins", {"name": "Root", "email": "root@example.com"}, "createdAt"),
            ("clients", {"name": "Ana", "email": "ana@example.com"}, "createdAt"),
        ],
    )
    def test_filled_on_create(self, client: TestClient, route, payload, column):
        response = client.post(f"/{route}", json=payload)

        assert response.status_code == 200
        assert response.json()[column]

    def test_filled_on_first_add_to_cart(self, client: TestClient, make_client):
        owner = make_client()

        response = client.post("/carts/add", json={"idClient": owner["idClient"], "idProduct": 1})

        assert response.status_code == 200
        assert response.json()["cart"]["creationDate"]
