"""
Tests for the HTTP surface, using the Flask test client.
"""

import pytest

from app import create_app


# Fixtures

@pytest.fixture
def app():
    return create_app("config.TestingConfig")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(client):
    response = client.post("/login", json={"username": "reseller", "password": "secret"})
    assert response.status_code == 200
    return client


def _add_product(client, product_id, quantity=1):
    assert client.post(f"/configure/{product_id}").status_code == 201
    assert client.post("/configure/media/0").status_code == 200
    client.post("/configure/fields", json={"quantity": quantity, "packaging": "Pop-Top Tin"})
    for _ in range(3):
        assert client.post("/configure/advance").status_code == 200
    response = client.post("/configure/commit")
    assert response.status_code == 201
    return response.get_json()["result"]["item"]


class TestAuth:

    def test_requires_login(self, client):
        assert client.get("/catalog").status_code == 401
        assert client.get("/batch").status_code == 401

    def test_login_requires_credentials(self, client):
        response = client.post("/login", json={"username": "reseller"})
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [["reseller", "secret"], "reseller", 42])
    def test_login_body_must_be_an_object(self, client, body):
        response = client.post("/login", json=body)

        assert response.status_code == 400
        assert response.get_json()["error"] == "bad_request"

    def test_logout_drops_workflow(self, app, logged_in):
        _add_product(logged_in, 1)
        registry = app.config["WORKFLOW_REGISTRY"]
        assert len(registry) == 1

        logged_in.post("/logout")

        assert len(registry) == 0
        assert logged_in.get("/batch").status_code == 401

    def test_health(self, client):
        response = client.get("/health")
        assert response.get_json()["status"] == "ok"


class TestCatalogRoutes:

    def test_list(self, logged_in):
        products = logged_in.get("/catalog").get_json()["products"]
        assert len(products) == 4
        assert products[3]["stock"] == "New Arrival"

    def test_missing_product(self, logged_in):
        response = logged_in.get("/catalog/42")
        assert response.status_code == 404
        assert response.get_json()["error"] == "product_not_found"


class TestConfigureRoutes:

    def test_advance_without_media_is_rejected(self, logged_in):
        logged_in.post("/configure/1")
        response = logged_in.post("/configure/advance")

        assert response.status_code == 422
        body = response.get_json()
        assert body["result"]["failure"] == "MEDIA_REQUIRED"
        assert body["session"]["step"] == "MEDIA_SELECTION"

    def test_media_cap(self, logged_in):
        logged_in.post("/configure/1")
        for ref in range(5):
            logged_in.post(f"/configure/media/{ref}")

        response = logged_in.post("/configure/media/6")

        assert response.status_code == 422
        assert response.get_json()["session"]["selection"]["media_refs"] == [0, 1, 2, 3, 4]

    def test_invalid_field_applies_nothing(self, logged_in):
        logged_in.post("/configure/1")
        response = logged_in.post("/configure/fields", json={"quantity": 4, "style": "Shredded"})

        assert response.status_code == 400
        selection = logged_in.get("/configure").get_json()["session"]["selection"]
        assert selection["quantity"] == 1
        assert selection["style"] is None

    def test_fields_body_must_be_an_object(self, logged_in):
        logged_in.post("/configure/1")
        response = logged_in.post("/configure/fields", json=[{"quantity": 3}])

        assert response.status_code == 400
        assert logged_in.get("/configure").get_json()["session"]["selection"]["quantity"] == 1

    @pytest.mark.parametrize("quantity", [2.9, True, "3.5", None, [2]])
    def test_non_integer_quantity_rejected(self, logged_in, quantity):
        logged_in.post("/configure/1")
        response = logged_in.post("/configure/fields", json={"quantity": quantity, "theme": "Neon Ember"})

        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_choice"
        selection = logged_in.get("/configure").get_json()["session"]["selection"]
        assert selection["quantity"] == 1
        assert selection["theme"] is None

    def test_form_quantity_string(self, logged_in):
        logged_in.post("/configure/1")
        response = logged_in.post("/configure/fields", data={"quantity": "3"})
        assert response.get_json()["session"]["selection"]["quantity"] == 3

    def test_fields_and_price_preview(self, logged_in):
        logged_in.post("/configure/4")
        response = logged_in.post("/configure/fields", json={
            "quantity": 2,
            "theme": "Neon Ember",
            "reseller_mark": "<b>acme-logo.png</b>",
        })

        session = response.get_json()["session"]
        assert session["price_preview"] == 1000
        assert session["selection"]["theme"] == "Neon Ember"
        assert session["selection"]["reseller_mark"] == "acme-logo.png"

    def test_negative_quantity_clamped(self, logged_in):
        logged_in.post("/configure/1")
        response = logged_in.post("/configure/fields", json={"quantity": -3})
        assert response.get_json()["session"]["selection"]["quantity"] == 1

    def test_second_session_conflicts(self, logged_in):
        logged_in.post("/configure/1")
        response = logged_in.post("/configure/2")
        assert response.status_code == 409
        assert response.get_json()["error"] == "session_active"

        response = logged_in.post("/configure/2", json={"replace": True})
        assert response.status_code == 201

    def test_commit_before_review_rejected(self, logged_in):
        logged_in.post("/configure/1")
        logged_in.post("/configure/media/0")
        response = logged_in.post("/configure/commit")

        assert response.status_code == 422
        assert logged_in.get("/batch").get_json()["count"] == 0

    def test_no_session(self, logged_in):
        assert logged_in.post("/configure/advance").status_code == 409

    def test_abandon(self, logged_in):
        logged_in.post("/configure/1")
        response = logged_in.post("/configure/abandon")
        assert response.get_json()["summary"]["configuring"] is None


class TestBatchRoutes:

    def test_submit_batch(self, logged_in):
        _add_product(logged_in, 1, quantity=5)
        _add_product(logged_in, 2)

        response = logged_in.post("/batch/submit")

        assert response.status_code == 201
        order = response.get_json()["order"]
        assert order["total"] == 800
        assert order["items"] == 2
        assert order["status"] == "Pending"
        assert logged_in.get("/batch").get_json()["count"] == 0

        orders = logged_in.get("/orders").get_json()["orders"]
        assert orders[0]["id"] == order["id"]
        assert logged_in.get(f"/orders/{order['id']}").status_code == 200

    def test_submit_empty_batch(self, logged_in):
        response = logged_in.post("/batch/submit")
        assert response.status_code == 409
        assert response.get_json()["error"] == "empty_batch"
        assert logged_in.get("/orders").get_json()["orders"] == []

    def test_remove_item(self, logged_in):
        item = _add_product(logged_in, 1)

        missing = logged_in.delete(f"/batch/{item['assigned_id'] + 1}")
        assert missing.status_code == 404
        assert logged_in.get("/batch").get_json()["count"] == 1

        response = logged_in.delete(f"/batch/{item['assigned_id']}")
        assert response.status_code == 200
        assert response.get_json()["batch"]["count"] == 0
