"""CORS headers, preflight, ping probe and the critical-error envelope."""

import pytest

from app import CORS_HEADERS

PRODUCTS = "/api/products"


def assert_cors(response):
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


class TestCors:
    @pytest.mark.parametrize("path", [PRODUCTS, "/", "/does/not/exist"])
    def test_preflight_on_any_path(self, client, path):
        response = client.options(path)

        assert response.status_code == 200
        assert response.content == b""
        assert_cors(response)

    def test_headers_on_success(self, client):
        assert_cors(client.get(PRODUCTS))

    def test_headers_on_errors(self, client):
        assert_cors(client.delete(PRODUCTS))
        assert_cors(client.patch(PRODUCTS))
        assert_cors(client.get("/does/not/exist"))

    def test_unknown_path_uses_error_envelope(self, client):
        response = client.get("/does/not/exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestPing:
    def test_reports_configured_credentials(self, client):
        response = client.get(PRODUCTS, params={"ping": 1})

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "message": "API is working",
            "env": {"hasPostgres": True, "hasBlob": True},
        }
        assert_cors(response)

    def test_short_circuits_every_method(self, client, engine, blob_service):
        response = client.post(PRODUCTS, params={"ping": 1}, json={})

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert blob_service.uploads == []

    def test_works_without_any_credentials(self, settings, make_client):
        bare = settings.model_copy(update={"database_url": None, "blob_read_write_token": None})
        client = make_client(bare)

        response = client.get(PRODUCTS, params={"ping": "1"})

        assert response.status_code == 200
        assert response.json()["env"] == {"hasPostgres": False, "hasBlob": False}

    def test_health_route_matches_ping(self, client):
        assert client.get("/health").json() == client.get(PRODUCTS, params={"ping": 1}).json()

    def test_root(self, client):
        assert client.get("/").json()["status"] == "online"


class TestCriticalErrors:
    def test_unexpected_failure_returns_stack_outside_production(self, client, blob_service, product_payload):
        blob_service.fail_with = RuntimeError("socket exploded")

        response = client.post(PRODUCTS, json=product_payload)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Critical server error"
        assert body["message"] == "socket exploded"
        assert "RuntimeError" in body["stack"]
        assert_cors(response)

    def test_production_hides_stack(self, settings, database, blob_service, make_client, product_payload):
        from routes import ApplicationDependencies

        production = settings.model_copy(update={"environment": "production"})
        deps = ApplicationDependencies(settings=production, database=database, blob_service=blob_service)
        client = make_client(production, deps)
        blob_service.fail_with = RuntimeError("socket exploded")

        response = client.post(PRODUCTS, json=product_payload)

        assert response.status_code == 500
        assert response.json() == {"error": "Critical server error", "message": "socket exploded"}
