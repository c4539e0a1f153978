from fastapi.testclient import TestClient

from app.core.tokens import create_access_token


def test_health_is_public(client: TestClient):
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "OK"


def test_missing_token(client: TestClient):
    response = client.get("/api/students")

    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_FAILED"


def test_malformed_header(client: TestClient):
    response = client.get("/api/students", headers={"Authorization": "Token abc"})

    assert response.status_code == 401


def test_invalid_token(client: TestClient):
    response = client.get("/api/students", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_expired_token(client: TestClient):
    token = create_access_token(sub="auth0|tester", expires_minutes=-5)

    response = client.get("/api/students", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_certificate_routes_are_protected(client: TestClient):
    response = client.get("/api/students/1/certificates")

    assert response.status_code == 401


def test_class_routes_are_protected(client: TestClient):
    response = client.post("/api/classes", json={"name": "C1"})

    assert response.status_code == 401


def test_valid_token(client: TestClient, auth_headers):
    response = client.get("/api/students", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == []


def test_uploads_are_public(client: TestClient, auth_headers, storage):
    storage.save("documents", "public.txt", b"hello")

    response = client.get("/uploads/documents/public.txt")

    assert response.status_code == 200
    assert response.content == b"hello"


def test_metrics_are_exposed(client: TestClient, auth_headers):
    client.get("/api/students", headers=auth_headers)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text
