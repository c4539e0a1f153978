import base64

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from app.models.certificate import LastCertificate

PDF_1 = b"%PDF-1.4 first"
PDF_2 = b"%PDF-1.4 second"


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _student_id(client: TestClient, headers: dict) -> int:
    return client.post("/api/students", data={"firstName": "Ana"}, headers=headers).json()["student"]["id"]


def _count(db_session) -> int:
    return db_session.scalar(select(func.count()).select_from(LastCertificate))


def test_upsert_twice_keeps_single_row(client: TestClient, auth_headers, db_session):
    sid = _student_id(client, auth_headers)
    url = f"/api/students/{sid}/certificates/birth"

    first = client.post(url, json={"generatedData": {"name": "Ana"}, "pdfBase64": _b64(PDF_1)}, headers=auth_headers)
    second = client.post(url, json={"generatedData": {"name": "Ana S."}, "pdfBase64": _b64(PDF_2)}, headers=auth_headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert _count(db_session) == 1

    listed = client.get(f"/api/students/{sid}/certificates", headers=auth_headers).json()
    assert len(listed) == 1
    assert listed[0]["certificateType"] == "birth"
    assert listed[0]["generatedData"] == {"name": "Ana S."}
    assert base64.b64decode(listed[0]["pdfBase64"]) == PDF_2
    assert listed[0]["pdfMimeType"] == "application/pdf"


def test_one_row_per_type(client: TestClient, auth_headers):
    sid = _student_id(client, auth_headers)
    for ctype in ("birth", "income", "tax"):
        response = client.post(
            f"/api/students/{sid}/certificates/{ctype}",
            json={"generatedData": {"t": ctype}, "pdfBase64": _b64(PDF_1)},
            headers=auth_headers,
        )
        assert response.status_code == 200

    listed = client.get(f"/api/students/{sid}/certificates", headers=auth_headers).json()
    assert sorted(c["certificateType"] for c in listed) == ["birth", "income", "tax"]


def test_missing_pdf_is_rejected(client: TestClient, auth_headers, db_session):
    sid = _student_id(client, auth_headers)

    response = client.post(
        f"/api/students/{sid}/certificates/birth",
        json={"generatedData": {"name": "Ana"}},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Missing generatedData or pdfBase64"
    assert _count(db_session) == 0


def test_missing_generated_data_does_not_touch_existing(client: TestClient, auth_headers):
    sid = _student_id(client, auth_headers)
    url = f"/api/students/{sid}/certificates/birth"
    client.post(url, json={"generatedData": {"v": 1}, "pdfBase64": _b64(PDF_1)}, headers=auth_headers)

    response = client.post(url, json={"pdfBase64": _b64(PDF_2)}, headers=auth_headers)

    assert response.status_code == 400
    listed = client.get(f"/api/students/{sid}/certificates", headers=auth_headers).json()
    assert listed[0]["generatedData"] == {"v": 1}


def test_empty_body_is_rejected(client: TestClient, auth_headers):
    sid = _student_id(client, auth_headers)

    response = client.post(f"/api/students/{sid}/certificates/birth", headers=auth_headers)

    assert response.status_code == 400


@pytest.mark.parametrize("pdf_base64", ["!!!!", "not base64", "data:application/pdf;base64,@@"])
def test_invalid_base64_is_rejected(client: TestClient, auth_headers, db_session, pdf_base64):
    sid = _student_id(client, auth_headers)

    response = client.post(
        f"/api/students/{sid}/certificates/birth",
        json={"generatedData": {"a": 1}, "pdfBase64": pdf_base64},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert _count(db_session) == 0


def test_wrapped_base64_is_accepted(client: TestClient, auth_headers):
    sid = _student_id(client, auth_headers)
    encoded = _b64(PDF_1)

    response = client.post(
        f"/api/students/{sid}/certificates/birth",
        json={"generatedData": {"a": 1}, "pdfBase64": encoded[:8] + "\n" + encoded[8:]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert base64.b64decode(response.json()["pdfBase64"]) == PDF_1


def test_unknown_type_is_rejected(client: TestClient, auth_headers):
    sid = _student_id(client, auth_headers)

    response = client.post(
        f"/api/students/{sid}/certificates/diploma",
        json={"generatedData": {}, "pdfBase64": _b64(PDF_1)},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "birth" in response.json()["details"]["allowed"]


def test_unknown_student(client: TestClient, auth_headers, db_session):
    response = client.post(
        "/api/students/4242/certificates/birth",
        json={"generatedData": {"x": 1}, "pdfBase64": _b64(PDF_1)},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert _count(db_session) == 0


def test_download_pdf(client: TestClient, auth_headers):
    sid = _student_id(client, auth_headers)
    client.post(
        f"/api/students/{sid}/certificates/language",
        json={"generatedData": {"lang": "en"}, "pdfBase64": "data:application/pdf;base64," + _b64(PDF_1)},
        headers=auth_headers,
    )

    response = client.get(f"/api/students/{sid}/certificates/language/pdf", headers=auth_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content == PDF_1

    missing = client.get(f"/api/students/{sid}/certificates/tax/pdf", headers=auth_headers)
    assert missing.status_code == 404


def test_certificates_removed_with_student(client: TestClient, auth_headers, db_session):
    sid = _student_id(client, auth_headers)
    client.post(
        f"/api/students/{sid}/certificates/birth",
        json={"generatedData": {"x": 1}, "pdfBase64": _b64(PDF_1)},
        headers=auth_headers,
    )

    client.delete(f"/api/students/{sid}", headers=auth_headers)

    assert _count(db_session) == 0
