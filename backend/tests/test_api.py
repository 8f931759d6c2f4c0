import pytest
from fastapi.testclient import TestClient

from backend.app.main import app
from backend.app.services import filter_service
from backend.core.hrmd.exceptions.xml_exceptions import FilterConfigurationError
from backend.core.hrmd.parsers.xml_parser import parse_payload

from idoc_builders import (
    idoc, person, infotype, org_assignment_slice, personal_data_slice, standard_person
)

OWNERSHIP = {"1000": "SYS_A", "2000": "SYS_B"}


@pytest.fixture
def client():
    return TestClient(app)


def sample_payload():
    return idoc(
        standard_person("00001001", "1000"),
        standard_person("00002001", "2000"),
        person("00003001", infotype("9999", "00003001")),
    )


def test_health_endpoints(client):
    root = client.get("/health")
    versioned = client.get("/api/v1/health")

    assert root.status_code == 200
    assert root.json()["status"] == "ok"
    assert versioned.status_code == 200
    assert versioned.json()["status"] == "healthy"


def test_filter_json_request(client):
    response = client.post("/api/v1/filter/", json={
        "receiver_service": " SYS_A ",
        "ownership": OWNERSHIP,
        "payload": sample_payload().decode("utf-8")
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    document = parse_payload(body["payload"].encode("utf-8"))
    assert [p.get_text("OBJID") for p in document.iter_nodes_by_tag("E1PLOGI")] == ["00001001", "00003001"]
    assert document.iter_nodes_by_tag("E1PITYP")[-1].get_text("INFTY") == "0002"
    assert document.root.get_text("ENAME") == "Smith J. E."

    report = body["report"]
    assert [d["infotype"] for d in report["removed_segments"]] == ["9999"]
    assert [d["object_id"] for d in report["removed_persons"]] == ["00002001"]


def test_filter_raw_request(client):
    response = client.post(
        "/api/v1/filter/raw",
        content=sample_payload(),
        headers=[
            ("Content-Type", "application/xml"),
            ("X-Receiver-Service", "SYS_B"),
            ("X-Ownership", "1000=SYS_A"),
            ("X-Ownership", "2000=SYS_B"),
        ]
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    document = parse_payload(response.content)
    assert [p.get_text("OBJID") for p in document.iter_nodes_by_tag("E1PLOGI")] == ["00002001", "00003001"]


def test_raw_request_without_receiver_keeps_every_person(client):
    response = client.post("/api/v1/filter/raw", content=sample_payload(),
                           headers={"X-Ownership": "1000=SYS_A"})

    assert response.status_code == 200
    document = parse_payload(response.content)
    assert len(document.iter_nodes_by_tag("E1PLOGI")) == 3


def test_invalid_ownership_header_is_rejected(client):
    response = client.post("/api/v1/filter/raw", content=sample_payload(),
                           headers={"X-Receiver-Service": "SYS_A", "X-Ownership": "1000"})

    assert response.status_code == 400


def test_invalid_ownership_key_is_rejected(client):
    response = client.post("/api/v1/filter/", json={
        "receiver_service": "SYS_A",
        "ownership": {"not a code": "SYS_A"},
        "payload": sample_payload().decode("utf-8")
    })

    assert response.status_code == 422


def test_malformed_payload_returns_400(client):
    response = client.post("/api/v1/filter/", json={
        "receiver_service": "SYS_A",
        "ownership": OWNERSHIP,
        "payload": "<HRMD_A09><IDOC>"
    })

    assert response.status_code == 400
    assert "parse" in response.json()["detail"]


def test_missing_configuration_returns_500(client, monkeypatch):
    def broken_orchestrator():
        raise FilterConfigurationError("filter.properties not found")

    monkeypatch.setattr(filter_service, "get_orchestrator", broken_orchestrator)

    response = client.post("/api/v1/filter/raw", content=sample_payload(),
                           headers={"X-Receiver-Service": "SYS_A"})

    assert response.status_code == 500
    assert "filter.properties" in response.json()["detail"]


def test_json_payload_with_legacy_declared_encoding(client):
    text = idoc(person(
        "00001001",
        infotype("0001", "00001001", org_assignment_slice("1000")),
        infotype("0002", "00001001", personal_data_slice(
            surname="Иванов", first_name="Иван", middle_name="Петрович"
        )),
    )).decode("utf-8").replace('encoding="UTF-8"', 'encoding="windows-1251"')

    response = client.post("/api/v1/filter/", json={
        "receiver_service": "SYS_A",
        "ownership": OWNERSHIP,
        "payload": text
    })

    assert response.status_code == 200
    payload = response.json()["payload"]
    assert "windows-1251" not in payload
    document = parse_payload(payload.encode("utf-8"))
    assert document.root.get_text("ENAME") == "Иванов И. П."
    assert document.root.get_text("SNAME") == "ИВАНОВ И. П."


def test_company_code_starting_with_r(client):
    response = client.post("/api/v1/filter/", json={
        "receiver_service": "SYS_A",
        "ownership": {"RU01": "SYS_A"},
        "payload": idoc(standard_person("00001001", "RU01")).decode("utf-8")
    })

    assert response.status_code == 200
    assert [d["object_id"] for d in response.json()["report"]["kept_persons"]] == ["00001001"]


def test_prefixed_ownership_key_is_rejected(client):
    response = client.post("/api/v1/filter/", json={
        "receiver_service": "SYS_A",
        "ownership": {"RRU01": "SYS_A"},
        "payload": sample_payload().decode("utf-8")
    })

    assert response.status_code == 422
