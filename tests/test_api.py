import pytest
from fastapi.testclient import TestClient

from course_search.exceptions import SearchFailedError
from course_search.main import app
from course_search.routers.search import get_executor, parse_minutes_param, parse_modality_param
from course_search.models.enums import Modality


@pytest.fixture
def client(seeded_db):
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def codes(body):
    return [f"{c['subject']} {c['number']}" for c in body["results"]]


def test_root(client):
    assert client.get("/").status_code == 200


def test_search_wire_shape(client):
    r = client.get("/search", params={"subject": "cs", "pageSize": 1})
    assert r.status_code == 200
    body = r.json()
    assert set(body) == {"count", "total", "page", "pageSize", "hasMore", "results"}
    assert body["count"] == 1
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["pageSize"] == 1
    assert body["hasMore"] is True

    course = body["results"][0]
    assert course["subject"] == "CS"
    assert course["geCodes"] == ["GE-IIB"]
    section = course["sections"][0]
    assert section["sectionCode"] == "101"
    assert section["modality"] == "IN_PERSON"
    assert section["term"]["code"] == "2026SP"
    assert section["meetings"][0] == {
        "id": section["meetings"][0]["id"],
        "days": "MWF",
        "startMin": 540,
        "endMin": 590,
        "location": "A101",
    }
    assert section["instructors"][0]["name"] == "Ada Lovelace"


def test_search_repeatable_params(client):
    r = client.get("/search", params=[("days", "M"), ("days", "W"), ("timeStart", "2:00 PM")])
    assert codes(r.json()) == ["MATH 150", "MATH 180"]

    r = client.get("/search", params=[("ge", "GE-IIB"), ("ge", "GE-IVC")])
    assert codes(r.json()) == ["CS 150", "MATH 150", "MATH 180"]


def test_search_open_seats_only(client):
    body = client.get("/search", params={"openSeatsOnly": "true"}).json()
    assert codes(body) == ["CS 150", "MATH 150", "MATH 180"]
    assert [s["id"] for s in body["results"][0]["sections"]] == [102]


def test_malformed_params_do_not_error(client):
    r = client.get("/search", params={
        "page": "abc", "pageSize": "-5", "timeStart": "not a time", "modality": "zzz",
    })
    assert r.status_code == 200
    body = r.json()
    assert body["page"] == 1
    assert body["pageSize"] == 1
    assert body["total"] == 5


def test_page_size_is_capped(client):
    body = client.get("/search", params={"pageSize": "100000"}).json()
    assert body["pageSize"] == 100


def test_unknown_term_is_empty_not_an_error(client):
    body = client.get("/search", params={"term": "1999XX"}).json()
    assert body["total"] == 0
    assert body["results"] == []
    assert body["hasMore"] is False


def test_search_failure_is_500(client):
    class Broken:
        def search(self, *a, **kw):
            raise SearchFailedError("db down")

    app.dependency_overrides[get_executor] = lambda: Broken()
    r = client.get("/search")
    assert r.status_code == 500
    assert r.json()["detail"]["error"] == "Search failed"


def test_terms_and_requirements(client):
    assert client.get("/terms").json() == {
        "terms": [{"code": "2026SP", "name": "Spring 2026"}, {"code": "2025FA", "name": "Fall 2025"}],
    }

    body = client.get("/requirements", params={"term": "2026SP"}).json()
    assert [r["code"] for r in body["requirements"]] == ["GE-IIB", "GE-IVC"]

    r = client.get("/requirements", params={"term": "1999XX"})
    assert r.status_code == 404
    assert r.json()["detail"]["error"] == "Term not found: 1999XX"


def _item(section_id, days, start, end):
    return {
        "sectionId": section_id,
        "courseCode": f"TEST {section_id}",
        "meetings": [{"days": days, "startMin": start, "endMin": end}],
    }


def test_schedule_check(client):
    a = _item("A", "MWF", 540, 590)

    r = client.post("/schedule/check", json={"items": [a], "candidate": _item("B", "MW", 570, 620)})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is False
    assert body["conflicts"] == [{"withSectionId": "A", "reason": "Time conflict"}]
    assert body["message"]

    r = client.post("/schedule/check", json={"items": [a], "candidate": _item("C", "TR", 540, 590)})
    assert r.json()["ok"] is True


def test_schedule_check_accepts_numeric_section_ids(client):
    r = client.post("/schedule/check", json={
        "items": [_item(101, "MWF", 540, 590)],
        "candidate": _item(102, "M", 560, 600),
    })
    assert r.json()["conflicts"][0]["withSectionId"] == "101"


def test_schedule_conflict_map(client):
    items = [_item("A", "MWF", 540, 590), _item("B", "MW", 570, 620), _item("C", "TR", 540, 590)]
    body = client.post("/schedule/conflicts", json={"items": items}).json()
    assert set(body["conflicts"]) == {"A", "B"}


def test_schedule_conflicts_with_spelled_out_days(client):
    items = [_item("E", "U", 540, 600), _item("D", "TUESDAY", 540, 600), _item("F", "Th", 540, 600)]
    body = client.post("/schedule/conflicts", json={"items": items}).json()
    assert body["conflicts"] == {}

    r = client.post("/schedule/check", json={"items": items, "candidate": _item("G", "R", 570, 630)})
    assert r.json()["conflicts"] == [{"withSectionId": "F", "reason": "Time conflict"}]


def test_schedule_export(client):
    items = [_item("A", "MWF", 540, 590)]

    r = client.post("/schedule/export", json={"items": items})
    assert r.status_code == 200
    assert "MWF 9:00 AM" in r.text

    r = client.post("/schedule/export", params={"format": "ics"}, json={"items": items})
    assert r.headers["content-type"].startswith("text/calendar")
    assert "BEGIN:VEVENT" in r.text

    r = client.post("/schedule/export", params={"format": "xlsx"}, json={"items": items})
    assert r.status_code == 200
    assert r.content[:2] == b"PK"
    assert "attachment" in r.headers["content-disposition"]

    r = client.post("/schedule/export", params={"format": "pdf"}, json={"items": items})
    assert r.status_code == 422


def test_param_helpers():
    assert parse_minutes_param("540") == 540
    assert parse_minutes_param("9:00 AM") == 540
    assert parse_minutes_param("99999") is None
    assert parse_minutes_param("") is None
    assert parse_modality_param("hybrid") is Modality.HYBRID
    assert parse_modality_param("UNKNOWN") is Modality.UNKNOWN
    assert parse_modality_param("nonsense") is None
