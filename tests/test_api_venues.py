import httpx
from starlette.testclient import TestClient

from wififinder.api.app import app


def _overpass_down(monkeypatch):
    def fake_post_form(*_args, **_kwargs):
        raise httpx.ConnectError("overpass unreachable")

    monkeypatch.setattr("wififinder.ingestion.overpass_client.post_form", fake_post_form)


def test_api_venues_returns_sorted_venues_with_count(monkeypatch):
    _overpass_down(monkeypatch)

    with TestClient(app) as c:
        resp = c.get("/api/venues", params={"lat": "40.0", "lon": "-73.0", "radius": "1000"})

    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"venues", "count"}
    assert data["count"] == len(data["venues"]) == 4
    distances = [v["distance_m"] for v in data["venues"]]
    assert distances == sorted(distances)
    assert all(v["wifi"]["ssid"] for v in data["venues"])


def test_api_venues_defaults_radius_when_missing_or_garbage(monkeypatch):
    _overpass_down(monkeypatch)

    with TestClient(app) as c:
        missing = c.get("/api/venues", params={"lat": "40.0", "lon": "-73.0"})
        garbage = c.get("/api/venues", params={"lat": "40.0", "lon": "-73.0", "radius": "far"})
        wide = c.get("/api/venues", params={"lat": "40.0", "lon": "-73.0", "radius": "20000"})

    assert missing.json()["count"] == 4
    assert garbage.json()["count"] == 4
    assert wide.json()["count"] == 12


def test_api_venues_applies_category_flags(monkeypatch):
    _overpass_down(monkeypatch)

    with TestClient(app) as c:
        resp = c.get(
            "/api/venues",
            params={"lat": "40.0", "lon": "-73.0", "radius": "20000", "library": "false"},
        )

    data = resp.json()
    assert data["count"] == len(data["venues"]) == 9
    assert all(v["category"] != "library" for v in data["venues"])


def test_api_rejects_zero_coordinates_before_fetching(monkeypatch):
    import wififinder.api.routes as routes

    def must_not_run(*_args, **_kwargs):
        raise AssertionError("discovery must not run for invalid input")

    monkeypatch.setattr(routes, "discover_venues", must_not_run)

    with TestClient(app) as c:
        zero = c.get("/api/venues", params={"lat": "0", "lon": "0"})
        missing = c.get("/api/venues")

    assert zero.status_code == 400
    assert zero.json() == {"error": "Invalid coordinates"}
    assert missing.status_code == 400


def test_api_reports_generic_failure_on_assembly_error(monkeypatch):
    _overpass_down(monkeypatch)
    import wififinder.discovery.pipeline as pipeline

    def boom(*_args, **_kwargs):
        raise RuntimeError("sort blew up")

    monkeypatch.setattr(pipeline, "assemble", boom)

    with TestClient(app) as c:
        resp = c.get("/api/venues", params={"lat": "40.0", "lon": "-73.0"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch venues"}


def test_api_health():
    with TestClient(app) as c:
        resp = c.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
