import pytest
from fastapi.testclient import TestClient

from tracker.data.orders_repository import BackendUnavailableError, OrderNotFoundError, OrderTrackingInputs
from tracker.main import create_app
from tracker.models.domain import GeoPoint, LiveCourierFix


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_snapshot_endpoint_live(api_client: TestClient):
    payload = {
        "pickup": {"lat": 35.3733, "lng": -119.0187},
        "drop": {"lat": 35.4, "lng": -119.05},
        "status": "on_the_way",
        "live_fix": {"lat": 35.385, "lng": -119.035},
        "tick": 4,
    }
    response = api_client.post("/api/tracking/snapshot", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["is_live"] is True
    assert body["mode"] == "live"
    assert body["courier_position"] == {"lat": 35.385, "lng": -119.035}
    assert [segment["kind"] for segment in body["route"]] == ["base", "traveled", "remaining"]
    assert body["remaining_distance_km"] > 0
    assert body["eta_label"].endswith("min")
    assert body["directions_url"].startswith("https://www.google.com/maps/dir/?api=1")


def test_snapshot_endpoint_absorbs_malformed_coordinates(api_client: TestClient):
    payload = {"pickup": {"lat": "abc", "lng": None}, "drop": None, "status": "who-knows"}
    response = api_client.post("/api/tracking/snapshot", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["pickup_used_fallback"] is True
    assert body["drop_used_fallback"] is True
    assert body["remaining_distance_km"] is None
    assert body["eta_label"] is None
    assert body["progress"] >= 0.10


@pytest.mark.parametrize(
    "overrides",
    [
        {"pickup": [35.3733, -119.0187]},
        {"pickup": "abc"},
        {"status": 5},
        {"status": {"value": "ready"}},
        {"tick": "junk"},
        {"tick": 1.5},
        {"live_fix": [35.385, -119.035], "live_fix_observed_at": "yesterday"},
    ],
)
def test_snapshot_endpoint_accepts_loosely_typed_fields(api_client: TestClient, overrides):
    payload = {
        "pickup": {"lat": 35.3733, "lng": -119.0187},
        "drop": {"lat": 35.4, "lng": -119.05},
        "status": "on_the_way",
        **overrides,
    }
    response = api_client.post("/api/tracking/snapshot", json=payload)

    assert response.status_code == 200
    assert response.json()["drop"] == {"lat": 35.4, "lng": -119.05}


def test_snapshot_endpoint_pair_pickup_and_bad_timestamp(api_client: TestClient):
    payload = {
        "pickup": [35.3733, -119.0187],
        "drop": {"lat": 35.4, "lng": -119.05},
        "status": "on_the_way",
        "live_fix": [35.385, -119.035],
        "live_fix_observed_at": "yesterday",
    }
    body = api_client.post("/api/tracking/snapshot", json=payload).json()

    assert body["pickup"] == {"lat": 35.3733, "lng": -119.0187}
    assert body["pickup_used_fallback"] is False
    assert body["is_live"] is True
    assert body["observed_at"] is None
    assert body["updated_label"] == "Updated: —"


def test_snapshot_endpoint_non_string_status_is_low_progress(api_client: TestClient):
    payload = {"pickup": {"lat": 35.3733, "lng": -119.0187}, "drop": {"lat": 35.4, "lng": -119.05}, "status": 5, "tick": 1.5}
    body = api_client.post("/api/tracking/snapshot", json=payload).json()

    assert body["status"] == "5"
    assert body["remaining_distance_km"] is None
    assert 0.10 <= body["progress"] <= 0.16 + 1e-9


def test_snapshot_endpoint_unexpected_error_is_500(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from tracker.api.routes import tracking as tracking_routes

    def explode(payload):
        raise RuntimeError("boom")

    monkeypatch.setattr(tracking_routes, "compute_snapshot", explode)
    response = api_client.post("/api/tracking/snapshot", json={})

    assert response.status_code == 500
    assert "boom" in response.json()["detail"]


def test_order_endpoint_uses_live_fix(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from tracker.services.tracking import service as tracking_service

    inputs = OrderTrackingInputs(
        order_id="o1",
        kind="restaurant",
        status="picked_up",
        pickup=GeoPoint(35.3733, -119.0187),
        drop=GeoPoint(35.4, -119.05),
        delivery_user_id="u1",
    )
    fix = LiveCourierFix(position=GeoPoint(35.385, -119.035), source="view")
    monkeypatch.setattr(tracking_service, "get_order_tracking_inputs", lambda order_id, kind, client=None: inputs)
    monkeypatch.setattr(tracking_service, "fetch_latest_fix", lambda order_id, client=None: fix)

    response = api_client.get("/api/tracking/orders/o1", params={"kind": "restaurant", "tick": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["order_id"] == "o1"
    assert body["is_live"] is True
    assert body["courier_position"] == {"lat": 35.385, "lng": -119.035}


def test_order_endpoint_skips_gps_lookup_before_pickup(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from tracker.services.tracking import service as tracking_service

    inputs = OrderTrackingInputs(order_id="o2", kind="grocery", status="preparing", pickup=None, drop=None)
    monkeypatch.setattr(tracking_service, "get_order_tracking_inputs", lambda order_id, kind, client=None: inputs)

    def fail_lookup(order_id, client=None):
        raise AssertionError("live fix should not be fetched")

    monkeypatch.setattr(tracking_service, "fetch_latest_fix", fail_lookup)

    response = api_client.get("/api/tracking/orders/o2", params={"kind": "grocery"})
    assert response.status_code == 200
    assert response.json()["is_live"] is False


@pytest.mark.parametrize(
    "error, status_code",
    [
        (OrderNotFoundError("Order o3 not found in orders"), 404),
        (BackendUnavailableError("Supabase not configured"), 503),
    ],
)
def test_order_endpoint_error_mapping(api_client: TestClient, monkeypatch: pytest.MonkeyPatch, error, status_code):
    from tracker.services.tracking import service as tracking_service

    def raise_error(order_id, kind, client=None):
        raise error

    monkeypatch.setattr(tracking_service, "get_order_tracking_inputs", raise_error)

    assert api_client.get("/api/tracking/orders/o3").status_code == status_code
    assert api_client.get("/api/tracking/orders/o3/geojson").status_code == status_code


def test_order_endpoint_rejects_unknown_kind(api_client: TestClient):
    response = api_client.get("/api/tracking/orders/o1", params={"kind": "pharmacy"})
    assert response.status_code == 422


def test_order_geojson_endpoint(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from tracker.services.tracking import service as tracking_service

    inputs = OrderTrackingInputs(
        order_id="o4",
        kind="restaurant",
        status="ready",
        pickup=GeoPoint(35.3733, -119.0187),
        drop=GeoPoint(35.4, -119.05),
    )
    monkeypatch.setattr(tracking_service, "get_order_tracking_inputs", lambda order_id, kind, client=None: inputs)

    response = api_client.get("/api/tracking/orders/o4/geojson")

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "FeatureCollection"
    assert body["properties"]["order_id"] == "o4"
    roles = [feature["properties"].get("role") for feature in body["features"] if feature["geometry"]["type"] == "Point"]
    assert roles == ["pickup", "drop", "courier"]
