import pytest


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_baby_crud(client, baby):
    assert baby["name"] == "Ada"
    assert baby["sex"] == "male"
    assert baby["birth_date"] == "2023-01-01"
    assert baby["age_months"] > 24

    listed = client.get("/babies").json()
    assert [b["id"] for b in listed] == [baby["id"]]

    r = client.patch(f"/babies/{baby['id']}", json={"name": "Ada L."})
    assert r.status_code == 200
    assert r.json()["name"] == "Ada L."
    assert r.json()["parent_name"] == "Sam"

    assert client.delete(f"/babies/{baby['id']}").status_code == 204
    assert client.get(f"/babies/{baby['id']}").status_code == 404
    assert client.delete(f"/babies/{baby['id']}").status_code == 404


def test_baby_validation(client):
    r = client.post("/babies", json={"name": "X", "birth_date": "2024-02-30", "sex": "male"})
    assert r.status_code == 422
    r = client.post("/babies", json={"name": "X", "birth_date": "2024-02-01", "sex": "unknown"})
    assert r.status_code == 422


def test_manual_measurement_is_scored(client, baby):
    r = client.post(
        "/measurements",
        json={"baby_id": baby["id"], "height_cm": 90.0, "measurement_date": "2025-01-02T00:00:00Z"},
    )
    assert r.status_code == 201
    m = r.json()
    assert m["age_months"] == 24
    assert m["haz_category"] == "Normal"
    assert m["haz_color"] == "#26a269"
    assert m["haz_score"] == pytest.approx((90.0 - 87.9) / 4.395)
    assert m["weight_kg"] == pytest.approx(12.15)
    assert m["method"] == "manual"
    assert m["measurement_date"].startswith("2025-01-02T00:00:00")


def test_manual_measurement_bad_date(client, baby):
    r = client.post(
        "/measurements",
        json={"baby_id": baby["id"], "height_cm": 80.0, "measurement_date": "last tuesday"},
    )
    assert r.status_code == 422


def test_manual_measurement_unknown_baby(client):
    r = client.post("/measurements", json={"baby_id": "missing", "height_cm": 80.0})
    assert r.status_code == 404


def test_list_measurements_order_is_explicit(client, baby):
    for date, h in [("2024-01-01", 75.0), ("2025-01-01", 86.0), ("2024-07-01", 81.0)]:
        client.post("/measurements", json={"baby_id": baby["id"], "height_cm": h, "measurement_date": date})

    desc = client.get(f"/babies/{baby['id']}/measurements").json()
    assert [m["height_cm"] for m in desc] == [86.0, 81.0, 75.0]

    asc = client.get(f"/babies/{baby['id']}/measurements", params={"order": "asc"}).json()
    assert [m["height_cm"] for m in asc] == [75.0, 81.0, 86.0]

    assert client.get(f"/babies/{baby['id']}/measurements", params={"order": "sideways"}).status_code == 422
    assert client.get("/babies/missing/measurements").status_code == 404


def test_update_and_delete_measurement(client, baby):
    m = client.post("/measurements", json={"baby_id": baby["id"], "height_cm": 80.0}).json()

    r = client.patch(f"/measurements/{m['id']}", json={"notes": "after nap", "weight_kg": 10.5})
    assert r.status_code == 200
    assert r.json()["notes"] == "after nap"
    assert r.json()["weight_kg"] == 10.5
    assert r.json()["height_cm"] == 80.0

    assert client.patch("/measurements/missing", json={"notes": "x"}).status_code == 404
    assert client.delete(f"/measurements/{m['id']}").status_code == 204
    assert client.get(f"/measurements/{m['id']}").status_code == 404


def test_deleting_baby_removes_measurements(client, baby):
    m = client.post("/measurements", json={"baby_id": baby["id"], "height_cm": 80.0}).json()
    client.delete(f"/babies/{baby['id']}")
    assert client.get(f"/measurements/{m['id']}").status_code == 404


def test_growth_score_endpoint(client):
    r = client.post("/growth/score", json={"sex": "female", "age_months": 12, "height_cm": 70})
    assert r.status_code == 200
    body = r.json()
    assert body["median_height_cm"] == 74.0
    assert body["haz"] == pytest.approx(-1.081, abs=1e-3)
    assert body["haz_category"] == "Stunted"
    assert body["haz_color"] == "#ff9e00"
    assert body["estimated_weight_kg"] == pytest.approx(7.35)


@pytest.mark.parametrize(
    "payload",
    [
        {"sex": "x", "age_months": 12, "height_cm": 70},
        {"sex": "male", "age_months": -1, "height_cm": 70},
        {"sex": "male", "age_months": 12, "height_cm": 0},
    ],
)
def test_growth_score_validation(client, payload):
    assert client.post("/growth/score", json=payload).status_code == 422


def test_analytics_and_dashboard(client, baby):
    for date, h in [("2023-07-01", 67.6), ("2024-01-01", 75.7)]:
        client.post("/measurements", json={"baby_id": baby["id"], "height_cm": h, "measurement_date": date})

    a = client.get(f"/analytics/{baby['id']}").json()
    assert a["summary"]["total_measurements"] == 2
    assert a["summary"]["latest_height_cm"] == 75.7
    assert a["summary"]["growth_status"] == "Normal"
    assert [p["measurement"] for p in a["series"]] == [1, 2]
    assert [p["age"] for p in a["series"]] == [5, 11]

    d = client.get("/dashboard").json()
    assert d["total_babies"] == 1
    assert d["total_measurements"] == 2
    assert d["recent"][0]["height_cm"] == 75.7

    assert client.get("/analytics/missing").status_code == 404
