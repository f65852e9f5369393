def _create(client, headers, **overrides):
    payload = {
        "date": "2025-11-02",
        "region": "Seoul",
        "station": "SK Energy",
        "price_per_liter": 1600,
        "fuel_amount": 40.5,
        "distance": 0,
    }
    payload.update(overrides)
    return client.post("/api/fuel/", json=payload, headers=headers)


def test_requires_token(client):
    assert client.get("/api/fuel/?month=2025-11").status_code == 401
    bad = client.get("/api/fuel/?month=2025-11", headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 401


def test_create_derives_total_cost(client, headers, store):
    res = _create(client, headers)
    assert res.status_code == 201
    body = res.json()
    assert body["total_cost"] == 64800
    assert body["time"]  # stamped on insert
    assert len(store.fuel) == 1


def test_create_from_cost_derives_volume(client, headers):
    res = _create(client, headers, fuel_amount=None, total_cost=65000, time="07:45")
    assert res.status_code == 201
    body = res.json()
    assert body["fuel_amount"] == 40.63
    assert body["total_cost"] == 65000
    assert body["time"] == "07:45"


def test_create_requires_volume_or_cost(client, headers):
    res = _create(client, headers, fuel_amount=None)
    assert res.status_code == 400


def test_create_requires_price(client, headers):
    res = _create(client, headers, price_per_liter=None)
    assert res.status_code == 422


def test_list_is_month_scoped_and_owner_scoped(client, headers, other_headers):
    _create(client, headers, date="2025-11-02")
    _create(client, headers, date="2025-11-20", distance=600)
    _create(client, headers, date="2025-12-01")
    _create(client, other_headers, date="2025-11-05")

    res = client.get("/api/fuel/?month=2025-11", headers=headers)
    assert res.status_code == 200
    records = res.json()
    assert [r["date"] for r in records] == ["2025-11-20", "2025-11-02"]
    assert records[0]["efficiency"] == "14.81"
    assert records[1]["efficiency"] is None


def test_list_rejects_bad_month(client, headers):
    assert client.get("/api/fuel/?month=2025-13", headers=headers).status_code == 400


def test_update_is_full_row_and_reconciled(client, headers):
    record = _create(client, headers).json()
    payload = {
        "date": "2025-11-03",
        "time": "10:00",
        "region": "Busan",
        "station": "GS",
        "price_per_liter": 1600,
        "fuel_amount": 40.5,
        "total_cost": 65000,
        "distance": 480,
    }
    res = client.put(f"/api/fuel/{record['record_id']}", json=payload, headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["date"] == "2025-11-03"
    assert body["region"] == "Busan"
    assert body["total_cost"] == 65000
    assert body["fuel_amount"] == 40.63


def test_update_price_recomputes_cost(client, headers):
    record = _create(client, headers).json()
    payload = dict(record, price_per_liter=1700)
    res = client.put(f"/api/fuel/{record['record_id']}", json=payload, headers=headers)
    assert res.status_code == 200
    assert res.json()["total_cost"] == 68850


def test_cannot_touch_other_users_record(client, headers, other_headers):
    record = _create(client, headers).json()
    payload = dict(record, region="Elsewhere")
    assert client.put(f"/api/fuel/{record['record_id']}", json=payload, headers=other_headers).status_code == 404
    assert client.delete(f"/api/fuel/{record['record_id']}", headers=other_headers).status_code == 404
    assert client.get(f"/api/fuel/{record['record_id']}", headers=headers).status_code == 200


def test_delete(client, headers, store):
    record = _create(client, headers).json()
    assert client.delete(f"/api/fuel/{record['record_id']}", headers=headers).status_code == 204
    assert store.fuel == {}
    assert client.delete(f"/api/fuel/{record['record_id']}", headers=headers).status_code == 404


def test_store_failure_surfaces_as_500(client, headers, store):
    store.fail_writes = True
    res = _create(client, headers)
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to save fuel record"


def test_reconcile_endpoint(client, headers):
    res = client.post(
        "/api/fuel/reconcile",
        json={"field": "cost", "value": "65000", "price": 1600},
        headers=headers,
    )
    assert res.status_code == 200
    assert res.json() == {"price": 1600, "volume": 40.63, "cost": 65000}

    res = client.post(
        "/api/fuel/reconcile",
        json={"field": "volume", "value": 12, "price": None, "cost": 5000},
        headers=headers,
    )
    assert res.json() == {"price": None, "volume": 12, "cost": 5000}


def test_label_edit_keeps_cost_of_cost_entered_record(client, headers):
    record = _create(client, headers, fuel_amount=None, total_cost=65000).json()
    payload = dict(record, region="Busan", station="GS")
    res = client.put(f"/api/fuel/{record['record_id']}", json=payload, headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["region"] == "Busan"
    assert body["fuel_amount"] == 40.63
    assert body["total_cost"] == 65000


def test_reconcile_endpoint_ignores_negative_volume(client, headers):
    res = client.post(
        "/api/fuel/reconcile",
        json={"field": "volume", "value": -10, "price": 1600, "cost": 16000},
        headers=headers,
    )
    assert res.status_code == 200
    assert res.json()["cost"] == 16000
