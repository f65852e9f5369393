def test_toll_crud(client, headers, store):
    res = client.post("/api/tolls/", json={"date": "2025-11-03", "section": "Seoul-Busan", "amount": 22000}, headers=headers)
    assert res.status_code == 201
    record = res.json()

    listed = client.get("/api/tolls/?month=2025-11", headers=headers).json()
    assert [r["amount"] for r in listed] == [22000]

    res = client.put(
        f"/api/tolls/{record['record_id']}",
        json={"date": "2025-11-04", "section": "Daejeon", "amount": 9000},
        headers=headers,
    )
    assert res.status_code == 200
    assert res.json()["section"] == "Daejeon"
    assert res.json()["created_at"] == record["created_at"]

    assert client.delete(f"/api/tolls/{record['record_id']}", headers=headers).status_code == 204
    assert store.toll == {}


def test_toll_amount_must_not_be_negative(client, headers):
    res = client.post("/api/tolls/", json={"date": "2025-11-03", "amount": -1}, headers=headers)
    assert res.status_code == 422


def test_budget_is_per_month(client, headers):
    assert client.get("/api/settings/budget/2025-11", headers=headers).json()["budget"] == 0

    res = client.put("/api/settings/budget/2025-11", json={"budget": 300000}, headers=headers)
    assert res.status_code == 200

    assert client.get("/api/settings/budget/2025-11", headers=headers).json()["budget"] == 300000
    assert client.get("/api/settings/budget/2025-12", headers=headers).json()["budget"] == 0

    client.put("/api/settings/budget/2025-11", json={"budget": 250000}, headers=headers)
    assert client.get("/api/settings/budget/2025-11", headers=headers).json()["budget"] == 250000


def test_budget_rejects_bad_month(client, headers):
    assert client.put("/api/settings/budget/november", json={"budget": 1}, headers=headers).status_code == 400


def test_memo_is_shared_and_owner_scoped(client, headers, other_headers, store):
    assert client.get("/api/settings/memo", headers=headers).json() == {"memo": ""}
    client.put("/api/settings/memo", json={"memo": "oil change at 60,000 km"}, headers=headers)

    assert client.get("/api/settings/memo", headers=headers).json()["memo"] == "oil change at 60,000 km"
    assert client.get("/api/settings/memo", headers=other_headers).json()["memo"] == ""
    assert ("user-1", "memo", "") in store.settings
