def test_goal_crud(client, alice):
    resp = client.post(
        "/goals",
        json={"name": "Vacation", "target_amount": 1500, "target_date": "2027-06-01"},
        headers=alice,
    )
    assert resp.status_code == 201
    goal = resp.json()
    assert goal["current_amount"] == 0
    assert goal["target_date"] == "2027-06-01"

    resp = client.put(
        f"/goals/{goal['id']}",
        json={"name": "Vacation", "target_amount": 1500, "current_amount": 400, "target_date": "2027-06-01"},
        headers=alice,
    )
    assert resp.status_code == 200
    assert resp.json()["current_amount"] == 400

    assert [g["id"] for g in client.get("/goals", headers=alice).json()] == [goal["id"]]
    assert client.delete(f"/goals/{goal['id']}", headers=alice).status_code == 204
    assert client.get("/goals", headers=alice).json() == []


def test_goal_validation_and_ownership(client, alice, bob):
    assert client.post("/goals", json={"name": "Car", "target_amount": -1}, headers=alice).status_code == 422

    goal_id = client.post("/goals", json={"name": "Car", "target_amount": 9000}, headers=alice).json()["id"]
    assert client.get(f"/goals/{goal_id}", headers=bob).status_code == 403
    assert client.delete(f"/goals/{goal_id}", headers=bob).status_code == 403


def test_goal_amounts_must_be_finite(client, alice):
    resp = client.post(
        "/goals",
        content='{"name": "Moon", "target_amount": 1e309}',
        headers={**alice, "Content-Type": "application/json"},
    )
    assert resp.status_code == 422
    assert "target_amount" in resp.json()["errors"]
