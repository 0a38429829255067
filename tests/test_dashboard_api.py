import pytest


def test_dashboard_totals(client, alice):
    salary = client.post("/incomes", json={"name": "Salary", "amount": 2000, "frequency": "monthly"}, headers=alice).json()
    bonus = client.post("/incomes", json={"name": "Bonus", "amount": 500, "frequency": "one-time"}, headers=alice).json()
    categories = {c["name"]: c["id"] for c in client.get("/categories", headers=alice).json()}

    client.post("/allocations", json={"income_id": salary["id"], "category_id": categories["Housing"], "percentage_allocated": 25}, headers=alice)
    client.post("/allocations", json={"income_id": salary["id"], "category_id": categories["Groceries"], "amount_allocated": 300}, headers=alice)
    client.post("/allocations", json={"income_id": bonus["id"], "category_id": categories["Emergency Fund"], "percentage_allocated": 100}, headers=alice)

    resp = client.get("/dashboard", headers=alice)
    assert resp.status_code == 200
    body = resp.json()

    assert body["totalIncome"] == pytest.approx(2500)
    assert body["totalAllocated"] == pytest.approx(1300)
    assert body["unallocated"] == pytest.approx(1200)
    assert body["byType"] == pytest.approx({"spending": 800, "savings": 500, "debt_repayment": 0})
    by_category = {entry["name"]: entry["amount"] for entry in body["byCategory"]}
    assert by_category == pytest.approx({"Housing": 500, "Groceries": 300, "Emergency Fund": 500})
    assert [i["name"] for i in body["incomes"]] == ["Salary", "Bonus"]


def test_dashboard_reflects_income_changes(client, alice):
    salary = client.post("/incomes", json={"name": "Salary", "amount": 2000, "frequency": "monthly"}, headers=alice).json()
    housing = client.get("/categories", headers=alice).json()[0]["id"]
    client.post("/allocations", json={"income_id": salary["id"], "category_id": housing, "percentage_allocated": 50}, headers=alice)

    client.put(f"/incomes/{salary['id']}", json={"name": "Salary", "amount": 4000, "frequency": "monthly"}, headers=alice)

    body = client.get("/dashboard", headers=alice).json()
    assert body["totalAllocated"] == pytest.approx(2000)
    assert body["unallocated"] == pytest.approx(2000)


def test_empty_dashboard(client, bob):
    body = client.get("/dashboard", headers=bob).json()
    assert body["totalIncome"] == 0
    assert body["byCategory"] == []
    assert body["incomes"] == []
