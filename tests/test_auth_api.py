from config import DEFAULT_CATEGORIES

PASSWORD = "correct-horse-battery"


def test_register_seeds_default_categories(client, alice):
    resp = client.get("/categories", headers=alice)
    assert resp.status_code == 200
    assert [(c["name"], c["type"]) for c in resp.json()] == [(c["name"], c["type"]) for c in DEFAULT_CATEGORIES]


def test_register_lowercases_email(client):
    resp = client.post("/auth/register", json={"name": "Carol", "email": "Carol@BudgetApp.io", "password": PASSWORD})
    assert resp.status_code == 201
    assert resp.json()["email"] == "carol@budgetapp.io"


def test_duplicate_email_is_rejected(client, alice):
    resp = client.post("/auth/register", json={"name": "Other", "email": "alice@budgetapp.io", "password": PASSWORD})
    assert resp.status_code == 422
    body = resp.json()
    assert body["message"] == "The email has already been taken."
    assert "email" in body["errors"]


def test_password_confirmation_must_match(client):
    resp = client.post(
        "/auth/register",
        json={"name": "Dan", "email": "dan@budgetapp.io", "password": PASSWORD, "password_confirmation": "nope-nope"},
    )
    assert resp.status_code == 422
    assert "does not match" in resp.json()["message"]


def test_login_with_wrong_password(client, alice):
    resp = client.post("/auth/login", data={"username": "alice@budgetapp.io", "password": "wrong-password"})
    assert resp.status_code == 400


def test_unauthenticated_requests_are_rejected(client):
    for path in ("/incomes", "/categories", "/allocations", "/goals", "/dashboard", "/user/incomes"):
        assert client.get(path).status_code == 401
    assert client.post("/incomes", json={"name": "Salary", "amount": 3000, "frequency": "monthly"}).status_code == 401


def test_me(client, alice):
    resp = client.get("/auth/me", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Alice"


def test_delete_account(client, alice, bob):
    income = client.post("/incomes", json={"name": "Salary", "amount": 3000, "frequency": "monthly"}, headers=alice).json()

    resp = client.delete("/auth/me", headers=alice)
    assert resp.status_code == 204
    assert resp.content == b""

    assert client.get("/auth/me", headers=alice).status_code == 401
    assert client.get(f"/incomes/{income['id']}", headers=bob).status_code == 404
    assert client.get("/auth/me", headers=bob).status_code == 200


def test_auth_errors_use_message_shape(client, alice):
    resp = client.get("/incomes")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Not authenticated"}
    assert resp.headers["WWW-Authenticate"] == "Bearer"

    resp = client.get("/incomes", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Could not validate credentials"}

    resp = client.post("/auth/login", data={"username": "alice@budgetapp.io", "password": "wrong-password"})
    assert resp.json() == {"message": "Incorrect email or password"}


def test_unknown_route_uses_message_shape(client):
    resp = client.get("/no-such-route")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Not Found"}
