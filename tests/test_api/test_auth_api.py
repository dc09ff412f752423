"""Tests for auth endpoints and access policy"""


def test_login_me_logout(admin_client):
    me = admin_client.get("/api/me")
    assert me.status_code == 200
    assert me.json()["username"] == "admin"
    assert me.json()["role"] == "admin"

    assert admin_client.post("/api/logout").json() == {"success": True}
    response = admin_client.get("/api/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}


def test_login_invalid_credentials(client):
    response = client.post("/api/login", json={"username": "admin", "password": "x"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_protected_routes_need_login(client):
    for path in ["/api/attendees", "/api/attendance", "/api/financial", "/api/stats",
                 "/api/justifications", "/api/reports/attendees"]:
        response = client.get(path)
        assert response.status_code == 401, path
        assert "error" in response.json()


def test_public_routes(client):
    assert client.get("/api/themes").status_code == 200
    assert client.get("/api/public/payment-methods").status_code == 200
    assert client.get("/health").text == "ok"


def test_update_own_credentials(admin_client):
    user_id = admin_client.get("/api/me").json()["id"]

    wrong = admin_client.put(f"/api/users/{user_id}", json={"currentPassword": "x", "password": "novasenha"})
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Senha atual incorreta."}

    ok = admin_client.put(
        f"/api/users/{user_id}",
        json={"currentPassword": "admin123", "username": "coordenacao", "password": "novasenha"},
    )
    assert ok.json() == {"success": True}
    assert admin_client.get("/api/me").json()["username"] == "coordenacao"

    admin_client.post("/api/logout")
    login = admin_client.post("/api/login", json={"username": "coordenacao", "password": "novasenha"})
    assert login.status_code == 200


def test_standard_user_cannot_edit_other_account(standard_client, make_user):
    other_id = make_user("admin", "admin123", "admin")
    response = standard_client.put(
        f"/api/users/{other_id}", json={"currentPassword": "admin123", "password": "hacked!"},
    )
    assert response.status_code == 403
