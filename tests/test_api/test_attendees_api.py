"""Tests for attendee and public status endpoints"""

REGISTRATION = {
    "name": "Ana Souza",
    "cpf": "123.456.789-00",
    "roles": ["Regente"],
    "church": "Sede",
    "phone": "(11) 98888-0001",
}


def test_public_registration_and_status(client):
    response = client.post("/api/attendees", json=REGISTRATION)
    assert response.status_code == 200
    attendee_id = response.json()["id"]

    status = client.get("/api/public/status/123.456.789-00")
    assert status.status_code == 200
    assert status.json() == {
        "id": attendee_id, "name": "Ana Souza", "cpf": "12345678900", "payment_status": "pending",
    }


def test_duplicate_cpf_rejected_regardless_of_format(client):
    client.post("/api/attendees", json=REGISTRATION)
    response = client.post("/api/attendees", json={**REGISTRATION, "name": "Outra", "cpf": "12345678900"})
    assert response.status_code == 400
    assert response.json() == {"error": "Este CPF já está cadastrado no sistema."}


def test_legacy_roles_string_accepted(admin_client):
    created = admin_client.post("/api/attendees", json={**REGISTRATION, "roles": '["Pastor"]'})
    attendee = admin_client.get(f"/api/attendees/{created.json()['id']}").json()
    assert attendee["roles"] == ["Pastor"]


def test_validation_error_shape(client):
    response = client.post("/api/attendees", json={"name": "Sem CPF"})
    assert response.status_code == 400
    assert set(response.json()) == {"error"}


def test_status_not_found(client):
    response = client.get("/api/public/status/00000000000")
    assert response.status_code == 404
    assert response.json() == {"error": "Inscrito não encontrado"}


def test_admin_crud(admin_client):
    a = admin_client.post("/api/attendees", json=REGISTRATION).json()["id"]
    b = admin_client.post("/api/attendees", json={**REGISTRATION, "name": "Bruno", "cpf": "98765432100"}).json()["id"]

    names = [row["name"] for row in admin_client.get("/api/attendees").json()]
    assert names == ["Ana Souza", "Bruno"]

    conflict = admin_client.put(f"/api/attendees/{b}", json={"cpf": "123.456.789-00"})
    assert conflict.status_code == 400
    assert conflict.json() == {"error": "Este CPF já pertence a outro inscrito."}

    updated = admin_client.put(f"/api/attendees/{a}", json={"phone": "", "payment_status": "exempt"})
    assert updated.json() == {"success": True}
    detail = admin_client.get(f"/api/attendees/{a}").json()
    assert detail["phone"] is None
    assert detail["payment_status"] == "exempt"
    assert detail["church"] == "Sede"

    assert admin_client.delete(f"/api/attendees/{a}").json() == {"success": True}
    assert admin_client.get(f"/api/attendees/{a}").status_code == 404


def test_roles_catalogue_is_public(client):
    response = client.get("/api/attendees/roles")
    assert response.status_code == 200
    roles = response.json()
    assert "Pastor" in roles
    assert "Professor(a) EBD" in roles
