"""Tests for theme uploads, justifications and report endpoints"""

PDF_FILE = ("apostila.pdf", b"%PDF-1.4 demo", "application/pdf")


def test_theme_lifecycle(admin_client, storage):
    created = admin_client.post(
        "/api/themes",
        data={"title": "Liderança", "speaker": "Pr. João", "event_date": "2026-03-07"},
        files={"file": PDF_FILE, "cover": ("capa.png", b"\x89PNG", "image/png")},
    )
    assert created.status_code == 200
    theme_id = created.json()["id"]

    themes = admin_client.get("/api/themes").json()
    assert themes[0]["title"] == "Liderança"
    assert themes[0]["event_date"] == "2026-03-07"
    assert themes[0]["file_type"] == "application/pdf"
    assert themes[0]["cover_image_url"].startswith("/uploads/")
    assert len(list(storage.base_dir.iterdir())) == 2

    updated = admin_client.put(
        f"/api/themes/{theme_id}",
        data={"title": "Liderança II", "file_url": themes[0]["file_url"]},
    )
    assert updated.json() == {"success": True}
    assert admin_client.get("/api/themes").json()[0]["title"] == "Liderança II"

    assert admin_client.delete(f"/api/themes/{theme_id}").json() == {"success": True}
    assert admin_client.get("/api/themes").json() == []


def test_theme_requires_file(admin_client):
    response = admin_client.post("/api/themes", data={"title": "Sem arquivo"})
    assert response.status_code == 400
    assert response.json() == {"error": "Nenhum arquivo enviado"}


def test_theme_upload_needs_login(client):
    response = client.post("/api/themes", data={"title": "X"}, files={"file": PDF_FILE})
    assert response.status_code == 401


def test_justifications(admin_client):
    attendee_id = admin_client.post(
        "/api/attendees", json={"name": "Ana", "cpf": "12345678900", "roles": ["Membro"]},
    ).json()["id"]
    theme_id = admin_client.post("/api/themes", data={"title": "Tema"}, files={"file": PDF_FILE}).json()["id"]

    created = admin_client.post("/api/justifications", json={
        "attendee_id": attendee_id, "theme_id": theme_id, "date": "2026-03-07", "reason": "Saúde",
    })
    assert created.status_code == 200

    rows = admin_client.get("/api/justifications").json()
    assert rows[0]["attendee_name"] == "Ana"
    assert rows[0]["theme_title"] == "Tema"
    assert "Outro" in admin_client.get("/api/justifications/reasons").json()

    assert admin_client.delete(f"/api/justifications/{created.json()['id']}").json() == {"success": True}
    assert admin_client.delete(f"/api/justifications/{created.json()['id']}").status_code == 404


def test_report_preview_and_pdf(admin_client):
    admin_client.post("/api/attendees", json={"name": "Ana", "cpf": "12345678900", "roles": ["Membro"]})

    preview = admin_client.get("/api/reports/attendees").json()
    assert preview["title"] == "Relatório Geral de Inscritos"
    assert preview["rows"][0][0] == "Ana"

    pdf = admin_client.get("/api/reports/attendees/pdf")
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert "attachment" in pdf.headers["content-disposition"]
    assert pdf.content.startswith(b"%PDF")


def test_unknown_report(admin_client):
    response = admin_client.get("/api/reports/salaries")
    assert response.status_code == 404
    assert response.json() == {"error": "Relatório desconhecido: salaries"}


def test_session_report_needs_parameters(admin_client):
    response = admin_client.get("/api/reports/session/pdf")
    assert response.status_code == 400


def test_report_blank_filters(admin_client):
    assert admin_client.get("/api/reports/attendees?date=&theme_id=").status_code == 200

    response = admin_client.get("/api/reports/session?date=&theme_id=")
    assert response.status_code == 400
    assert "error" in response.json()


def test_theme_detail_and_files_removed_on_delete(admin_client, storage):
    theme_id = admin_client.post(
        "/api/themes",
        data={"title": "Tema"},
        files={"file": PDF_FILE, "cover": ("capa.png", b"\x89PNG", "image/png")},
    ).json()["id"]

    detail = admin_client.get(f"/api/themes/{theme_id}")
    assert detail.status_code == 200
    assert detail.json()["title"] == "Tema"
    assert len(list(storage.base_dir.iterdir())) == 2

    admin_client.delete(f"/api/themes/{theme_id}")
    assert list(storage.base_dir.iterdir()) == []
    assert admin_client.get(f"/api/themes/{theme_id}").status_code == 404
