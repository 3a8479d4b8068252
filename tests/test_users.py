from helpdesk.auth import verify_password
from helpdesk.models import UtilizadorModel


def test_list_users_paginated(client, auth_headers, create_user):
    headers, _ = auth_headers()
    for _ in range(14):
        create_user()

    page1 = client.get("/routes/utilizadores", headers=headers)
    assert page1.status_code == 200
    body1 = page1.json()
    assert body1["total"] == 15
    assert body1["page"] == 1
    assert body1["limit"] == 10
    assert body1["totalPages"] == 2
    assert len(body1["data"]) == 10

    page2 = client.get("/routes/utilizadores", params={"page": 2, "limit": 10}, headers=headers)
    body2 = page2.json()
    assert len(body2["data"]) == 5
    assert body2["total"] == 15
    assert body2["totalPages"] == 2

    seen = {u["cod"] for u in body1["data"]} | {u["cod"] for u in body2["data"]}
    assert len(seen) == 15
    assert all("senha" not in u for u in body1["data"])


def test_list_users_rejects_page_zero(client, auth_headers):
    headers, _ = auth_headers()
    resp = client.get("/routes/utilizadores", params={"page": 0}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


def test_get_user_and_not_found(client, auth_headers):
    headers, user = auth_headers(email="who@example.com")
    resp = client.get(f"/routes/utilizadores/{user.cod}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "who@example.com"

    missing = client.get("/routes/utilizadores/does-not-exist", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"message": "User not found", "code": "user_not_found"}


def test_update_user_rehashes_password(client, auth_headers, db_session):
    headers, user = auth_headers(email="change@example.com", password="old-pass")

    resp = client.put(f"/routes/utilizadores/{user.cod}", json={"senha": "new-pass", "nome": "Novo Nome"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["nome"] == "Novo Nome"

    db_session.expire_all()
    stored = db_session.get(UtilizadorModel, user.cod)
    assert stored.senha != "new-pass"
    assert verify_password("new-pass", stored.senha)

    login = client.post("/routes/login", json={"email": "change@example.com", "senha": "new-pass"})
    assert login.status_code == 200


def test_update_user_email_taken_by_another(client, auth_headers, create_user):
    headers, user = auth_headers()
    other = create_user(email="taken@example.com")

    resp = client.put(f"/routes/utilizadores/{user.cod}", json={"email": other.email}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "email_in_use"

    # keeping one's own email is not a conflict
    same = client.put(f"/routes/utilizadores/{user.cod}", json={"email": user.email}, headers=headers)
    assert same.status_code == 200


def test_delete_user_twice(client, auth_headers, create_user):
    headers, _ = auth_headers()
    victim = create_user(email="bye@example.com")

    first = client.delete(f"/routes/utilizadores/{victim.cod}", headers=headers)
    assert first.status_code == 200
    assert first.json()["message"] == "User deleted"
    assert first.json()["data"]["email"] == "bye@example.com"

    second = client.delete(f"/routes/utilizadores/{victim.cod}", headers=headers)
    assert second.status_code == 404
    assert second.json()["code"] == "user_not_found"


def test_user_types_are_distinct_and_sorted(client, auth_headers, create_user):
    headers, _ = auth_headers(tipo_utilizador="tecnico")
    create_user(tipo_utilizador="cliente")
    create_user(tipo_utilizador="cliente")
    create_user(tipo_utilizador="admin")
    create_user(tipo_utilizador=None)

    resp = client.get("/routes/tipos-utilizadores", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"tipos": ["admin", "cliente", "tecnico"]}


def test_update_user_null_password_rejected(client, auth_headers, db_session):
    headers, user = auth_headers(password="keep-me")

    resp = client.put(f"/routes/utilizadores/{user.cod}", json={"senha": None, "nome": "Outro"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "constraint_violation"

    db_session.expire_all()
    stored = db_session.get(UtilizadorModel, user.cod)
    assert verify_password("keep-me", stored.senha)
    assert stored.nome != "Outro"
