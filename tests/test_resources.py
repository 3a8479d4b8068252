import pytest

from helpdesk.models import ConversaModel, EmpresaModel


def test_reference_listings_are_public_and_reduced(client, db_session):
    db_session.add_all([
        EmpresaModel(nome="Beta Lda", nif="500100200", enderecos="Rua do Porto, Lisboa"),
        EmpresaModel(nome="Alfa SA", nif="500999888", enderecos="Avenida Central, Porto"),
    ])
    db_session.commit()

    resp = client.get("/routes/empresas")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [e["nome"] for e in data] == ["Alfa SA", "Beta Lda"]
    assert set(data[0]) == {"cod", "nome"}

    by_name = client.get("/routes/empresas", params={"nome": "beta"}).json()["data"]
    assert [e["nome"] for e in by_name] == ["Beta Lda"]

    by_address = client.get("/routes/empresas", params={"endereco": "porto"}).json()["data"]
    assert len(by_address) == 2

    by_nif = client.get("/routes/empresas", params={"nif": "999"}).json()["data"]
    assert [e["nome"] for e in by_nif] == ["Alfa SA"]


def test_reference_data_is_managed_behind_the_gate(client, auth_headers):
    assert client.post("/routes/departamentos", json={"nome": "Suporte"}).status_code == 401

    headers, _ = auth_headers()
    created = client.post("/routes/departamentos", json={"nome": "Suporte"}, headers=headers)
    assert created.status_code == 201
    cod = created.json()["cod"]

    renamed = client.put(f"/routes/departamentos/{cod}", json={"nome": "Suporte Tecnico"}, headers=headers)
    assert renamed.json()["nome"] == "Suporte Tecnico"

    listing = client.get("/routes/departamentos", params={"nome": "tecnico"}).json()["data"]
    assert listing == [{"cod": cod, "nome": "Suporte Tecnico"}]

    assert client.delete(f"/routes/departamentos/{cod}", headers=headers).status_code == 200
    assert client.get("/routes/departamentos").json() == {"data": []}


def test_funcoes_crud(client, auth_headers):
    headers, _ = auth_headers()
    created = client.post("/routes/funcoes", json={"nome": "Tecnico"}, headers=headers)
    assert created.status_code == 201
    fetched = client.get(f"/routes/funcoes/{created.json()['cod']}", headers=headers)
    assert fetched.json()["nome"] == "Tecnico"


def test_agendas_date_range_ascending(client, auth_headers):
    headers, _ = auth_headers()
    for day in ("2026-05-20T10:00:00Z", "2026-05-02T08:30:00Z", "2026-06-01T14:00:00Z"):
        resp = client.post("/routes/agendas", json={"codTicket": "t-1", "data": day, "hora": "10:00"}, headers=headers)
        assert resp.status_code == 201

    data = client.get("/routes/agendas", params={"dataInicio": "2026-05-01", "dataFim": "2026-05-31"}, headers=headers).json()["data"]
    assert [a["data"][:10] for a in data] == ["2026-05-02", "2026-05-20"]


def test_agenda_requires_ticket_and_date(client, auth_headers):
    headers, _ = auth_headers()
    resp = client.post("/routes/agendas", json={"codTicket": "t-1"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


def test_conversation_by_ticket(client, auth_headers):
    headers, user = auth_headers()
    for text in ("primeira", "segunda"):
        client.post("/routes/conversas", json={"codTicket": "t-1", "codUtilizador": user.cod, "mensagem": text}, headers=headers)
    client.post("/routes/conversas", json={"codTicket": "t-2", "mensagem": "outro"}, headers=headers)

    resp = client.get("/routes/conversas/t-1", headers=headers)
    assert resp.status_code == 200
    assert [c["mensagem"] for c in resp.json()["data"]] == ["primeira", "segunda"]

    assert client.get("/routes/conversas/unknown", headers=headers).json() == {"data": []}


def test_conversation_update_and_delete(client, auth_headers, db_session):
    headers, _ = auth_headers()
    cod = client.post("/routes/conversas", json={"codTicket": "t-1", "mensagem": "ola"}, headers=headers).json()["cod"]

    updated = client.put(f"/routes/conversas/{cod}", json={"mensagem": "ola, corrigido"}, headers=headers)
    assert updated.json()["mensagem"] == "ola, corrigido"

    assert client.delete(f"/routes/conversas/{cod}", headers=headers).json()["message"] == "Conversation deleted"
    assert db_session.query(ConversaModel).count() == 0


def test_contratos_paginated(client, auth_headers):
    headers, _ = auth_headers()
    for i in range(3):
        client.post("/routes/contratos", json={"codEmpresa": "e-1", "horas": 10 + i, "estado": "activo"}, headers=headers)

    resp = client.get("/routes/contratos", params={"page": 2, "limit": 2}, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert body["totalPages"] == 2
    assert len(body["data"]) == 1

    beyond = client.get("/routes/contratos", params={"page": 5, "limit": 2}, headers=headers).json()
    assert beyond["data"] == []
    assert beyond["total"] == 3


def test_limit_above_maximum_is_rejected(client, auth_headers):
    headers, _ = auth_headers()
    resp = client.get("/routes/relatorios", params={"limit": 1000}, headers=headers)
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "path, payload, field",
    [
        ("anexos", {"codTicket": "t-1", "anexo": "uploads/log.txt"}, "anexo"),
        ("avaliacao", {"codUtilizador": "u-1", "avaliacao": 4, "comentario": "Rapido"}, "avaliacao"),
        ("configuracoes", {"corPadrao": "#003366", "estado": "activo"}, "corPadrao"),
        ("notificacoes", {"codUtilizador": "u-1", "assunto": "Ticket atribuido"}, "assunto"),
        ("pendentes", {"codTicket": "t-1", "descricao": "Aguardar peca"}, "descricao"),
        ("perguntas-frequentes", {"pergunta": "Como abrir um ticket?", "resposta": "No portal"}, "pergunta"),
        ("relatorios", {"codTicket": "t-1", "resolucao": "Reinstalado", "nPostos": 3}, "resolucao"),
    ],
)
def test_entity_create_and_read(client, auth_headers, path, payload, field):
    headers, _ = auth_headers()
    created = client.post(f"/routes/{path}", json=payload, headers=headers)
    assert created.status_code == 201
    cod = created.json()["cod"]

    fetched = client.get(f"/routes/{path}/{cod}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()[field] == payload[field]


def test_faq_substring_filter(client, auth_headers):
    headers, _ = auth_headers()
    client.post("/routes/perguntas-frequentes", json={"pergunta": "Como recuperar a senha?"}, headers=headers)
    client.post("/routes/perguntas-frequentes", json={"pergunta": "Qual o horario?"}, headers=headers)

    data = client.get("/routes/perguntas-frequentes", params={"pergunta": "SENHA"}, headers=headers).json()["data"]
    assert [f["pergunta"] for f in data] == ["Como recuperar a senha?"]


def test_null_on_required_column_is_constraint_violation(client, auth_headers):
    headers, _ = auth_headers()
    cod = client.post("/routes/tickets", json={"assunto": "Original"}, headers=headers).json()["cod"]

    resp = client.put(f"/routes/tickets/{cod}", json={"assunto": None}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "constraint_violation"

    # the failed write was rolled back
    assert client.get(f"/routes/tickets/{cod}", headers=headers).json()["assunto"] == "Original"


def test_unexpected_failure_is_generic_500(client, auth_headers, monkeypatch):
    headers, _ = auth_headers()

    def _boom(db):
        raise RuntimeError("connection to store lost: password=hunter2")

    monkeypatch.setattr("helpdesk.users.list_user_types", _boom)
    resp = client.get("/routes/tipos-utilizadores", headers=headers)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error", "code": "internal_error"}
