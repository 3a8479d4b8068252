from helpdesk.helpers.openapi import augment_openapi
from helpdesk.main import app


def test_augmented_openapi_documents_auth_routes():
    augmented = augment_openapi(app.openapi())

    paths = augmented["paths"]
    assert "/routes/login" in paths
    assert "/routes/tickets/{cod}" in paths
    login_examples = paths["/routes/login"]["post"]["requestBody"]["content"]["application/json"]["examples"]
    assert login_examples["login_example"]["value"] == {"email": "ana@example.com", "senha": "s3gredo"}

    components = augmented["components"]
    assert components["schemas"]["APIError"]["required"] == ["message", "code"]
    assert "bearerAuth" in components["securitySchemes"]


def test_list_filters_are_documented():
    params = app.openapi()["paths"]["/routes/tickets"]["get"]["parameters"]
    names = {p["name"] for p in params}
    assert {"assunto", "estado", "dataInicio", "dataFim"} <= names
