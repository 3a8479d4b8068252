"""OpenAPI augmentation helpers used by `scripts/generate_openapi.py`."""
from __future__ import annotations

from typing import Any, Dict


def augment_openapi(spec: Dict[str, Any]) -> Dict[str, Any]:
    """Return `spec` augmented with examples for key operations.

    Adds:
    - request/response examples for POST /routes/login and POST /routes/utilizadores
    - the `APIError` envelope schema and examples of common errors
    - the bearer security scheme used by the protected routes
    """
    s = spec

    paths = s.setdefault("paths", {})

    post_login = paths.get("/routes/login", {}).get("post")
    if post_login is not None:
        rb = post_login.setdefault("requestBody", {})
        app_json = rb.setdefault("content", {}).setdefault("application/json", {})
        app_json.setdefault("examples", {})["login_example"] = {
            "summary": "Login with email and password",
            "value": {"email": "ana@example.com", "senha": "s3gredo"},
        }

        resp_200 = post_login.setdefault("responses", {}).setdefault("200", {})
        resp_json = resp_200.setdefault("content", {}).setdefault("application/json", {})
        resp_json.setdefault("examples", {})["login_success"] = {
            "summary": "Token and minimal profile",
            "value": {
                "message": "Login successful",
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "user": {
                    "cod": "7d0f5c1e-3d5b-4e0a-9a59-5b8f7f0b2c11",
                    "nome": "Ana Silva",
                    "email": "ana@example.com",
                    "tipoUtilizador": "tecnico",
                    "foto": None,
                    "empresa": "Acme",
                    "funcao": "Suporte",
                },
            },
        }

    post_register = paths.get("/routes/utilizadores", {}).get("post")
    if post_register is not None:
        rb = post_register.setdefault("requestBody", {})
        app_json = rb.setdefault("content", {}).setdefault("application/json", {})
        app_json.setdefault("examples", {})["register_example"] = {
            "summary": "Register a client user",
            "value": {
                "nome": "Ana Silva",
                "email": "ana@example.com",
                "senha": "s3gredo",
                "empresa": "Acme",
                "tipoUtilizador": "cliente",
                "termoUso": True,
            },
        }

    components = s.setdefault("components", {})
    schemas = components.setdefault("schemas", {})

    schemas.setdefault(
        "APIError",
        {
            "type": "object",
            "required": ["message", "code"],
            "properties": {
                "message": {"type": "string"},
                "code": {"type": "string"},
                "details": {"type": "array", "items": {"type": "object"}},
            },
        },
    )

    security_schemes = components.setdefault("securitySchemes", {})
    security_schemes.setdefault(
        "bearerAuth",
        {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
    )

    examples = components.setdefault("examples", {})
    examples.setdefault(
        "not_authenticated_example",
        {
            "summary": "Missing, invalid or expired token",
            "value": {"message": "Invalid or missing credentials", "code": "not_authenticated"},
        },
    )
    examples.setdefault(
        "invalid_date_example",
        {
            "summary": "Unparseable date filter",
            "value": {"message": "Invalid date supplied for 'dataInicio'", "code": "invalid_date"},
        },
    )
    examples.setdefault(
        "email_in_use_example",
        {
            "summary": "Registration with an email that already exists",
            "value": {"message": "Email already in use", "code": "email_in_use"},
        },
    )

    return s
