from __future__ import annotations

from fastapi.routing import APIRoute

from web_api import app


def test_health_endpoint_contract_function() -> None:
    route = next(
        (
            candidate
            for candidate in app.routes
            if isinstance(candidate, APIRoute) and candidate.path == "/api/health"
        ),
        None,
    )

    assert route is not None
    payload = route.endpoint()
    assert payload.model_dump() == {"status": "ok"}


def test_openapi_contains_generation_contract() -> None:
    schema = app.openapi()

    generate = schema["paths"]["/api/applications/pdf"]["post"]
    assert generate["responses"]["200"]["content"]["application/json"]["schema"][
        "$ref"
    ].endswith("GeneratedPdfResponse")
    assert generate["requestBody"]["content"]["application/json"]["schema"][
        "$ref"
    ].endswith("ApplicantRecord")


def test_openapi_contains_error_contracts() -> None:
    schema = app.openapi()
    generate = schema["paths"]["/api/applications/pdf"]["post"]
    download = schema["paths"]["/api/applications/pdf/download"]["post"]

    for status_code in ("413", "500", "503"):
        assert generate["responses"][status_code]["content"]["application/json"]["schema"][
            "$ref"
        ].endswith("ApiErrorResponse")
    assert download["responses"]["404"]["content"]["application/json"]["schema"][
        "$ref"
    ].endswith("ApiErrorResponse")
