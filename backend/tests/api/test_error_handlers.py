"""FastAPI integration tests: error envelopes and the get_validation dependency.

Tests cover:
    - rule failures -> 422 with translated messages under error.fields
    - misuse -> 500 with the generic message only
    - database failures -> 503
    - get_validation raises until init() ran
"""

from typing import Annotated

import pytest
from fastapi import Body, Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from fieldguard.api.dependencies import get_validation
from fieldguard.api.error_handlers import register_error_handlers
from fieldguard.core.errors import GENERIC_ERROR_MESSAGE
from fieldguard.core.tags import Rules
from fieldguard.services import validation as validation_module
from fieldguard.services.validation import Validation


class SignUp(BaseModel):
    email: Annotated[str, Rules("required,uq=users;email")]
    mobile: Annotated[str, Rules("required,mobile")]


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.post("/signup")
    async def signup(
        payload: dict = Body(...),
        validation: Validation = Depends(get_validation),
    ):
        user = await validation.validate_data(SignUp, payload)
        return {"email": user.email}

    @app.post("/misuse")
    async def misuse(validation: Validation = Depends(get_validation)):
        await validation.validate_var("x", "no_such_rule")

    @app.post("/lookup")
    async def lookup(validation: Validation = Depends(get_validation)):
        await validation.validate_var(1, "exists=archived_users")

    return app


@pytest.fixture
async def client(validation, monkeypatch):
    monkeypatch.setattr(validation_module, "_instance", validation)
    async with AsyncClient(
        transport=ASGITransport(app=_build_app()), base_url="http://test",
    ) as c:
        yield c


async def test_valid_payload(client):
    res = await client.post(
        "/signup", json={"email": "new@example.com", "mobile": "09121234567"},
    )
    assert res.status_code == 200
    assert res.json() == {"email": "new@example.com"}


async def test_rule_failure_returns_422(client):
    res = await client.post(
        "/signup", json={"email": "taken@example.com", "mobile": "0912"},
    )
    body = res.json()

    assert res.status_code == 422
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["fields"] == {
        "email": ["email has already been taken"],
        "mobile": ["mobile must be a valid mobile number"],
    }


async def test_misuse_returns_generic_500(client):
    res = await client.post("/misuse")

    assert res.status_code == 500
    assert res.json()["error"]["message"] == GENERIC_ERROR_MESSAGE
    assert "no_such_rule" not in res.text


async def test_database_failure_returns_503(client):
    res = await client.post("/lookup")

    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DATABASE_ERROR"


def test_get_validation_requires_init(monkeypatch):
    monkeypatch.setattr(validation_module, "_instance", None)
    with pytest.raises(RuntimeError):
        get_validation()
