"""
Unit tests for error handler middleware.
"""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from api.middleware.error_handler import setup_exception_handlers
from core.exceptions import (
    AppException,
    ConflictError,
    DatabaseUnavailableError,
    NotFoundError,
    PromptNotFoundError,
    ValidationError,
)


class _Body(BaseModel):
    rating: int


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app with exception handlers for testing."""
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/raise-app-exception")
    async def raise_app_exception():
        raise AppException(message="Something broke", error_code="test_error")

    @app.get("/raise-not-found")
    async def raise_not_found():
        raise NotFoundError(message="Image not found")

    @app.get("/raise-prompt-not-found")
    async def raise_prompt_not_found():
        raise PromptNotFoundError(details={"prompt_id": "abc"})

    @app.get("/raise-conflict")
    async def raise_conflict():
        raise ConflictError(message="Already following this user")

    @app.get("/raise-db-unavailable")
    async def raise_db_unavailable():
        raise DatabaseUnavailableError()

    @app.get("/raise-validation-error")
    async def raise_validation_error():
        raise ValidationError(message="Invalid rating")

    @app.post("/body")
    async def body(payload: _Body):
        return payload

    @app.get("/raise-http-400")
    async def raise_http_400():
        raise HTTPException(status_code=400, detail="Bad input")

    @app.get("/raise-http-404")
    async def raise_http_404():
        raise HTTPException(status_code=404, detail="Not here")

    @app.get("/raise-http-501")
    async def raise_http_501():
        raise HTTPException(status_code=501, detail="Coming soon")

    @app.get("/raise-http-503")
    async def raise_http_503():
        raise HTTPException(status_code=503, detail="Service down")

    @app.get("/raise-unexpected")
    async def raise_unexpected():
        raise RuntimeError("Something unexpected")

    return app


@pytest.fixture
def test_client():
    app = _create_test_app()
    return TestClient(app, raise_server_exceptions=False)


class TestAppExceptionHandler:
    """Test that AppException subclasses produce structured responses."""

    def test_app_exception(self, test_client):
        resp = test_client.get("/raise-app-exception")
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "test_error"
        assert body["error"]["message"] == "Something broke"

    def test_not_found(self, test_client):
        resp = test_client.get("/raise-not-found")
        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "not_found"

    def test_prompt_not_found_with_details(self, test_client):
        resp = test_client.get("/raise-prompt-not-found")
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"]["code"] == "prompt_not_found"
        assert body["error"]["details"]["prompt_id"] == "abc"

    def test_conflict(self, test_client):
        resp = test_client.get("/raise-conflict")
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "conflict"

    def test_database_unavailable(self, test_client):
        resp = test_client.get("/raise-db-unavailable")
        assert resp.status_code == 503
        assert resp.json()["error"]["code"] == "database_unavailable"

    def test_validation_error(self, test_client):
        resp = test_client.get("/raise-validation-error")
        assert resp.status_code == 422
        body = resp.json()
        assert body["error"]["code"] == "validation_error"


class TestRequestValidationHandler:
    def test_invalid_body(self, test_client):
        resp = test_client.post("/body", json={"rating": "lots"})
        assert resp.status_code == 422
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "validation_error"
        assert body["error"]["details"]["errors"][0]["field"] == "body -> rating"


class TestHTTPExceptionFallbackHandler:
    """Test that HTTPException is wrapped in structured format."""

    def test_http_400(self, test_client):
        resp = test_client.get("/raise-http-400")
        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "bad_request"
        assert body["error"]["message"] == "Bad input"

    def test_http_404(self, test_client):
        resp = test_client.get("/raise-http-404")
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"]["code"] == "not_found"

    def test_unknown_route(self, test_client):
        resp = test_client.get("/no-such-route")
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "not_found"

    def test_http_501(self, test_client):
        resp = test_client.get("/raise-http-501")
        assert resp.status_code == 501
        body = resp.json()
        assert body["error"]["code"] == "not_implemented"

    def test_http_503(self, test_client):
        resp = test_client.get("/raise-http-503")
        assert resp.status_code == 503
        body = resp.json()
        assert body["error"]["code"] == "service_unavailable"


class TestGeneralExceptionHandler:
    """Test that unhandled exceptions also produce structured format."""

    def test_unexpected_error(self, test_client):
        resp = test_client.get("/raise-unexpected")
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "internal_error"
