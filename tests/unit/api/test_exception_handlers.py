"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    AccountDisabledError,
    AppException,
    CollaborationNotFoundError,
    DuplicateCollaborationError,
    InvalidCollaborationStateError,
    LastActiveAdminError,
    NotProjectOwnerError,
    SelfCollaborationError,
)


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str):  # type: ignore[no-untyped-def]
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path)


class TestAppExceptionMapping:
    @pytest.mark.parametrize(
        ("exc", "status_code", "error_code"),
        [
            (CollaborationNotFoundError("c-1"), 404, "COLLABORATION_NOT_FOUND"),
            (NotProjectOwnerError("p-1"), 403, "NOT_PROJECT_OWNER"),
            (AccountDisabledError(), 403, "ACCOUNT_DISABLED"),
            (DuplicateCollaborationError("p-1", "u-1"), 409, "DUPLICATE_COLLABORATION"),
            (
                InvalidCollaborationStateError("c-1", "rejected", "accepted"),
                409,
                "INVALID_COLLABORATION_STATE",
            ),
            (LastActiveAdminError(), 400, "LAST_ACTIVE_ADMIN"),
            (SelfCollaborationError(), 400, "SELF_COLLABORATION"),
        ],
    )
    async def test_error_taxonomy_to_http(
        self, exc: AppException, status_code: int, error_code: str
    ) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise exc

        response = await _get(app, "/raise-app")

        assert response.status_code == status_code
        body = response.json()
        assert body["error_code"] == error_code
        assert body["message"] == exc.message

    async def test_details_are_rendered(self) -> None:
        app = _create_test_app()
        collaboration_id = str(uuid4())

        @app.get("/raise-app")
        async def _() -> None:
            raise CollaborationNotFoundError(collaboration_id)

        response = await _get(app, "/raise-app")

        assert response.json()["details"] == {"collaboration_id": collaboration_id}


class TestFrameworkErrors:
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=405, detail="Method Not Allowed")

        response = await _get(app, "/raise-http")

        assert response.status_code == 405
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Method Not Allowed"

    async def test_unknown_route_is_not_found(self) -> None:
        response = await _get(_create_test_app(), "/nowhere")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    async def test_untranslated_integrity_error_is_conflict(self) -> None:
        from sqlalchemy.exc import IntegrityError

        app = _create_test_app()

        @app.get("/raise-integrity")
        async def _() -> None:
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        response = await _get(app, "/raise-integrity")

        assert response.status_code == 409
        assert response.json()["error_code"] == "DATABASE_ERROR"

    async def test_validation_error_returns_field_details(self) -> None:
        app = _create_test_app()

        class Body(BaseModel):
            message: str = Field(..., max_length=5)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"message": "too long"})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.message"

    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, RuntimeError("boom"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"
