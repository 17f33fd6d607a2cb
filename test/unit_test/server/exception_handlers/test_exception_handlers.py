"""
Unit tests for server exception handlers.

Tests cover the domain error handler, the global fallback handler and their
registration on an application.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient

from jobdispatch.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from jobdispatch.server.exception_handlers import setup_exception_handlers
from jobdispatch.server.exception_handlers.dispatch_handler import dispatch_error_handler
from jobdispatch.server.exception_handlers.global_handler import global_exception_handler


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/test"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.mark.asyncio
    async def test_exception_handler_logs_error(self, mock_request):
        """Test that exception handler logs errors."""
        exc = ValueError("Test error")

        with patch("jobdispatch.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"
        assert call_args[1]["extra"]["client"] == "127.0.0.1"

    @pytest.mark.asyncio
    async def test_exception_handler_returns_500_json(self, mock_request):
        exc = RuntimeError("Test error")

        with patch("jobdispatch.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["detail"] == "Internal server error"
        assert body["error_type"] == "RuntimeError"
        assert len(body["error_id"]) == 12

    @pytest.mark.asyncio
    async def test_error_id_matches_log(self, mock_request):
        with patch("jobdispatch.server.exception_handlers.global_handler.logger") as mock_logger, patch(
            "jobdispatch.server.exception_handlers.global_handler.log_error"
        ) as mock_log_error:
            response = await global_exception_handler(mock_request, KeyError("missing"))

        error_id = json.loads(response.body)["error_id"]
        assert mock_logger.error.call_args[1]["extra"]["error_id"] == error_id
        assert mock_log_error.call_args[0][0] == "KeyError"
        assert mock_log_error.call_args[0][2]["error_id"] == error_id

    @pytest.mark.asyncio
    async def test_exception_handler_without_client(self, mock_request):
        mock_request.client = None

        with patch("jobdispatch.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, ValueError("x"))

        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"


class TestDispatchErrorHandler:
    """Test suite for the domain error handler."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (NotFoundError("Job card not found"), 404),
            (ConflictError("Job card has already been audited"), 409),
            (PermissionDeniedError("Unauthorized - Admin role required"), 403),
        ],
    )
    async def test_status_and_detail(self, mock_request, exc, status_code):
        response = await dispatch_error_handler(mock_request, exc)
        assert response.status_code == status_code
        assert json.loads(response.body) == {"detail": exc.detail}

    @pytest.mark.asyncio
    async def test_extra_fields_merged_into_body(self, mock_request):
        exc = PermissionDeniedError("pending approval", extra={"requires_approval": True})
        response = await dispatch_error_handler(mock_request, exc)
        assert json.loads(response.body) == {"detail": "pending approval", "requires_approval": True}

    @pytest.mark.asyncio
    async def test_authentication_error_sets_bearer_challenge(self, mock_request):
        response = await dispatch_error_handler(mock_request, AuthenticationError("Unauthorized"))
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"


class TestSetupExceptionHandlers:
    def test_handlers_registered(self):
        app = FastAPI()
        setup_exception_handlers(app)
        from jobdispatch.core.errors import DispatchError

        assert app.exception_handlers[DispatchError] is dispatch_error_handler
        assert app.exception_handlers[Exception] is global_exception_handler

    @pytest.mark.asyncio
    async def test_routes_use_registered_handlers(self):
        app = FastAPI()
        setup_exception_handlers(app)

        @app.get("/missing")
        async def missing():
            raise NotFoundError("Nothing here")

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        with patch("jobdispatch.server.exception_handlers.global_handler.logger"):
            async with AsyncClient(transport=transport, base_url="http://localhost") as client:
                missing_response = await client.get("/missing")
                boom_response = await client.get("/boom")

        assert missing_response.status_code == 404
        assert missing_response.json() == {"detail": "Nothing here"}
        assert boom_response.status_code == 500
        assert boom_response.json()["detail"] == "Internal server error"
