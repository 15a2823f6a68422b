"""
Unit tests for server exception handlers.

Tests cover the JSON error body produced by each registered handler.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from taskboard.core.errors import Forbidden, TaskNotFound, TaskboardError, Unauthenticated, UserNotFound
from taskboard.server.exception_handlers import setup_exception_handlers
from taskboard.server.exception_handlers.global_handler import (
    datastore_error_handler,
    global_exception_handler,
    taskboard_error_handler,
    validation_error_handler,
)

LOGGER = "taskboard.server.exception_handlers.global_handler.logger"


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/tasks"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


def body(response: JSONResponse) -> dict:
    return json.loads(response.body.decode())


class TestTaskboardErrorHandler:
    @pytest.mark.parametrize(
        ("exc", "status", "message"),
        [
            (Unauthenticated(), 401, "Authentication required"),
            (Forbidden(), 403, "Invalid or expired token"),
            (TaskNotFound(), 404, "Task not found"),
            (UserNotFound(), 400, "User not found"),
        ],
    )
    async def test_maps_status_and_message(self, mock_request, exc, status, message):
        with patch(LOGGER):
            response = await taskboard_error_handler(mock_request, exc)

        assert response.status_code == status
        assert body(response) == {"error": message}

    async def test_client_errors_log_at_info(self, mock_request):
        with patch(LOGGER) as mock_logger:
            await taskboard_error_handler(mock_request, TaskNotFound())

        mock_logger.info.assert_called_once()
        mock_logger.error.assert_not_called()

    async def test_server_errors_log_at_error(self, mock_request):
        with patch(LOGGER) as mock_logger:
            response = await taskboard_error_handler(mock_request, TaskboardError("boom"))

        assert response.status_code == 500
        assert body(response) == {"error": "boom"}
        mock_logger.error.assert_called_once()


class TestValidationErrorHandler:
    async def test_answers_500_with_error_body(self, mock_request):
        exc = RequestValidationError(
            [{"type": "missing", "loc": ("body", "password"), "msg": "Field required", "input": {}}]
        )

        with patch(LOGGER):
            response = await validation_error_handler(mock_request, exc)

        assert response.status_code == 500
        payload = body(response)
        assert set(payload) == {"error"}
        assert "password" in payload["error"]


class TestDatastoreErrorHandler:
    async def test_exposes_driver_message(self, mock_request):
        exc = IntegrityError("INSERT INTO users ...", {}, Exception("UNIQUE constraint failed: users.email"))

        with patch(LOGGER):
            response = await datastore_error_handler(mock_request, exc)

        assert response.status_code == 500
        assert body(response) == {"error": "UNIQUE constraint failed: users.email"}

    async def test_without_orig_uses_exception_text(self, mock_request):
        with patch(LOGGER):
            response = await datastore_error_handler(mock_request, SQLAlchemyError("pool exhausted"))

        assert body(response) == {"error": "pool exhausted"}

    async def test_logs_error_type(self, mock_request):
        exc = OperationalError("SELECT 1", {}, Exception("connection refused"))

        with patch(LOGGER) as mock_logger:
            await datastore_error_handler(mock_request, exc)

        call_args = mock_logger.error.call_args
        assert call_args[1]["extra"]["error_type"] == "OperationalError"
        assert call_args[1]["extra"]["path"] == "/tasks"


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    async def test_exception_handler_logs_error(self, mock_request):
        """Test that exception handler logs errors."""
        exc = ValueError("Test error")

        with patch(LOGGER) as mock_logger:
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"

    async def test_exception_handler_returns_500_json(self, mock_request):
        exc = RuntimeError("Test error")

        with patch(LOGGER):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        payload = body(response)
        assert payload["error"] == "Test error"
        assert payload["error_type"] == "RuntimeError"
        assert payload["error_id"] == id(exc)

    async def test_request_without_client(self, mock_request):
        mock_request.client = None

        with patch(LOGGER) as mock_logger:
            await global_exception_handler(mock_request, RuntimeError("x"))

        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"


def test_setup_registers_all_handlers():
    app = FastAPI()

    setup_exception_handlers(app)

    assert app.exception_handlers[TaskboardError] is taskboard_error_handler
    assert app.exception_handlers[RequestValidationError] is validation_error_handler
    assert app.exception_handlers[SQLAlchemyError] is datastore_error_handler
    assert app.exception_handlers[Exception] is global_exception_handler
