"""Shared fixtures for Lambda handler tests."""

import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

from core.dependencies import reset_dependencies


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        function_name="image-hosting-test",
        memory_limit_in_mb=128,
        invoked_function_arn="arn:aws:lambda:us-east-1:123456789012:function:image-hosting-test",
        aws_request_id="test-request-id",
    )


@pytest.fixture(autouse=True)
def local_service_env(monkeypatch, tmp_path):
    """Run handlers against local disk storage and in-memory metadata."""
    upload_dir = tmp_path / "uploads"
    monkeypatch.setenv("STORAGE_PROVIDER", "local")
    monkeypatch.setenv("UPLOAD_DIR", str(upload_dir))
    monkeypatch.setenv("METADATA_BACKEND", "memory")
    monkeypatch.delenv("PUBLIC_BASE_URL", raising=False)
    reset_dependencies()
    yield upload_dir
    reset_dependencies()


@pytest.fixture
def api_event() -> Callable[..., dict[str, Any]]:
    def _event(
        method: str,
        path: str,
        *,
        body: Any = None,
        path_parameters: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": path,
            "headers": {"Host": "img.example.com", **(headers or {})},
            "pathParameters": path_parameters,
            "queryStringParameters": query,
            "body": body if body is None or isinstance(body, str) else json.dumps(body),
        }

    return _event


@pytest.fixture
def upload_body(make_png) -> dict[str, str]:
    return {
        "file": base64.b64encode(make_png(800, 600, padding=1024)).decode(),
        "filename": "cat.png",
        "mime_type": "image/png",
    }
