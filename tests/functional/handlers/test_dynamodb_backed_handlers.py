"""Handlers wired to DynamoDB metadata (moto) and local disk storage."""

import base64
import json
from types import SimpleNamespace

import pytest

from core.dependencies import get_metadata_repository, reset_dependencies
from core.infrastructure.aws.dynamodb_metadata import DynamoDBMetadata
from handlers.delete_image.handler import handler as delete_handler
from handlers.get_image.handler import handler as get_handler
from handlers.upload_image.handler import handler as upload_handler

CONTEXT = SimpleNamespace(aws_request_id="functional-request", function_name="image-hosting")


@pytest.fixture(autouse=True)
def dynamodb_env(monkeypatch, tmp_path, dynamodb_table):
    monkeypatch.setenv("STORAGE_PROVIDER", "local")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path))
    monkeypatch.setenv("METADATA_BACKEND", "dynamodb")
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://img.example.com")
    reset_dependencies()
    yield
    reset_dependencies()


def _event(method, *, image_id=None, body=None, headers=None):
    return {
        "httpMethod": method,
        "headers": headers or {},
        "pathParameters": {"image_id": image_id} if image_id else None,
        "body": json.dumps(body) if body is not None else None,
    }


def test_metadata_backend_is_dynamodb() -> None:
    assert isinstance(get_metadata_repository(), DynamoDBMetadata)


def test_upload_view_delete(make_jpeg, dynamodb_table) -> None:
    upload = _event(
        "POST",
        body={
            "file": base64.b64encode(make_jpeg(640, 480)).decode(),
            "filename": "dog.jpg",
            "mime_type": "image/jpeg",
        },
    )

    created = upload_handler(upload, CONTEXT)
    assert created["statusCode"] == 201
    receipt = json.loads(created["body"])

    item = dynamodb_table.get_item(Key={"image_id": receipt["image_id"]})["Item"]
    assert item["delete_token"] == receipt["delete_token"]
    assert item["provider"] == "local"

    viewed = get_handler(_event("GET", image_id=receipt["image_id"]), CONTEXT)
    assert viewed["statusCode"] == 200
    view = json.loads(viewed["body"])
    assert (view["width"], view["height"]) == (640, 480)
    assert view["short_url"] == f"https://img.example.com/i/{receipt['image_id']}"

    rejected = delete_handler(
        _event("DELETE", image_id=receipt["image_id"], headers={"X-Delete-Token": "wrong"}),
        CONTEXT,
    )
    assert rejected["statusCode"] == 404

    deleted = delete_handler(
        _event("DELETE", image_id=receipt["image_id"], headers={"X-Delete-Token": receipt["delete_token"]}),
        CONTEXT,
    )
    assert deleted["statusCode"] == 200
    tombstone = dynamodb_table.get_item(Key={"image_id": receipt["image_id"]})["Item"]
    assert set(tombstone) == {"image_id", "deleted_at"}

    gone = get_handler(_event("GET", image_id=receipt["image_id"]), CONTEXT)
    assert gone["statusCode"] == 404
