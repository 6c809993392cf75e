"""
Pytest configuration and fixtures for image hosting tests.
Provides AWS mocking, DynamoDB fixtures and sample image payloads.
"""

import base64
import os
import struct
import zlib
from collections.abc import Callable

import boto3
import pytest
from moto import mock_aws

os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("IMAGE_METADATA_TABLE_NAME", "test-image-metadata")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageHosting")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-hosting-test")


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def dynamodb_table(dynamodb_resource):
    """Create the image metadata table (moto discards it on context exit)."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("IMAGE_METADATA_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "image_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "image_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


def _png_bytes(width: int, height: int, padding: int = 0) -> bytes:
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    chunk = b"IHDR" + ihdr
    return (
        b"\x89PNG\r\n\x1a\n"
        + struct.pack(">I", len(ihdr))
        + chunk
        + struct.pack(">I", zlib.crc32(chunk))
        + b"\x00" * padding
    )


def _jpeg_bytes(width: int, height: int, sof_marker: int = 0xC0) -> bytes:
    app0 = b"\xff\xe0" + struct.pack(">H", 16) + b"JFIF\x00" + b"\x01\x01\x00\x00\x01\x00\x01\x00\x00"
    sof = (
        bytes([0xFF, sof_marker])
        + struct.pack(">HBHHB", 17, 8, height, width, 3)
        + b"\x01\x22\x00\x02\x11\x01\x03\x11\x01"
    )
    return b"\xff\xd8" + app0 + sof + b"\xff\xd9"


@pytest.fixture
def make_png() -> Callable[..., bytes]:
    """Build a PNG header with the given dimensions (and optional padding)."""
    return _png_bytes


@pytest.fixture
def make_jpeg() -> Callable[..., bytes]:
    """Build a JPEG with an APP0 segment followed by a frame header."""
    return _jpeg_bytes


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample JPEG data, 640x480."""
    return _jpeg_bytes(640, 480)
