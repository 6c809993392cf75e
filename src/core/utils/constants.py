"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_EMPTY_FILE = "EMPTY_FILE"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_REMOTE_STORAGE = "REMOTE_STORAGE_ERROR"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"

# Metadata Errors
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_ID_EXHAUSTED = "METADATA_ID_EXHAUSTED"

# Configuration
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"



# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB in bytes


MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
}

DEFAULT_EXTENSION: Final[str] = "jpg"

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

# Chunk size used when draining file-like upload sources
READ_CHUNK_SIZE = 64 * 1024


# ============================================================================
# Identifiers
# ============================================================================

# Digits 2-9 and letters, without 0/O and 1/l/I
ID_ALPHABET: Final[str] = (
    "23456789"
    "ABCDEFGHJKLMNPQRSTUVWXYZ"
    "abcdefghijkmnopqrstuvwxyz"
)
ID_LENGTH: Final[int] = 10
MAX_ID_GENERATION_ATTEMPTS: Final[int] = 5


# ============================================================================
# Public URLs
# ============================================================================

LOCAL_UPLOADS_URL_PREFIX = "/uploads"
RAW_URL_PATH = "/raw"
SHORT_URL_PATH = "/i"
DEFAULT_PUBLIC_HOST = "localhost:5000"
DEFAULT_PUBLIC_SCHEME = "http"

VIEW_CACHE_CONTROL = "public, max-age=600, s-maxage=600"
RAW_CACHE_CONTROL = "public, immutable, max-age=31536000"


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Delete-Token"
EXPOSE_HEADERS = "Content-Type,Content-Length,Location"
DEFAULT_CONTENT_TYPE = "application/json"
DELETE_TOKEN_HEADER = "x-delete-token"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_STORAGE_PROVIDER = "STORAGE_PROVIDER"
ENV_UPLOAD_DIR = "UPLOAD_DIR"
ENV_METADATA_BACKEND = "METADATA_BACKEND"
ENV_PUBLIC_BASE_URL = "PUBLIC_BASE_URL"
ENV_CLOUDINARY_CLOUD_NAME = "CLOUDINARY_CLOUD_NAME"
ENV_CLOUDINARY_API_KEY = "CLOUDINARY_API_KEY"
ENV_CLOUDINARY_API_SECRET = "CLOUDINARY_API_SECRET"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_METADATA_TABLE_NAME = "IMAGE_METADATA_TABLE_NAME"

DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_AWS_REGION = "us-east-1"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)


def get_file_extension(mime_type: str) -> str:
    """Return the on-disk extension for a MIME type (``jpg`` if unmapped)."""
    return MIME_TYPE_EXTENSION_MAP.get(mime_type, DEFAULT_EXTENSION)
