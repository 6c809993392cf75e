"""Pydantic models for image upload request/response."""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import ALLOWED_MIME_TYPES

logger = Logger(utc=True)


class ImageUploadRequest(BaseModel):
    """Validation model for image upload request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file: str = Field(..., description="Base64 encoded image file")
    filename: str = Field(
        ..., min_length=1, max_length=255, description="Original file name"
    )
    mime_type: str = Field(..., description="Declared MIME type of the file")

    @field_validator("mime_type")
    @classmethod
    def validate_mime_type(cls, value: str) -> str:
        mime_type = value.lower()

        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValueError(
                f"File type not supported. Allowed types: {', '.join(sorted(ALLOWED_MIME_TYPES))}"
            )

        return mime_type

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must not be empty
        - must decode correctly

        Size limits are enforced by UploadService.
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        return value


class ImageUploadResponse(BaseModel):
    """Response model for successful image upload."""

    image_id: str = Field(..., description="Unique image ID")
    raw_url: str = Field(..., description="Cacheable direct link to the image bytes")
    short_url: str = Field(..., description="Short view link")
    direct_url: str = Field(..., description="Storage provider URL")
    width: int | None = Field(None, description="Width in pixels")
    height: int | None = Field(None, description="Height in pixels")
    file_size: int = Field(..., description="Image size in bytes")
    mime_type: str = Field(..., description="MIME type")
    created_at: str = Field(..., description="Creation timestamp")
    delete_token: str = Field(..., description="Token required to delete the image; shown once")
    message: str = Field(..., description="Success message")
