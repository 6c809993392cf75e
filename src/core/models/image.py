"""Shared image metadata models.

A stored ``ImageRecord`` carries the delete token. It is never serialized
directly: lookups expose ``ImageView`` and only the create path returns an
``UploadReceipt`` with the token.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class StorageProviderName(str, Enum):
    """Backend that holds the bytes of an image."""

    LOCAL = "local"
    REMOTE = "remote"


class Dimensions(BaseModel):
    """Pixel dimensions of an image."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Width in pixels")
    height: int = Field(..., gt=0, description="Height in pixels")


class UploadResult(BaseModel):
    """What a storage provider reports after placing the bytes."""

    model_config = ConfigDict(frozen=True)

    provider_key: StrictStr = Field(..., min_length=1, description="Provider-specific object handle")
    raw_url: StrictStr = Field(..., min_length=1, description="Directly fetchable URL for the bytes")
    width: int | None = Field(None, gt=0, description="Width in pixels, when known")
    height: int | None = Field(None, gt=0, description="Height in pixels, when known")


class NewImage(BaseModel):
    """Fields supplied by the caller when creating an image record."""

    model_config = ConfigDict(frozen=True)

    provider: StorageProviderName = Field(..., description="Storage backend holding the bytes")
    provider_key: StrictStr = Field(..., min_length=1, description="Provider-specific object handle")
    raw_url: StrictStr = Field(..., min_length=1, description="Directly fetchable URL for the bytes")
    width: int | None = Field(None, gt=0, description="Width in pixels")
    height: int | None = Field(None, gt=0, description="Height in pixels")
    mime_type: StrictStr = Field(..., description="MIME type of the image (e.g. image/png)")
    file_size: int = Field(..., ge=0, description="Payload size in bytes")


class ImageView(NewImage):
    """Public view of an image record (no delete token)."""

    image_id: StrictStr = Field(..., description="Unique image identifier")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")


class UploadReceipt(ImageView):
    """One-time creation response, the only shape that carries the token."""

    delete_token: StrictStr = Field(..., description="Capability required to delete the image")


class ImageRecord(NewImage):
    """Image metadata as held by a metadata repository."""

    image_id: StrictStr = Field(..., description="Unique image identifier")
    delete_token: StrictStr = Field(..., description="Capability required to delete the image")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")

    def to_view(self) -> ImageView:
        return ImageView(**self.model_dump(exclude={"delete_token"}))

    def to_receipt(self) -> UploadReceipt:
        return UploadReceipt(**self.model_dump())
