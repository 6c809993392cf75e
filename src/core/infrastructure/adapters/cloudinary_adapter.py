"""Thin adapter for interacting with Cloudinary."""

from io import BytesIO
from typing import Any, Protocol

import cloudinary
import cloudinary.uploader


class CloudinaryAdapterProtocol(Protocol):
    """Minimal Cloudinary adapter protocol (repository-facing)."""

    def upload(self, *, body: bytes, options: dict[str, Any]) -> dict[str, Any]: ...

    def destroy(self, *, public_id: str) -> dict[str, Any]: ...


class CloudinaryAdapter:
    """Low-level Cloudinary operations (mechanical, no error handling).

    This adapter:
    - Configures the Cloudinary SDK from explicit credentials
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, *, cloud_name: str, api_key: str, api_secret: str) -> None:
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    def upload(self, *, body: bytes, options: dict[str, Any]) -> dict[str, Any]:
        """Upload bytes to Cloudinary.

        Raises cloudinary exceptions - caught by domain implementation.
        """
        result: dict[str, Any] = cloudinary.uploader.upload(BytesIO(body), **options)
        return result

    def destroy(self, *, public_id: str) -> dict[str, Any]:
        """Delete an uploaded image.

        Raises cloudinary exceptions - caught by domain implementation.
        """
        result: dict[str, Any] = cloudinary.uploader.destroy(
            public_id,
            resource_type="image",
        )
        return result
