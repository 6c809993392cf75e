"""Cloudinary-backed implementation of StorageProvider."""

from typing import Any

from aws_lambda_powertools import Logger
from cloudinary.exceptions import Error as CloudinaryError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.cloudinary_adapter import CloudinaryAdapterProtocol
from core.models.errors import RemoteStorageError
from core.models.image import StorageProviderName, UploadResult
from core.repositories.storage_provider import StorageProvider
from core.utils.buffers import FileData, read_all
from core.utils.constants import ERROR_CODE_IMAGE_UPLOAD_FAILED

logger = Logger(utc=True)

UPLOAD_OPTIONS: dict[str, Any] = {
    "resource_type": "image",
    "quality": "auto",
    "fetch_format": "auto",
}


class CloudinaryImageStorage(StorageProvider):
    """Image storage delegated to Cloudinary.

    Cloudinary assigns the public id and secure URL and reports the
    authoritative pixel dimensions, so nothing is sniffed locally.
    """

    name = StorageProviderName.REMOTE

    def __init__(self, adapter: CloudinaryAdapterProtocol) -> None:
        self._cloudinary = adapter

    def upload_image(
        self,
        *,
        file_data: FileData,
        filename: str,
        mime_type: str,
    ) -> UploadResult:
        """Upload image bytes to Cloudinary.

        Raises:
            RemoteStorageError: If Cloudinary rejects the upload or
                returns an unusable response
        """
        buffer = read_all(file_data)

        logger.debug(
            "Uploading image to Cloudinary",
            extra={"original_filename": filename, "mime_type": mime_type, "size": len(buffer)},
        )

        try:
            response = self._cloudinary.upload(body=buffer, options=dict(UPLOAD_OPTIONS))
        except CloudinaryError as exc:
            logger.error("Cloudinary upload failed", extra={"original_filename": filename})
            raise RemoteStorageError(
                message="Unable to upload image at this time",
                error_code=ERROR_CODE_IMAGE_UPLOAD_FAILED,
                details={"filename": filename},
            ) from exc

        try:
            result = UploadResult(
                provider_key=response["public_id"],
                raw_url=response["secure_url"],
                width=response.get("width") or None,
                height=response.get("height") or None,
            )
        except (KeyError, TypeError, PydanticValidationError) as exc:
            logger.error(
                "Unexpected Cloudinary upload response",
                extra={"original_filename": filename},
            )
            raise RemoteStorageError(
                message="Remote storage returned an invalid response",
                error_code=ERROR_CODE_IMAGE_UPLOAD_FAILED,
                details={"filename": filename},
            ) from exc

        logger.info("Image uploaded to Cloudinary", extra={"public_id": result.provider_key})
        return result

    def remove_image(self, *, provider_key: str) -> None:
        logger.debug("Removing Cloudinary image", extra={"public_id": provider_key})

        try:
            self._cloudinary.destroy(public_id=provider_key)
        except CloudinaryError as exc:
            logger.error("Cloudinary deletion failed", extra={"public_id": provider_key})
            raise RemoteStorageError(
                message="Unable to delete image at this time",
                details={"public_id": provider_key},
            ) from exc
