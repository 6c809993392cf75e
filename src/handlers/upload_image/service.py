"""Business logic for image upload operations.

This module coordinates validation, storage, and metadata persistence
for image uploads.
"""

import base64
import binascii

from aws_lambda_powertools import Logger

from core.dependencies import get_metadata_repository, get_storage_provider
from core.models.errors import FileSizeError, MIMETypeError, StorageError, ValidationError
from core.models.image import NewImage, UploadReceipt
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_provider import StorageProvider
from core.utils.buffers import FileData, read_all
from core.utils.constants import (
    ALLOWED_MIME_TYPES,
    ERROR_CODE_EMPTY_FILE,
    MAX_FILE_SIZE,
    get_max_file_size_mb,
)

logger = Logger(utc=True)


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - MIME type and size validation
    - Uploading image content to the active storage provider
    - Persisting image metadata
    """

    def __init__(
        self,
        storage: StorageProvider | None = None,
        metadata: ImageMetadataRepository | None = None,
    ) -> None:
        self.storage = storage if storage is not None else get_storage_provider()
        self.metadata = metadata if metadata is not None else get_metadata_repository()

    @staticmethod
    def decode_file(encoded: str) -> bytes:
        """Decode base64-encoded image data.

        Raises:
            ValidationError: If decoding fails
        """
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.exception("Failed to decode base64 image data")
            raise ValidationError(
                message="Invalid image data",
                details={"encoding": "base64"},
            ) from exc

    @staticmethod
    def validate_mime_type(mime_type: str) -> None:
        """Raise MIMETypeError unless the type is on the allow-list."""
        if mime_type not in ALLOWED_MIME_TYPES:
            logger.warning("Unsupported MIME type", extra={"mime_type": mime_type})
            raise MIMETypeError(
                message="Unsupported image type",
                details={"mime_type": mime_type},
            )

    @staticmethod
    def validate_file_size(file_size: int) -> None:
        """Raise FileSizeError for empty or oversized payloads."""
        if file_size == 0:
            raise FileSizeError(
                message="File is empty",
                error_code=ERROR_CODE_EMPTY_FILE,
                details={"file_size": file_size},
            )

        if file_size > MAX_FILE_SIZE:
            logger.warning("File too large", extra={"file_size": file_size})
            raise FileSizeError(
                message=f"File size must be less than {get_max_file_size_mb()}MB",
                details={"file_size": file_size, "max_file_size": MAX_FILE_SIZE},
            )

    def upload_image(
        self,
        *,
        file_data: FileData,
        filename: str,
        mime_type: str,
    ) -> UploadReceipt:
        """Upload an image and persist its metadata.

        The upload flow is:
        1. Validate the declared MIME type
        2. Assemble the payload and validate its size
        3. Upload image to the storage provider
        4. Persist image metadata
        5. Roll back storage if metadata persistence fails

        Returns:
            Creation receipt, the only place the delete token is exposed

        Raises:
            MIMETypeError: If the file type is not supported
            FileSizeError: If the payload is empty or too large
            OSError / StorageError: If the provider fails (not retried)
            MetadataOperationFailedError: If metadata persistence fails
        """
        mime_type = mime_type.lower()
        logger.debug(
            "Starting image upload",
            extra={"original_filename": filename, "mime_type": mime_type},
        )

        # Step 1: Validate MIME type before reading anything
        self.validate_mime_type(mime_type)

        # Step 2: Assemble the payload
        buffer = read_all(file_data)
        self.validate_file_size(len(buffer))

        # Step 3: Upload to storage
        try:
            result = self.storage.upload_image(
                file_data=buffer,
                filename=filename,
                mime_type=mime_type,
            )
        except (OSError, StorageError):
            logger.exception(
                "Image upload to storage failed",
                extra={"provider": self.storage.name.value},
            )
            raise

        # Step 4: Persist metadata (rollback storage on failure)
        new_image = NewImage(
            provider=self.storage.name,
            provider_key=result.provider_key,
            raw_url=result.raw_url,
            width=result.width,
            height=result.height,
            mime_type=mime_type,
            file_size=len(buffer),
        )

        try:
            record = self.metadata.create_image(image=new_image)
        except Exception:
            logger.exception("Failed to persist image metadata")

            # Best-effort cleanup to avoid orphaned storage objects
            try:
                self.storage.remove_image(provider_key=result.provider_key)
            except (OSError, StorageError):
                logger.warning(
                    "Failed to clean up uploaded image after metadata failure",
                    extra={"provider_key": result.provider_key},
                )

            raise

        logger.info(
            "Image uploaded successfully",
            extra={"image_id": record.image_id, "provider": record.provider.value},
        )
        return record.to_receipt()
