"""Business logic for image deletion.

Deletion is gated by the delete token handed out at upload time. Only the
metadata record is removed; stored bytes stay with the provider.
"""

from aws_lambda_powertools import Logger

from core.dependencies import get_metadata_repository
from core.repositories.metadata_repository import ImageMetadataRepository

logger = Logger(utc=True)


class DeleteService:
    """Application service responsible for deleting images."""

    def __init__(self, metadata: ImageMetadataRepository | None = None) -> None:
        self.metadata = metadata if metadata is not None else get_metadata_repository()

    def delete_image(self, image_id: str, delete_token: str) -> bool:
        """Delete an image record.

        Returns:
            True if the record was removed; False when the id is unknown or
            the token does not match

        Raises:
            MetadataOperationFailedError: If the repository fails
        """
        logger.debug("Starting image deletion", extra={"image_id": image_id})

        deleted = self.metadata.delete_image(image_id=image_id, delete_token=delete_token)

        if deleted:
            logger.info("Image deleted successfully", extra={"image_id": image_id})
        else:
            logger.warning("Image deletion rejected", extra={"image_id": image_id})

        return deleted
