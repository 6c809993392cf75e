"""
Business logic for image metadata lookup.
"""

from aws_lambda_powertools import Logger

from core.dependencies import get_metadata_repository
from core.models.image import ImageView
from core.repositories.metadata_repository import ImageMetadataRepository

logger = Logger(utc=True)


class GetService:
    """Application service responsible for looking up images.

    Only the public view is returned; the delete token never leaves the
    metadata repository through this path.
    """

    def __init__(self, metadata: ImageMetadataRepository | None = None) -> None:
        self.metadata = metadata if metadata is not None else get_metadata_repository()

    def get_image(self, image_id: str) -> ImageView | None:
        """Return the public view of an image, or None if it does not exist."""
        logger.debug("Looking up image", extra={"image_id": image_id})

        record = self.metadata.get_image(image_id=image_id)
        if record is None:
            logger.info("Image not found", extra={"image_id": image_id})
            return None

        return record.to_view()
