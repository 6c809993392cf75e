"""
Business logic for resolving the raw bytes location of an image.
"""

from aws_lambda_powertools import Logger

from core.dependencies import get_metadata_repository
from core.repositories.metadata_repository import ImageMetadataRepository

logger = Logger(utc=True)


class RawImageService:
    """Resolve an image id to the URL its provider serves the bytes from.

    Local images resolve to ``/uploads/{file}`` (served by the static file
    server); remote images resolve to the provider's secure URL.
    """

    def __init__(self, metadata: ImageMetadataRepository | None = None) -> None:
        self.metadata = metadata if metadata is not None else get_metadata_repository()

    def resolve_raw_url(self, image_id: str) -> str | None:
        record = self.metadata.get_image(image_id=image_id)
        if record is None:
            logger.info("Raw image not found", extra={"image_id": image_id})
            return None

        logger.debug(
            "Resolved raw image",
            extra={"image_id": image_id, "provider": record.provider.value},
        )
        return record.raw_url
