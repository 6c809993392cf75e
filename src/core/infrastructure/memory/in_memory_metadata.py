"""In-memory implementation of ImageMetadataRepository."""

import hmac
import threading

from aws_lambda_powertools import Logger

from core.models.errors import MetadataOperationFailedError
from core.models.image import ImageRecord, NewImage
from core.repositories.metadata_repository import ImageMetadataRepository
from core.utils.constants import ERROR_CODE_METADATA_ID_EXHAUSTED, MAX_ID_GENERATION_ATTEMPTS
from core.utils.id_generator import generate_delete_token, generate_image_id
from core.utils.time import utc_now

logger = Logger(utc=True)


class InMemoryMetadata(ImageMetadataRepository):
    """Process-lifetime metadata store.

    Records live in a dict guarded by a single lock and are lost when the
    process exits. Deleted ids are remembered so they are never reissued.
    """

    def __init__(self) -> None:
        self._images: dict[str, ImageRecord] = {}
        self._retired_ids: set[str] = set()
        self._lock = threading.Lock()

    def create_image(self, *, image: NewImage) -> ImageRecord:
        with self._lock:
            for attempt in range(1, MAX_ID_GENERATION_ATTEMPTS + 1):
                image_id = generate_image_id()

                if image_id in self._images or image_id in self._retired_ids:
                    logger.warning("Image id collision", extra={"attempt": attempt})
                    continue

                record = ImageRecord(
                    **image.model_dump(),
                    image_id=image_id,
                    delete_token=generate_delete_token(),
                    created_at=utc_now(),
                )
                self._images[image_id] = record

                logger.info(
                    "Metadata created",
                    extra={"image_id": image_id, "provider": record.provider.value},
                )
                return record

        raise MetadataOperationFailedError(
            message="Unable to allocate a unique image id",
            error_code=ERROR_CODE_METADATA_ID_EXHAUSTED,
            details={"attempts": MAX_ID_GENERATION_ATTEMPTS},
        )

    def get_image(self, *, image_id: str) -> ImageRecord | None:
        with self._lock:
            return self._images.get(image_id)

    def delete_image(self, *, image_id: str, delete_token: str) -> bool:
        with self._lock:
            record = self._images.get(image_id)

            if record is None or not hmac.compare_digest(
                record.delete_token.encode(), delete_token.encode()
            ):
                logger.info("Delete rejected", extra={"image_id": image_id})
                return False

            del self._images[image_id]
            self._retired_ids.add(image_id)

        logger.info("Metadata removed", extra={"image_id": image_id})
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._images)
