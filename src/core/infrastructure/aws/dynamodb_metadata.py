"""DynamoDB-backed implementation of ImageMetadataRepository."""

from decimal import Decimal
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapterProtocol
from core.models.errors import MetadataOperationFailedError
from core.models.image import ImageRecord, NewImage
from core.repositories.metadata_repository import ImageMetadataRepository
from core.utils.constants import (
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_ID_EXHAUSTED,
    MAX_ID_GENERATION_ATTEMPTS,
)
from core.utils.id_generator import generate_delete_token, generate_image_id
from core.utils.time import utc_now, utc_now_iso

Item = dict[str, Any]

logger = Logger(utc=True)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"

# Marks a retired id; the item keeps the key so the id is never reissued
TOMBSTONE_ATTRIBUTE = "deleted_at"


def _is_conditional_check_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED


def _to_item(record: ImageRecord) -> Item:
    return record.model_dump(mode="json", exclude_none=True)


def _from_item(item: Item) -> ImageRecord:
    # boto3 returns every number as Decimal
    normalized = {
        key: int(value) if isinstance(value, Decimal) else value
        for key, value in item.items()
    }
    return ImageRecord.model_validate(normalized)


class DynamoDBMetadata(ImageMetadataRepository):
    """DynamoDB-backed metadata storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.

    Deleting replaces the record with a tombstone holding only the id and
    the deletion time, so the conditional put on create keeps treating the
    id as taken.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol) -> None:
        self._db = adapter

    def create_image(self, *, image: NewImage) -> ImageRecord:
        """Create metadata with a freshly generated id and token.

        An id that already exists fails the conditional put and is retried
        with a new id.

        Raises:
            MetadataOperationFailedError: If creation fails or no unique id
                could be allocated
        """
        for attempt in range(1, MAX_ID_GENERATION_ATTEMPTS + 1):
            record = ImageRecord(
                **image.model_dump(),
                image_id=generate_image_id(),
                delete_token=generate_delete_token(),
                created_at=utc_now(),
            )

            logger.debug("Creating metadata", extra={"image_id": record.image_id})

            try:
                self._db.put_item(
                    item=_to_item(record),
                    condition_expression="attribute_not_exists(image_id)",  # Partition key
                )
            except ClientError as exc:
                if _is_conditional_check_failure(exc):
                    logger.warning(
                        "Image id collision",
                        extra={"image_id": record.image_id, "attempt": attempt},
                    )
                    continue

                logger.error("DynamoDB put_item failed", extra={"image_id": record.image_id})
                raise MetadataOperationFailedError(
                    message="Unable to save image metadata at this time",
                    error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                    details={"image_id": record.image_id},
                ) from exc

            logger.info("Metadata created", extra={"image_id": record.image_id})
            return record

        raise MetadataOperationFailedError(
            message="Unable to allocate a unique image id",
            error_code=ERROR_CODE_METADATA_ID_EXHAUSTED,
            details={"attempts": MAX_ID_GENERATION_ATTEMPTS},
        )

    def get_image(self, *, image_id: str) -> ImageRecord | None:
        """Fetch metadata for a single image.

        Raises:
            MetadataOperationFailedError: If fetch fails or the stored item
                is malformed
        """
        logger.debug("Fetching metadata", extra={"image_id": image_id})

        try:
            response = self._db.get_item(key={"image_id": image_id})
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Unable to retrieve image metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"image_id": image_id},
            ) from exc

        item = response.get("Item")
        if item is None or TOMBSTONE_ATTRIBUTE in item:
            return None

        try:
            return _from_item(item)
        except (ValueError, TypeError) as exc:
            logger.exception("Invalid image metadata format", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Invalid image metadata format",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"image_id": image_id},
            ) from exc

    def delete_image(self, *, image_id: str, delete_token: str) -> bool:
        """Replace metadata with a tombstone when the delete token matches.

        The token check is part of the conditional put. A wrong token, a
        missing item and an existing tombstone (which has no token) all
        surface as a failed condition.

        Raises:
            MetadataOperationFailedError: If deletion fails
        """
        logger.debug("Removing metadata", extra={"image_id": image_id})

        try:
            self._db.put_item(
                item={"image_id": image_id, TOMBSTONE_ATTRIBUTE: utc_now_iso()},
                condition_expression="delete_token = :token",
                expression_values={":token": delete_token},
            )
        except ClientError as exc:
            if _is_conditional_check_failure(exc):
                logger.info("Delete rejected", extra={"image_id": image_id})
                return False

            logger.error("DynamoDB tombstone put_item failed", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Unable to delete image metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"image_id": image_id},
            ) from exc

        logger.info("Metadata removed", extra={"image_id": image_id})
        return True
