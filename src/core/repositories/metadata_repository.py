"""Abstract contract for image metadata persistence."""

from abc import ABC, abstractmethod

from core.models.image import ImageRecord, NewImage


class ImageMetadataRepository(ABC):
    """Contract for storing and retrieving image metadata.

    Implementations could be in-memory, DynamoDB, PostgreSQL, etc.
    Handlers depend on this interface, not the implementation.
    """

    @abstractmethod
    def create_image(self, *, image: NewImage) -> ImageRecord:
        """Create a record with a fresh id and delete token.

        Args:
            image: Provider result combined with the request's mime type and size

        Returns:
            The complete record, including the delete token

        Raises:
            MetadataOperationFailedError: If the record cannot be stored
        """

    @abstractmethod
    def get_image(self, *, image_id: str) -> ImageRecord | None:
        """Fetch a record by id.

        Args:
            image_id: Unique image identifier

        Returns:
            The record, or None if not found

        Raises:
            MetadataOperationFailedError: If the lookup fails
        """

    @abstractmethod
    def delete_image(self, *, image_id: str, delete_token: str) -> bool:
        """Delete a record if the token matches exactly.

        Args:
            image_id: Unique image identifier
            delete_token: Token returned when the record was created

        Returns:
            True if the record was removed; False for an unknown id or a
            wrong token (the two cases are deliberately indistinguishable)

        Raises:
            MetadataOperationFailedError: If the deletion fails
        """
