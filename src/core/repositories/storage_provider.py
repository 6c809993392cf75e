"""Abstract contract for image byte storage."""

from abc import ABC, abstractmethod

from core.models.image import StorageProviderName, UploadResult
from core.utils.buffers import FileData


class StorageProvider(ABC):
    """Contract for placing image bytes and obtaining a raw URL.

    Implementations could be local disk, Cloudinary, etc.
    Handlers depend on this interface, not the implementation.
    """

    name: StorageProviderName

    @abstractmethod
    def upload_image(
        self,
        *,
        file_data: FileData,
        filename: str,
        mime_type: str,
    ) -> UploadResult:
        """Store image bytes.

        Args:
            file_data: Image content as a buffer, binary stream or chunk iterable
            filename: Client-declared file name
            mime_type: Validated MIME type (e.g., 'image/png')

        Returns:
            Provider key, raw URL and pixel dimensions when known

        Raises:
            OSError: If a local write fails
            StorageError: If the backend rejects the upload
        """

    @abstractmethod
    def remove_image(self, *, provider_key: str) -> None:
        """Remove stored bytes, used to roll back a failed upload.

        Args:
            provider_key: Key returned by ``upload_image``

        Raises:
            OSError: If a local delete fails
            StorageError: If the backend rejects the deletion
        """
