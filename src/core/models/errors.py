"""Custom exception classes for the image service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_REMOTE_STORAGE,
    ERROR_CODE_STORAGE,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when request validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MIMETypeError(ValidationError):
    """Raised when an unsupported MIME type is provided."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_MIME_TYPE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class FileSizeError(ValidationError):
    """Raised when file size is zero or exceeds the allowed limit."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_FILE_SIZE_EXCEEDED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StorageError(ImageServiceError):
    """Raised when a storage provider cannot complete an operation."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RemoteStorageError(StorageError):
    """Raised when the remote object storage service rejects an operation."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_REMOTE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MetadataOperationFailedError(ImageServiceError):
    """Raised when an image metadata operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_METADATA_OPERATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(ImageServiceError):
    """Raised when the service configuration is missing or invalid."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
