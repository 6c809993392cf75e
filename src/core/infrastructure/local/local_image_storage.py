"""Local filesystem implementation of StorageProvider."""

from pathlib import Path

from aws_lambda_powertools import Logger

from core.models.image import StorageProviderName, UploadResult
from core.repositories.storage_provider import StorageProvider
from core.utils.buffers import FileData, read_all
from core.utils.constants import LOCAL_UPLOADS_URL_PREFIX, get_file_extension
from core.utils.dimensions import sniff_dimensions
from core.utils.id_generator import generate_id

logger = Logger(utc=True)


class LocalImageStorage(StorageProvider):
    """Image storage backed by a managed directory on local disk.

    Files are named ``{generated_id}.{ext}`` and served by an external static
    file server under ``/uploads``.
    """

    name = StorageProviderName.LOCAL

    def __init__(self, upload_dir: str | Path) -> None:
        self._upload_dir = Path(upload_dir)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    def upload_image(
        self,
        *,
        file_data: FileData,
        filename: str,
        mime_type: str,
    ) -> UploadResult:
        """Write image bytes to the upload directory and sniff dimensions.

        Raises:
            OSError: If the directory or file cannot be written
        """
        # Buffer first so an aborted stream never reaches disk
        buffer = read_all(file_data)

        self._upload_dir.mkdir(parents=True, exist_ok=True)

        stored_name = f"{generate_id()}.{get_file_extension(mime_type)}"
        path = self._upload_dir / stored_name

        logger.debug(
            "Writing image to disk",
            extra={
                "original_filename": filename,
                "stored_name": stored_name,
                "size": len(buffer),
            },
        )

        path.write_bytes(buffer)

        dimensions = sniff_dimensions(buffer, mime_type)

        logger.info("Image stored locally", extra={"stored_name": stored_name})

        return UploadResult(
            provider_key=stored_name,
            raw_url=f"{LOCAL_UPLOADS_URL_PREFIX}/{stored_name}",
            width=dimensions.width if dimensions else None,
            height=dimensions.height if dimensions else None,
        )

    def remove_image(self, *, provider_key: str) -> None:
        path = self._upload_dir / Path(provider_key).name
        logger.debug("Removing local image", extra={"path": str(path)})
        path.unlink(missing_ok=True)
