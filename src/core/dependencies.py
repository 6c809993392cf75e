"""Construction of the process-wide storage provider and metadata repository.

Each collaborator is built once from ``ServiceSettings`` and cached for the
lifetime of the process (one Lambda execution environment).
"""

from functools import lru_cache

from aws_lambda_powertools import Logger

from core.config import MetadataBackend, ServiceSettings
from core.infrastructure.adapters.cloudinary_adapter import CloudinaryAdapter
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter
from core.infrastructure.aws.dynamodb_metadata import DynamoDBMetadata
from core.infrastructure.cloudinary.cloudinary_image_storage import CloudinaryImageStorage
from core.infrastructure.local.local_image_storage import LocalImageStorage
from core.infrastructure.memory.in_memory_metadata import InMemoryMetadata
from core.models.errors import ConfigurationError
from core.models.image import StorageProviderName
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_provider import StorageProvider

logger = Logger(utc=True)


def build_storage_provider(settings: ServiceSettings) -> StorageProvider:
    """Create the storage provider selected by ``settings``."""
    if settings.storage_provider is StorageProviderName.REMOTE:
        if settings.cloudinary is None:
            raise ConfigurationError(message="Cloudinary credentials are not configured")

        return CloudinaryImageStorage(
            CloudinaryAdapter(
                cloud_name=settings.cloudinary.cloud_name,
                api_key=settings.cloudinary.api_key,
                api_secret=settings.cloudinary.api_secret,
            )
        )

    return LocalImageStorage(settings.upload_dir)


def build_metadata_repository(settings: ServiceSettings) -> ImageMetadataRepository:
    """Create the metadata repository selected by ``settings``."""
    if settings.metadata_backend is MetadataBackend.DYNAMODB:
        if not settings.metadata_table_name:
            raise ConfigurationError(message="Metadata table name is not configured")

        return DynamoDBMetadata(
            DynamoDBAdapter(
                table_name=settings.metadata_table_name,
                region_name=settings.aws_region,
                endpoint_url=settings.aws_endpoint_url,
            )
        )

    return InMemoryMetadata()


@lru_cache(maxsize=1)
def get_settings() -> ServiceSettings:
    return ServiceSettings.from_env()


@lru_cache(maxsize=1)
def get_storage_provider() -> StorageProvider:
    provider = build_storage_provider(get_settings())
    logger.info("Storage provider initialized", extra={"provider": provider.name.value})
    return provider


@lru_cache(maxsize=1)
def get_metadata_repository() -> ImageMetadataRepository:
    settings = get_settings()
    repository = build_metadata_repository(settings)
    logger.info(
        "Metadata repository initialized",
        extra={"backend": settings.metadata_backend.value},
    )
    return repository


def reset_dependencies() -> None:
    """Drop cached settings and collaborators (used by tests)."""
    get_settings.cache_clear()
    get_storage_provider.cache_clear()
    get_metadata_repository.cache_clear()
