import pytest

from core.config import MetadataBackend, ServiceSettings
from core.dependencies import (
    build_metadata_repository,
    build_storage_provider,
    get_metadata_repository,
    get_settings,
    get_storage_provider,
    reset_dependencies,
)
from core.infrastructure.aws.dynamodb_metadata import DynamoDBMetadata
from core.infrastructure.cloudinary.cloudinary_image_storage import CloudinaryImageStorage
from core.infrastructure.local.local_image_storage import LocalImageStorage
from core.infrastructure.memory.in_memory_metadata import InMemoryMetadata
from core.models.errors import ConfigurationError
from core.models.image import StorageProviderName


@pytest.fixture(autouse=True)
def _clean_dependencies(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_PROVIDER", "local")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path))
    monkeypatch.setenv("METADATA_BACKEND", "memory")
    reset_dependencies()
    yield
    reset_dependencies()


def test_build_local_storage(tmp_path) -> None:
    provider = build_storage_provider(ServiceSettings(upload_dir=tmp_path))

    assert isinstance(provider, LocalImageStorage)
    assert provider.upload_dir == tmp_path


def test_build_cloudinary_storage() -> None:
    settings = ServiceSettings.from_env(
        {
            "STORAGE_PROVIDER": "cloudinary",
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "key",
            "CLOUDINARY_API_SECRET": "secret",
        }
    )

    provider = build_storage_provider(settings)

    assert isinstance(provider, CloudinaryImageStorage)
    assert provider.name is StorageProviderName.REMOTE


def test_remote_storage_without_credentials() -> None:
    with pytest.raises(ConfigurationError):
        build_storage_provider(ServiceSettings(storage_provider=StorageProviderName.REMOTE))


def test_build_memory_metadata() -> None:
    assert isinstance(build_metadata_repository(ServiceSettings()), InMemoryMetadata)


def test_build_dynamodb_metadata(aws_mock) -> None:
    settings = ServiceSettings(
        metadata_backend=MetadataBackend.DYNAMODB,
        metadata_table_name="images",
    )

    assert isinstance(build_metadata_repository(settings), DynamoDBMetadata)


def test_dynamodb_metadata_without_table_name() -> None:
    with pytest.raises(ConfigurationError):
        build_metadata_repository(ServiceSettings(metadata_backend=MetadataBackend.DYNAMODB))


def test_collaborators_are_cached_per_process(tmp_path) -> None:
    assert get_settings().upload_dir == tmp_path
    assert get_storage_provider() is get_storage_provider()
    assert get_metadata_repository() is get_metadata_repository()


def test_reset_rebuilds_collaborators() -> None:
    metadata = get_metadata_repository()

    reset_dependencies()

    assert get_metadata_repository() is not metadata
