from unittest.mock import MagicMock

import pytest

from core.infrastructure.memory.in_memory_metadata import InMemoryMetadata
from core.models.errors import MetadataOperationFailedError
from core.models.image import NewImage, StorageProviderName
from handlers.delete_image.service import DeleteService


@pytest.fixture
def metadata() -> InMemoryMetadata:
    return InMemoryMetadata()


@pytest.fixture
def record(metadata: InMemoryMetadata):
    return metadata.create_image(
        image=NewImage(
            provider=StorageProviderName.LOCAL,
            provider_key="Xy7Kp2mN9q.png",
            raw_url="/uploads/Xy7Kp2mN9q.png",
            mime_type="image/png",
            file_size=10,
        )
    )


class TestDeleteService:
    def test_delete_with_token(self, metadata, record) -> None:
        service = DeleteService(metadata=metadata)

        assert service.delete_image(record.image_id, record.delete_token) is True
        assert metadata.get_image(image_id=record.image_id) is None

    def test_wrong_token(self, metadata, record) -> None:
        service = DeleteService(metadata=metadata)

        assert service.delete_image(record.image_id, "wrong-token") is False
        assert metadata.get_image(image_id=record.image_id) == record

    def test_unknown_id(self, metadata) -> None:
        assert DeleteService(metadata=metadata).delete_image("missing", "token") is False

    def test_repository_failure_propagates(self) -> None:
        repository = MagicMock()
        repository.delete_image.side_effect = MetadataOperationFailedError(message="Unable to delete image metadata")

        with pytest.raises(MetadataOperationFailedError):
            DeleteService(metadata=repository).delete_image("abc", "token")
