"""Service configuration read once from the environment."""

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from core.models.errors import ConfigurationError
from core.models.image import StorageProviderName
from core.utils.constants import (
    DEFAULT_AWS_REGION,
    DEFAULT_UPLOAD_DIR,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_CLOUDINARY_API_KEY,
    ENV_CLOUDINARY_API_SECRET,
    ENV_CLOUDINARY_CLOUD_NAME,
    ENV_IMAGE_METADATA_TABLE_NAME,
    ENV_METADATA_BACKEND,
    ENV_PUBLIC_BASE_URL,
    ENV_STORAGE_PROVIDER,
    ENV_UPLOAD_DIR,
)


class MetadataBackend(str, Enum):
    """Implementation backing the metadata repository."""

    MEMORY = "memory"
    DYNAMODB = "dynamodb"


STORAGE_PROVIDER_ALIASES: dict[str, StorageProviderName] = {
    "local": StorageProviderName.LOCAL,
    "remote": StorageProviderName.REMOTE,
    "cloudinary": StorageProviderName.REMOTE,
}


class CloudinaryCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    cloud_name: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)
    api_secret: str = Field(..., min_length=1)


class ServiceSettings(BaseModel):
    """Process-wide settings.

    Built once at startup and passed explicitly to the factories in
    ``core.dependencies``; nothing reads the environment per request.
    """

    model_config = ConfigDict(frozen=True)

    storage_provider: StorageProviderName = StorageProviderName.LOCAL
    upload_dir: Path = Field(default_factory=lambda: Path.cwd() / DEFAULT_UPLOAD_DIR)
    cloudinary: CloudinaryCredentials | None = None

    metadata_backend: MetadataBackend = MetadataBackend.MEMORY
    metadata_table_name: str | None = None
    aws_region: str = DEFAULT_AWS_REGION
    aws_endpoint_url: str | None = None

    public_base_url: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServiceSettings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If a value is unknown or a selected backend
                is missing its required settings
        """
        env = os.environ if environ is None else environ

        raw_provider = env.get(ENV_STORAGE_PROVIDER, "local").strip().lower()
        provider = STORAGE_PROVIDER_ALIASES.get(raw_provider)
        if provider is None:
            raise ConfigurationError(
                message=f"Unknown storage provider '{raw_provider}'",
                details={"allowed": sorted(STORAGE_PROVIDER_ALIASES)},
            )

        cloudinary: CloudinaryCredentials | None = None
        if provider is StorageProviderName.REMOTE:
            credentials = {
                "cloud_name": env.get(ENV_CLOUDINARY_CLOUD_NAME, ""),
                "api_key": env.get(ENV_CLOUDINARY_API_KEY, ""),
                "api_secret": env.get(ENV_CLOUDINARY_API_SECRET, ""),
            }
            missing = [name for name, value in credentials.items() if not value]
            if missing:
                raise ConfigurationError(
                    message="Cloudinary credentials are not configured",
                    details={"missing": missing},
                )
            cloudinary = CloudinaryCredentials(**credentials)

        raw_backend = env.get(ENV_METADATA_BACKEND, "memory").strip().lower()
        try:
            backend = MetadataBackend(raw_backend)
        except ValueError as exc:
            raise ConfigurationError(
                message=f"Unknown metadata backend '{raw_backend}'",
                details={"allowed": [b.value for b in MetadataBackend]},
            ) from exc

        table_name = env.get(ENV_IMAGE_METADATA_TABLE_NAME) or None
        if backend is MetadataBackend.DYNAMODB and not table_name:
            raise ConfigurationError(
                message=f"{ENV_IMAGE_METADATA_TABLE_NAME} environment variable is not set",
            )

        upload_dir = env.get(ENV_UPLOAD_DIR)

        return cls(
            storage_provider=provider,
            upload_dir=Path(upload_dir) if upload_dir else Path.cwd() / DEFAULT_UPLOAD_DIR,
            cloudinary=cloudinary,
            metadata_backend=backend,
            metadata_table_name=table_name,
            aws_region=env.get(ENV_AWS_REGION) or DEFAULT_AWS_REGION,
            aws_endpoint_url=env.get(ENV_AWS_ENDPOINT_URL) or None,
            public_base_url=(env.get(ENV_PUBLIC_BASE_URL) or "").rstrip("/") or None,
        )
