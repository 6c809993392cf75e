"""Pydantic models for delete image request/response."""

from pydantic import BaseModel, Field, StrictStr, field_validator


class DeleteImageRequest(BaseModel):
    """Validation model for delete image request.

    The delete token is compared as supplied; only the image id is
    whitespace-normalized.
    """

    image_id: StrictStr = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Image ID to delete",
    )
    delete_token: StrictStr = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Token returned when the image was uploaded",
    )

    @field_validator("image_id", mode="before")
    @classmethod
    def strip_image_id(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class DeleteImageResponse(BaseModel):
    """Response model for successful image deletion."""

    image_id: str = Field(..., description="Deleted image ID")
    message: str = Field(..., description="Success message")
    deleted_at: str = Field(..., description="Deletion timestamp")
