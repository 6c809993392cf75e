from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
)


class GetImageRequest(BaseModel):
    """Validation model for get image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: StrictStr = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Image ID to retrieve",
    )

    @field_validator("image_id")
    @classmethod
    def validate_image_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("image_id must not be blank")
        return value


class ImageViewResponse(BaseModel):
    """Public image metadata plus share links."""

    image_id: str
    raw_url: str
    short_url: str
    direct_url: str
    provider: str
    width: int | None = None
    height: int | None = None
    file_size: int
    mime_type: str
    created_at: str
