import pytest
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from core.utils.validators import sanitize_validation_errors, validate_request


class SampleRequest(BaseModel):
    image_id: str = Field(..., min_length=1)
    count: int = 1


def test_validate_request_returns_model() -> None:
    request = validate_request(SampleRequest, {"image_id": "abc", "count": "3"})

    assert request == SampleRequest(image_id="abc", count=3)


def test_validate_request_raises() -> None:
    with pytest.raises(PydanticValidationError):
        validate_request(SampleRequest, {})


def test_sanitize_validation_errors() -> None:
    with pytest.raises(PydanticValidationError) as exc_info:
        validate_request(SampleRequest, {"image_id": 12})

    errors = sanitize_validation_errors(exc_info.value.errors())

    assert errors == [{"field": "image_id", "message": "Invalid value type"}]
    assert all(set(e) == {"field", "message"} for e in errors)


def test_sanitize_missing_field() -> None:
    errors = sanitize_validation_errors([{"loc": ("file",), "msg": "Field required"}])

    assert errors == [{"field": "file", "message": "This field is required"}]


def test_sanitize_value_error_prefix() -> None:
    errors = sanitize_validation_errors([{"loc": (), "msg": "Value error, Decoded file is empty"}])

    assert errors == [{"field": "body", "message": "Decoded file is empty"}]
