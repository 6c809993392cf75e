"""Request validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    - internal exception details
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        # Remove noisy prefixes
        msg = raw_msg.replace("Value error,", "").strip()

        # Friendly rewrites for common cases
        msg_lower = msg.lower()
        if "base64" in msg_lower:
            msg = "File must be a valid Base64-encoded string"
        elif "field required" in msg_lower:
            msg = "This field is required"
        elif "valid string" in msg_lower:
            msg = "Invalid value type"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Input data to validate

    Returns:
        The validated model instance

    Raises:
        pydantic.ValidationError: If the data does not match the model
    """
    return model.model_validate(data)
