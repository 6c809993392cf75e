"""
Lambda handler responsible for image upload and metadata creation.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.dependencies import get_settings
from core.models.errors import (
    FileSizeError,
    MetadataOperationFailedError,
    StorageError,
    ValidationError,
)
from core.utils.constants import ERROR_CODE_EMPTY_FILE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.urls import absolute_url, raw_url, resolve_base_url, short_url
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ImageUploadRequest, ImageUploadResponse
from .service import UploadService

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace="ImageHosting")


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests.

    The handler validates the JSON payload, decodes the base64 image data,
    stores it through the active storage provider and returns share links
    together with the one-time delete token.

    Expected API Gateway event structure:
    {
        "body": "{\"file\": \"...\", \"filename\": \"cat.png\", \"mime_type\": \"image/png\"}",
        "headers": {"Host": "img.example.com"}
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response describing the created image
    """
    logger.info(
        "Received image upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError:
        logger.exception("Invalid JSON body received")
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    if not isinstance(body, dict):
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    try:
        request = validate_request(ImageUploadRequest, body)
    except PydanticValidationError as exc:
        logger.warning(
            "Request validation failed",
            extra={"errors": exc.errors(include_input=False, include_url=False)},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        file_data = UploadService.decode_file(request.file)
        service = UploadService()

        receipt = service.upload_image(
            file_data=file_data,
            filename=request.filename,
            mime_type=request.mime_type,
        )

    except FileSizeError as exc:
        logger.warning("Upload rejected by size check", extra={"error_code": exc.error_code})
        if exc.error_code == ERROR_CODE_EMPTY_FILE:
            return ResponseBuilder.validation_error(message=exc.message)
        return ResponseBuilder.payload_too_large(exc.message)

    except ValidationError as exc:
        logger.warning("Validation error during image upload", extra={"error_code": exc.error_code})
        return ResponseBuilder.validation_error(message=exc.message)

    except StorageError as exc:
        logger.exception("Storage error during image upload")
        return ResponseBuilder.bad_gateway(exc.message)

    except MetadataOperationFailedError as exc:
        logger.exception("Metadata error during image upload")
        return ResponseBuilder.internal_error(exc.message)

    metrics.add_metric(name="ImageUploaded", unit=MetricUnit.Count, value=1)

    base_url = resolve_base_url(event, get_settings().public_base_url)

    response = ImageUploadResponse(
        image_id=receipt.image_id,
        raw_url=raw_url(base_url, receipt.image_id),
        short_url=short_url(base_url, receipt.image_id),
        direct_url=absolute_url(base_url, receipt.raw_url),
        width=receipt.width,
        height=receipt.height,
        file_size=receipt.file_size,
        mime_type=receipt.mime_type,
        created_at=receipt.created_at.isoformat(),
        delete_token=receipt.delete_token,
        message="Image uploaded successfully",
    )

    return ResponseBuilder.created(response.model_dump())
