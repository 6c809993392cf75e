"""
Lambda handler responsible for image metadata retrieval.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.dependencies import get_settings
from core.models.errors import MetadataOperationFailedError
from core.utils.constants import VIEW_CACHE_CONTROL
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.urls import absolute_url, raw_url, resolve_base_url, short_url
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import GetImageRequest, ImageViewResponse
from .service import GetService

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace="ImageHosting")


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image view requests (``GET /images/{image_id}``).

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    logger.info(
        "Received image view request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            GetImageRequest,
            {"image_id": path_params.get("image_id")},
        )
    except ValidationError as exc:
        logger.warning(
            "Request validation failed",
            extra={"errors": exc.errors(include_input=False, include_url=False)},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        image = GetService().get_image(request.image_id)
    except MetadataOperationFailedError as exc:
        logger.exception("Get Image failed", extra={"image_id": request.image_id})
        return ResponseBuilder.internal_error(exc.message)

    if image is None:
        return ResponseBuilder.not_found(f"Image not found: {request.image_id}")

    base_url = resolve_base_url(event, get_settings().public_base_url)

    response = ImageViewResponse(
        image_id=image.image_id,
        raw_url=raw_url(base_url, image.image_id),
        short_url=short_url(base_url, image.image_id),
        direct_url=absolute_url(base_url, image.raw_url),
        provider=image.provider.value,
        width=image.width,
        height=image.height,
        file_size=image.file_size,
        mime_type=image.mime_type,
        created_at=image.created_at.isoformat(),
    )

    return ResponseBuilder.ok(
        response.model_dump(),
        headers={"Cache-Control": VIEW_CACHE_CONTROL},
    )
