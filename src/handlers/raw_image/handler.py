"""
Lambda handler redirecting ``GET /raw/{image_id}`` to the stored bytes.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.dependencies import get_settings
from core.models.errors import MetadataOperationFailedError
from core.utils.constants import RAW_CACHE_CONTROL
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.urls import absolute_url, resolve_base_url
from core.utils.validators import sanitize_validation_errors, validate_request
from handlers.get_image.models import GetImageRequest

from .service import RawImageService

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace="ImageHosting")


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Redirect to the raw image URL with long-lived cache headers."""
    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            GetImageRequest,
            {"image_id": path_params.get("image_id")},
        )
    except ValidationError as exc:
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        location = RawImageService().resolve_raw_url(request.image_id)
    except MetadataOperationFailedError as exc:
        logger.exception("Raw image lookup failed", extra={"image_id": request.image_id})
        return ResponseBuilder.internal_error(exc.message)

    if location is None:
        return ResponseBuilder.not_found("Image not found")

    base_url = resolve_base_url(event, get_settings().public_base_url)

    return ResponseBuilder.redirect(
        absolute_url(base_url, location),
        headers={"Cache-Control": RAW_CACHE_CONTROL},
    )
