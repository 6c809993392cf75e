"""
Lambda handler responsible for deleting an image resource.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import MetadataOperationFailedError
from core.utils.constants import DELETE_TOKEN_HEADER
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.time import utc_now_iso
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest, DeleteImageResponse
from .service import DeleteService

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace="ImageHosting")


def _extract_delete_token(event: dict[str, Any]) -> str | None:
    # Never read from the query string
    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    return headers.get(DELETE_TOKEN_HEADER)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests.

    This function:
    - Extracts the image identifier from API Gateway path parameters
    - Reads the delete token from the X-Delete-Token header
    - Delegates deletion to the service layer

    An unknown id and a wrong token produce the same 404 response.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received image delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteImageRequest,
            {
                "image_id": path_params.get("image_id"),
                "delete_token": _extract_delete_token(event),
            },
        )
    except ValidationError as exc:
        logger.warning(
            "Request validation failed",
            extra={"errors": exc.errors(include_input=False, include_url=False)},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        deleted = DeleteService().delete_image(request.image_id, request.delete_token)
    except MetadataOperationFailedError as exc:
        logger.exception("Deletion failed", extra={"image_id": request.image_id})
        return ResponseBuilder.internal_error(exc.message)

    if not deleted:
        return ResponseBuilder.not_found("Image not found or delete token is invalid")

    response = DeleteImageResponse(
        image_id=request.image_id,
        message="Image deleted successfully",
        deleted_at=utc_now_iso(),
    )

    return ResponseBuilder.ok(response.model_dump())
