"""
Centralized API response builder for AWS Lambda / API Gateway.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
    }

    DEFAULT_CORS_HEADERS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }

    @staticmethod
    def _build_headers(
        cors_origin: str | None = None,
        extra: dict[str, str] | None = None,
    ) -> dict[str, str]:
        headers: dict[str, str] = dict(ResponseBuilder.DEFAULT_HEADERS)

        # Always include CORS headers
        headers.update(ResponseBuilder.DEFAULT_CORS_HEADERS)

        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin

        if extra:
            headers.update(extra)

        return headers

    @staticmethod
    def _response(
        *,
        status: HTTPStatus,
        body: JsonDict | None = None,
        headers: dict[str, str] | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {}

        if body:
            payload.update(body)

        if request_id:
            payload["request_id"] = request_id

        response: JsonDict = {
            "statusCode": status.value,
            "headers": ResponseBuilder._build_headers(cors_origin, headers),
            "body": json.dumps(payload),
        }

        return response

    @staticmethod
    def ok(
        body: JsonDict,
        *,
        headers: dict[str, str] | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder._response(
            status=HTTPStatus.OK,
            body=body,
            headers=headers,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def created(
        body: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder._response(
            status=HTTPStatus.CREATED,
            body=body,
            headers={"Cache-Control": "no-store"},
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def redirect(
        location: str,
        *,
        headers: dict[str, str] | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """302 redirect to ``location``."""
        extra: dict[str, str] = {"Location": location}
        if headers:
            extra.update(headers)

        return {
            "statusCode": HTTPStatus.FOUND.value,
            "headers": ResponseBuilder._build_headers(cors_origin, extra),
            "body": "",
        }

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }

        if details:
            payload["details"] = details

        return ResponseBuilder._response(
            status=status,
            body=payload,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def bad_request(
        message: str,
        *,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            error=error,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def validation_error(
        *,
        message: str,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """422 Unprocessable Entity validation error."""
        return ResponseBuilder.error(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            error=ERROR_CODE_VALIDATION_FAILED,
            message=message,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def not_found(
        message: str = "Resource not found",
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.NOT_FOUND,
            message=message,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def payload_too_large(
        message: str,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            message=message,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def bad_gateway(
        message: str = "Upstream storage error",
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_GATEWAY,
            message=message,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def internal_error(
        message: str = "Internal server error",
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message,
            request_id=request_id,
            cors_origin=cors_origin,
        )
