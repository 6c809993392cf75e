import json
from http import HTTPStatus

from core.utils.response import ResponseBuilder


def test_ok_includes_cors_and_extra_headers() -> None:
    response = ResponseBuilder.ok({"a": 1}, headers={"Cache-Control": "public"})

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"a": 1}
    assert response["headers"]["Content-Type"] == "application/json"
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    assert response["headers"]["Cache-Control"] == "public"


def test_created_is_not_cacheable() -> None:
    response = ResponseBuilder.created({"image_id": "abc"}, request_id="req-1")

    assert response["statusCode"] == 201
    assert response["headers"]["Cache-Control"] == "no-store"
    assert json.loads(response["body"])["request_id"] == "req-1"


def test_redirect() -> None:
    response = ResponseBuilder.redirect(
        "https://cdn.example.com/a.png",
        headers={"Cache-Control": "public, immutable, max-age=31536000"},
    )

    assert response["statusCode"] == 302
    assert response["headers"]["Location"] == "https://cdn.example.com/a.png"
    assert response["headers"]["Cache-Control"] == "public, immutable, max-age=31536000"
    assert response["body"] == ""


def test_error_payload_shape() -> None:
    response = ResponseBuilder.error(
        status=HTTPStatus.BAD_GATEWAY,
        message="Upstream failed",
        details={"provider": "remote"},
    )
    body = json.loads(response["body"])

    assert response["statusCode"] == 502
    assert body["error"] == "BAD_GATEWAY"
    assert body["message"] == "Upstream failed"
    assert body["details"] == {"provider": "remote"}
    assert "timestamp" in body


def test_validation_error_code() -> None:
    response = ResponseBuilder.validation_error(message="Unsupported image type")

    assert response["statusCode"] == 422
    assert json.loads(response["body"])["error"] == "VALIDATION_FAILED"


def test_status_helpers() -> None:
    assert ResponseBuilder.bad_request("x")["statusCode"] == 400
    assert ResponseBuilder.not_found()["statusCode"] == 404
    assert ResponseBuilder.payload_too_large("x")["statusCode"] == 413
    assert ResponseBuilder.bad_gateway()["statusCode"] == 502
    assert ResponseBuilder.internal_error()["statusCode"] == 500


def test_cors_origin_override() -> None:
    response = ResponseBuilder.ok({}, cors_origin="https://app.example.com")

    assert response["headers"]["Access-Control-Allow-Origin"] == "https://app.example.com"
