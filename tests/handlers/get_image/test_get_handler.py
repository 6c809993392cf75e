import json
from unittest.mock import patch

import pytest

from core.models.errors import MetadataOperationFailedError
from handlers.get_image.handler import handler
from handlers.upload_image.service import UploadService


@pytest.fixture
def uploaded(make_png):
    return UploadService().upload_image(
        file_data=make_png(320, 200),
        filename="cat.png",
        mime_type="image/png",
    )


class TestGetHandler:
    def test_get_existing_image(self, api_event, lambda_context, uploaded) -> None:
        event = api_event("GET", f"/images/{uploaded.image_id}", path_parameters={"image_id": uploaded.image_id})

        response = handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert response["headers"]["Cache-Control"] == "public, max-age=600, s-maxage=600"

        body = json.loads(response["body"])
        assert body["image_id"] == uploaded.image_id
        assert body["provider"] == "local"
        assert (body["width"], body["height"]) == (320, 200)
        assert body["direct_url"] == f"https://img.example.com{uploaded.raw_url}"
        assert body["raw_url"] == f"https://img.example.com/raw/{uploaded.image_id}"
        assert "delete_token" not in body

    def test_unknown_image(self, api_event, lambda_context) -> None:
        event = api_event("GET", "/images/missing", path_parameters={"image_id": "missing"})

        response = handler(event, lambda_context)

        assert response["statusCode"] == 404

    @pytest.mark.parametrize("path_parameters", [None, {"image_id": "   "}, {"image_id": "x" * 65}])
    def test_invalid_image_id(self, api_event, lambda_context, path_parameters) -> None:
        response = handler(api_event("GET", "/images/", path_parameters=path_parameters), lambda_context)

        assert response["statusCode"] == 400

    def test_metadata_failure(self, api_event, lambda_context) -> None:
        event = api_event("GET", "/images/abc", path_parameters={"image_id": "abc"})

        with patch(
            "handlers.get_image.handler.GetService.get_image",
            side_effect=MetadataOperationFailedError(message="Unable to retrieve image metadata"),
        ):
            response = handler(event, lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["message"] == "Unable to retrieve image metadata"
