"""Tests for the HTTP API."""

import json

import pytest
from fastapi.testclient import TestClient

from letter_translator.api.dependencies import get_pipeline
from letter_translator.config import settings
from letter_translator.core.errors import ConfigurationError
from letter_translator.core.translation import TranslationPipeline
from letter_translator.main import app

from conftest import FakeModelClient, SAMPLE_RESPONSE, make_image_bytes


def upload(name="page.png", data=None, content_type="image/png"):
    return ("files", (name, data if data is not None else make_image_bytes(), content_type))


@pytest.fixture
def model_client():
    return FakeModelClient(SAMPLE_RESPONSE)


@pytest.fixture
def client(model_client):
    pipeline = TranslationPipeline(client=model_client, max_pages=settings.max_pages)
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for service endpoints."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_root(self, client):
        assert "version" in client.get("/").json()

    def test_languages(self, client):
        languages = {item["value"]: item for item in client.get("/api/v1/languages").json()}
        assert languages["Auto-Detect"]["has_hints"] is False
        assert languages["Amharic"]["has_hints"] is True
        assert languages["Amharic"]["script"] == "Ge'ez (Fidel)"
        assert len(languages) == 8


class TestTranslateRoute:
    """Tests for POST /api/v1/translate."""

    def test_translate(self, client, model_client):
        response = client.post(
            "/api/v1/translate",
            files=[upload(), upload("page2.png")],
            data={"source_language": "Amharic", "rotations": "0,90"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {
                "nativeScript": "X",
                "translation": "Y",
                "culturalContext": "Z",
                "headerInfo": {},
            },
        }
        prompt = model_client.calls[0]["messages"][0]["content"][0]["text"]
        assert "Amharic" in prompt

    def test_missing_content_type_defaults_to_jpeg(self, client, model_client):
        jpeg = make_image_bytes(fmt="JPEG")
        response = client.post("/api/v1/translate", files=[upload("page", jpeg, "")])

        assert response.status_code == 200
        url = model_client.calls[0]["messages"][0]["content"][1]["image_url"]["url"]
        assert url.startswith("data:image/jpeg;base64,")

    def test_too_many_pages(self, client, model_client):
        files = [upload(f"p{i}.png") for i in range(settings.max_pages + 1)]
        response = client.post("/api/v1/translate", files=files)

        assert response.status_code == 400
        assert response.json()["error_type"] == "input_error"
        assert model_client.calls == []

    def test_unsupported_type(self, client):
        response = client.post("/api/v1/translate", files=[upload("a.gif", b"GIF89a", "image/gif")])
        assert response.status_code == 400

    def test_rotation_count_mismatch(self, client):
        response = client.post("/api/v1/translate", files=[upload()], data={"rotations": "0,90"})
        assert response.status_code == 400

    def test_unknown_language(self, client):
        response = client.post("/api/v1/translate", files=[upload()], data={"source_language": "Latin"})
        assert response.status_code == 400

    def test_unreadable_response_keeps_raw_text(self, client, model_client):
        model_client.content = "Sorry, I can't help with that."
        response = client.post("/api/v1/translate", files=[upload()])

        assert response.status_code == 502
        body = response.json()
        assert body["success"] is False
        assert body["error_type"] == "extraction_error"
        assert body["raw"] == "Sorry, I can't help with that."

    def test_missing_api_key(self, model_client):
        def no_key():
            raise ConfigurationError("Model API key is missing.")

        app.dependency_overrides[get_pipeline] = no_key
        try:
            with TestClient(app) as test_client:
                response = test_client.post("/api/v1/translate", files=[upload()])
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error_type"] == "configuration_error"
        assert model_client.calls == []

    def test_prompt_preview(self, client):
        response = client.get("/api/v1/prompt/preview", params={"page_count": 3, "source_language": "Amharic"})
        body = response.json()
        assert response.status_code == 200
        assert body["page_count"] == 3
        assert "page 3" in body["prompt"]


class TestExportRoute:
    """Tests for POST /api/v1/export."""

    def result_json(self, **header):
        return json.dumps({"nativeScript": "X", "translation": "Y", "headerInfo": header})

    def test_export(self, client):
        response = client.post(
            "/api/v1/export",
            files=[upload(), upload("p2.jpg", make_image_bytes(fmt="JPEG"), "image/jpeg")],
            data={
                "result": self.result_json(childID="AB#1/2"),
                "translation": "Edited",
                "rotations": "90,0",
                "export_date": "2024-09-11",
            },
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="Letter_AB_1_2.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_export_document_id_override(self, client):
        response = client.post(
            "/api/v1/export",
            files=[upload()],
            data={"result": self.result_json(), "translation": "t", "document_id": "X-1"},
        )
        assert 'filename="Letter_X-1.pdf"' in response.headers["content-disposition"]

    def test_export_bad_image(self, client):
        response = client.post(
            "/api/v1/export",
            files=[upload("bad.png", b"broken")],
            data={"result": self.result_json(), "translation": "t"},
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "export_error"

    def test_export_bad_result(self, client):
        response = client.post(
            "/api/v1/export",
            files=[upload()],
            data={"result": "not json", "translation": "t"},
        )
        assert response.status_code == 400
