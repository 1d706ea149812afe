"""
Tests for best-effort image generation.
"""

import base64
from types import SimpleNamespace

import pytest

from framemapper.errors import ImageGenerationFailure
from framemapper.models import ComparisonDraft, FrameworkPresentation
from framemapper.pipeline.images import (
    RESPONSE_MODALITIES,
    ImageGenerator,
    create_image_generator,
    decode_data_uri,
    to_data_uri,
)

from conftest import PNG_BYTES, FakeImageModels, image_response


def make_generator(models):
    return ImageGenerator(client=SimpleNamespace(models=models), model_name="test-image-model")


def spreadsheet(prompt="Excel window"):
    return FrameworkPresentation(kind="spreadsheet", content="1. Do it.", image_prompt=prompt)


def code():
    return FrameworkPresentation(kind="code", content="x = 1")


def test_data_uri_round_trip():
    """Test data URI encoding and decoding."""
    uri = to_data_uri(PNG_BYTES, "image/png")
    assert uri.startswith("data:image/png;base64,")
    assert decode_data_uri(uri) == (PNG_BYTES, "image/png")


def test_to_data_uri_accepts_base64_text():
    """Test base64 text is used as-is with a default mime type."""
    encoded = base64.b64encode(PNG_BYTES).decode("ascii")
    assert to_data_uri(encoded, None) == f"data:image/png;base64,{encoded}"


def test_decode_data_uri_rejects_plain_urls():
    """Test plain URLs are not decoded."""
    with pytest.raises(ValueError):
        decode_data_uri("https://example.com/image.png")


def test_generate_requests_image_and_text(image_generator, fake_image_models):
    """Test the image request asks for text and image output."""
    uri = image_generator.generate("Excel window")

    assert decode_data_uri(uri)[0] == PNG_BYTES
    call = fake_image_models.calls[0]
    assert call["model"] == "test-image-model"
    assert call["contents"] == "Excel window"
    assert call["config"].response_modalities == RESPONSE_MODALITIES


def test_generate_uses_returned_mime_type():
    """Test the returned mime type is kept."""
    models = FakeImageModels(responses={"p": image_response(b"jpeg-bytes", "image/jpeg")})
    uri = make_generator(models).generate("p")
    assert uri.startswith("data:image/jpeg;base64,")


def test_generate_fails_without_candidates():
    """Test an empty response raises ImageGenerationFailure."""
    models = FakeImageModels(responses={"p": SimpleNamespace(candidates=[])})
    with pytest.raises(ImageGenerationFailure, match="No candidates"):
        make_generator(models).generate("p")


def test_generate_fails_without_image_part():
    """Test a text-only response raises ImageGenerationFailure."""
    text_only = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(
        parts=[SimpleNamespace(text="sorry", inline_data=None)]
    ))])
    models = FakeImageModels(responses={"p": text_only})
    with pytest.raises(ImageGenerationFailure, match="No image data"):
        make_generator(models).generate("p")


def test_generate_wraps_client_errors():
    """Test client errors are wrapped with the cause chained."""
    cause = RuntimeError("quota exceeded")
    with pytest.raises(ImageGenerationFailure) as excinfo:
        make_generator(FakeImageModels(error=cause)).generate("p")
    assert excinfo.value.__cause__ is cause


def test_image_for_side_skips_code(image_generator, fake_image_models):
    """Test code sides never request an image."""
    assert image_generator.image_for_side(code()) is None
    assert fake_image_models.calls == []


def test_image_for_side_skips_missing_prompt(image_generator, fake_image_models):
    """Test spreadsheet sides without a prompt skip the image."""
    assert image_generator.image_for_side(spreadsheet(prompt=None)) is None
    assert fake_image_models.calls == []


def test_image_for_side_swallows_failure_and_warns(capsys):
    """Test an image failure is logged as a warning."""
    generator = make_generator(FakeImageModels(error=RuntimeError("network down")))
    assert generator.image_for_side(spreadsheet(), "side1") is None
    assert "network down" in capsys.readouterr().out


def test_images_for_isolates_failures():
    """One side failing never affects the other."""
    models = FakeImageModels(responses={"broken": RuntimeError("boom")})
    draft = ComparisonDraft(
        side1=spreadsheet("broken"),
        side2=spreadsheet("works"),
        explanation="Both are spreadsheets.",
    )

    url1, url2 = make_generator(models).images_for(draft)

    assert url1 is None
    assert decode_data_uri(url2)[0] == PNG_BYTES
    assert sorted(call["contents"] for call in models.calls) == ["broken", "works"]


def test_create_image_generator_without_key(monkeypatch):
    """Test images are disabled without a Google API key."""
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setattr("framemapper.pipeline.images.load_dotenv", lambda: None)
    assert create_image_generator() is None


def test_create_image_generator_with_key(monkeypatch):
    """Test the image model comes from the environment."""
    monkeypatch.setenv("FRAMEMAPPER_IMAGE_MODEL", "custom-image-model")
    generator = create_image_generator(api_key="test-key")
    assert generator.model_name == "custom-image-model"
