"""Tests for character image analysis."""

from types import SimpleNamespace

import pytest

from storyboarder.config import Config
from storyboarder.exceptions import CharacterAnalysisError, ConfigurationError
from storyboarder.models.schemas import Character
from storyboarder.services.character_analyzer import (
    DESCRIBE_PROMPT,
    CharacterAnalyzer,
    detect_mime_type,
)


class TestCharacterAnalyzer:
    @pytest.fixture
    def analyzer(self, test_config, fake_client):
        return CharacterAnalyzer(config=test_config, client=fake_client)

    def test_describe_image_sends_image_then_prompt(self, analyzer, fake_client, png_bytes):
        fake_client.models.generate_content.return_value = SimpleNamespace(
            text="  An orange cat wearing a tiny hat.  "
        )

        description = analyzer.describe_image(png_bytes, "image/png")

        assert description == "An orange cat wearing a tiny hat."
        kwargs = fake_client.models.generate_content.call_args.kwargs
        image_part, prompt = kwargs["contents"]
        assert image_part.inline_data.mime_type == "image/png"
        assert image_part.inline_data.data == png_bytes
        assert prompt == DESCRIBE_PROMPT

    def test_mime_type_sniffed_when_missing(self, analyzer, fake_client, png_bytes):
        fake_client.models.generate_content.return_value = SimpleNamespace(text="A cat")

        analyzer.describe_image(png_bytes)

        image_part = fake_client.models.generate_content.call_args.kwargs["contents"][0]
        assert image_part.inline_data.mime_type == "image/png"

    def test_failure_is_wrapped(self, analyzer, fake_client, png_bytes):
        fake_client.models.generate_content.side_effect = RuntimeError("quota")

        with pytest.raises(CharacterAnalysisError) as exc_info:
            analyzer.describe_image(png_bytes, "image/png")

        assert str(exc_info.value) == "Failed to analyze character image."

    def test_empty_text_is_a_failure(self, analyzer, fake_client, png_bytes):
        fake_client.models.generate_content.return_value = SimpleNamespace(text=None)

        with pytest.raises(CharacterAnalysisError):
            analyzer.describe_image(png_bytes, "image/png")

    def test_describe_character_returns_copy(self, analyzer, fake_client, png_bytes):
        fake_client.models.generate_content.return_value = SimpleNamespace(text="A cat")
        character = Character(id=0, name="Whiskers", image_bytes=png_bytes, mime_type="image/png")

        described = analyzer.describe_character(character)

        assert described.description == "A cat"
        assert character.description is None

    def test_character_without_image_is_skipped(self, analyzer, fake_client):
        character = Character(id=1, name="Character 2")

        assert analyzer.describe_character(character) is character
        fake_client.models.generate_content.assert_not_called()

    def test_missing_api_key_fails_fast(self, png_bytes):
        analyzer = CharacterAnalyzer(config=Config(google_api_key=""))

        with pytest.raises(ConfigurationError):
            analyzer.describe_image(png_bytes, "image/png")


class TestDetectMimeType:
    def test_png(self, png_bytes):
        assert detect_mime_type(png_bytes) == "image/png"

    def test_not_an_image(self):
        assert detect_mime_type(b"definitely not an image") is None
