"""Tests for the Imagen storyboard generator."""

from types import SimpleNamespace

import pytest

from storyboarder.exceptions import StoryboardGenerationError
from storyboarder.services.image_generator import ImageGenerator


def images_response(image_bytes):
    return SimpleNamespace(
        generated_images=[SimpleNamespace(image=SimpleNamespace(image_bytes=image_bytes))]
    )


class TestImageGenerator:
    @pytest.fixture
    def generator(self, test_config, fake_client):
        return ImageGenerator(config=test_config, client=fake_client)

    def test_generates_one_wide_png(self, generator, fake_client, png_bytes):
        fake_client.models.generate_images.return_value = images_response(png_bytes)

        storyboard = generator.generate_storyboard_image(1, "A cat peeks out of a box")

        assert storyboard.scene_number == 1
        assert storyboard.image_bytes == png_bytes
        assert storyboard.mime_type == "image/png"

        kwargs = fake_client.models.generate_images.call_args.kwargs
        assert kwargs["model"] == "imagen-4.0-generate-001"
        assert kwargs["prompt"].startswith("A cat peeks out of a box. Cinematic")
        assert kwargs["config"].number_of_images == 1
        assert kwargs["config"].aspect_ratio == "16:9"
        assert kwargs["config"].output_mime_type == "image/png"

    def test_saves_to_output_path(self, generator, fake_client, png_bytes, tmp_path):
        fake_client.models.generate_images.return_value = images_response(png_bytes)
        output_path = tmp_path / "storyboards" / "scene_1.png"

        storyboard = generator.generate_storyboard_image(1, "prompt", output_path=output_path)

        assert output_path.read_bytes() == png_bytes
        assert storyboard.path == output_path

    def test_no_images_returned_fails(self, generator, fake_client):
        fake_client.models.generate_images.return_value = SimpleNamespace(generated_images=[])

        with pytest.raises(StoryboardGenerationError) as exc_info:
            generator.generate_storyboard_image(1, "prompt")

        assert str(exc_info.value) == "Failed to generate a storyboard image."

    def test_api_error_fails(self, generator, fake_client):
        fake_client.models.generate_images.side_effect = RuntimeError("boom")

        with pytest.raises(StoryboardGenerationError) as exc_info:
            generator.generate_storyboard_image(1, "prompt")

        assert isinstance(exc_info.value.__cause__, RuntimeError)
