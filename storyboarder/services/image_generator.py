"""Storyboard image generation using Google Imagen."""

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image

from storyboarder.exceptions import StoryboardGenerationError
from storyboarder.models.schemas import StoryboardImage
from storyboarder.gemini_client import GeminiService

logger = logging.getLogger(__name__)

STYLE_SUFFIX = "Cinematic, high-quality, 4K, detailed, vibrant colors, trending on social media."


class ImageGenerator(GeminiService):
    """Generate one storyboard still per scene prompt."""

    def build_prompt(self, scene_prompt: str) -> str:
        return f"{scene_prompt}. {STYLE_SUFFIX}"

    def generate_image_bytes(self, scene_prompt: str) -> bytes:
        """
        Generate a single still for ``scene_prompt``.

        Returns:
            PNG bytes at the configured aspect ratio

        Raises:
            StoryboardGenerationError: If the request fails or no image comes back
        """
        from google.genai import types

        client = self._get_client()
        full_prompt = self.build_prompt(scene_prompt)

        logger.info("=" * 60)
        logger.info(f"IMAGEN PROMPT (model={self.config.image.model}):")
        logger.info("-" * 60)
        for line in full_prompt.split('\n'):
            logger.info(line)
        logger.info("=" * 60)

        try:
            response = client.models.generate_images(
                model=self.config.image.model,
                prompt=full_prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type=self.config.image.mime_type,
                    aspect_ratio=self.config.image.aspect_ratio,
                ),
            )

            if not response.generated_images:
                raise ValueError("no image returned")

            image_bytes = response.generated_images[0].image.image_bytes
            if not image_bytes:
                raise ValueError("generated image has no data")

            with Image.open(BytesIO(image_bytes)) as image:
                logger.info(f"Generated image: {image.size}")

            return image_bytes

        except Exception as e:
            logger.error(f'Error generating storyboard for prompt "{scene_prompt}": {e}')
            raise StoryboardGenerationError() from e

    def generate_storyboard_image(
        self,
        scene_number: int,
        scene_prompt: str,
        output_path: Optional[Path] = None,
    ) -> StoryboardImage:
        """Generate the storyboard still for a scene, optionally saving it."""
        image_bytes = self.generate_image_bytes(scene_prompt)

        if output_path:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(image_bytes)

        return StoryboardImage(
            scene_number=scene_number,
            image_bytes=image_bytes,
            mime_type=self.config.image.mime_type,
            path=output_path,
        )
