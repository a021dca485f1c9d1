"""Character image analysis using Gemini vision."""

import logging
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from storyboarder.exceptions import CharacterAnalysisError
from storyboarder.models.schemas import Character
from storyboarder.gemini_client import GeminiService

logger = logging.getLogger(__name__)


DESCRIBE_PROMPT = (
    "Provide a detailed, descriptive paragraph about this character for use in "
    "a text-to-image AI prompt. Focus on visual attributes like clothing, art "
    "style, colors, hair, species, and unique features. Describe it as if you "
    "were instructing an artist."
)


def detect_mime_type(image_bytes: bytes) -> Optional[str]:
    """Sniff the MIME type of an uploaded image, or None if it isn't one."""
    try:
        with Image.open(BytesIO(image_bytes)) as img:
            return Image.MIME.get(img.format)
    except (UnidentifiedImageError, OSError):
        return None


class CharacterAnalyzer(GeminiService):
    """Turn a character reference image into a text description."""

    def describe_image(self, image_bytes: bytes, mime_type: Optional[str] = None) -> str:
        """
        Describe a character image for use in later prompts.

        Follows the Gemini guidance of placing the image before the text
        instruction.

        Args:
            image_bytes: Raw image payload
            mime_type: MIME type of the payload; sniffed with Pillow if omitted

        Returns:
            Free-form descriptive paragraph

        Raises:
            CharacterAnalysisError: If the request fails or returns no text
        """
        from google.genai import types

        client = self._get_client()
        mime_type = mime_type or detect_mime_type(image_bytes) or "image/png"

        try:
            response = client.models.generate_content(
                model=self.config.text.model,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    DESCRIBE_PROMPT,
                ],
            )
            description = (response.text or "").strip()
            if not description:
                raise ValueError("empty description returned")

            logger.info(f"Character description: {description[:100]}...")
            return description

        except Exception as e:
            logger.error(f"Error describing character image: {e}")
            raise CharacterAnalysisError() from e

    def describe_character(self, character: Character) -> Character:
        """Return a copy of ``character`` with its description filled in.

        Characters without an image are returned unchanged.
        """
        if not character.has_image:
            return character

        description = self.describe_image(character.image_bytes, character.mime_type)
        return character.model_copy(update={"description": description})
