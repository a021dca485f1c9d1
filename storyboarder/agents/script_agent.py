"""Script Agent for drafting the multi-scene video script.

Turns a viral video idea plus the analysed characters into a short script,
using Gemini structured output so the answer is a JSON array of scenes.
"""

import json
import logging
from typing import Sequence

from pydantic import ValidationError

from storyboarder.exceptions import ScriptGenerationError
from storyboarder.models.schemas import Character, Scene
from storyboarder.gemini_client import GeminiService

logger = logging.getLogger(__name__)


SCRIPT_PROMPT = """
Analyze the story structure of the following viral video description: "{idea}".

Based on that analysis, create a new, original short video script starring the following characters:
{characters}

The script must be broken down into exactly {scene_count} short, distinct scenes. For each scene, provide:
1. A concise 'description' for the user to read.
2. A detailed 'videoPrompt' for a text-to-video AI. This prompt should vividly describe the scene, the environment, and the actions of the characters involved. Incorporate the character descriptions provided above to ensure visual consistency.

Number the scenes with 'sceneNumber' starting at 1.
Ensure the final output is a valid JSON array of scenes.
"""

EMPTY_SCRIPT_MESSAGE = (
    "The AI failed to generate a script. Please try a different description."
)
NOT_AN_ARRAY_MESSAGE = "AI did not return a valid array of scenes."


def build_script_schema():
    """Response schema: an array of {sceneNumber, description, videoPrompt}."""
    from google.genai import types

    return types.Schema(
        type=types.Type.ARRAY,
        items=types.Schema(
            type=types.Type.OBJECT,
            properties={
                "sceneNumber": types.Schema(type=types.Type.INTEGER),
                "description": types.Schema(type=types.Type.STRING),
                "videoPrompt": types.Schema(type=types.Type.STRING),
            },
            required=["sceneNumber", "description", "videoPrompt"],
        ),
    )


def format_character_descriptions(characters: Sequence[Character]) -> str:
    """One ``- name: description`` line per character that has a description."""
    return "\n".join(
        f"- {c.name}: {c.description}" for c in characters if c.description
    )


def parse_scenes(data) -> list[Scene]:
    """
    Validate the decoded script response and return its scenes in order.

    Scenes are sorted by scene number; duplicate numbers are rejected since
    results are keyed by them.

    Raises:
        ScriptGenerationError: If the payload is not a non-empty array of
            well-formed scenes
    """
    if not isinstance(data, list):
        raise ScriptGenerationError(NOT_AN_ARRAY_MESSAGE)
    if not data:
        raise ScriptGenerationError(EMPTY_SCRIPT_MESSAGE)

    try:
        scenes = [Scene.model_validate(item) for item in data]
    except ValidationError as e:
        logger.error(f"Malformed scene in script: {e}")
        raise ScriptGenerationError(NOT_AN_ARRAY_MESSAGE) from e

    numbers = [s.scene_number for s in scenes]
    if len(set(numbers)) != len(numbers):
        raise ScriptGenerationError(
            f"AI returned duplicate scene numbers: {sorted(numbers)}"
        )

    return sorted(scenes, key=lambda s: s.scene_number)


class ScriptAgent(GeminiService):
    """Agent that writes the scene-by-scene script."""

    def build_prompt(self, idea: str, characters: Sequence[Character]) -> str:
        return SCRIPT_PROMPT.format(
            idea=idea,
            characters=format_character_descriptions(characters),
            scene_count=self.config.text.scene_count,
        )

    def generate_script(self, idea: str, characters: Sequence[Character]) -> list[Scene]:
        """
        Generate the video script.

        Args:
            idea: The user's viral video description
            characters: Characters, only those with a description are used

        Returns:
            Non-empty list of scenes ordered by scene number

        Raises:
            ScriptGenerationError: On API failure or an invalid response
        """
        from google.genai import types

        client = self._get_client()
        prompt = self.build_prompt(idea, characters)
        logger.debug(f"Script prompt: {prompt}")

        try:
            response = client.models.generate_content(
                model=self.config.text.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=build_script_schema(),
                ),
            )
            data = json.loads(response.text)
        except Exception as e:
            logger.error(f"Error generating script: {e}")
            raise ScriptGenerationError() from e

        scenes = parse_scenes(data)
        logger.info(f"Generated script with {len(scenes)} scenes")
        return scenes
