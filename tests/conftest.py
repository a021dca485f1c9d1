"""Shared fixtures: offline config, a tiny PNG, and fake generation services."""

from io import BytesIO
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from PIL import Image

from storyboarder.config import Config
from storyboarder.exceptions import (
    CharacterAnalysisError,
    StoryboardGenerationError,
    VideoGenerationError,
)
from storyboarder.agents.script_agent import parse_scenes
from storyboarder.models.schemas import Character, StoryboardImage, VideoResult


@pytest.fixture
def test_config():
    cfg = Config(google_api_key="test-key")
    cfg.video.poll_interval = 10
    cfg.video.timeout = 1200
    cfg.text.scene_count = 3
    return cfg


@pytest.fixture
def png_bytes():
    buffer = BytesIO()
    Image.new("RGB", (16, 9), color=(255, 0, 128)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def fake_client():
    return MagicMock()


def script_payload(count: int) -> list[dict]:
    """Decoded script response as the model returns it (camelCase keys)."""
    return [
        {
            "sceneNumber": n,
            "description": f"Scene {n} description",
            "videoPrompt": f"Scene {n} prompt",
        }
        for n in range(1, count + 1)
    ]


class FakeServices:
    """Stand-ins for the four generation services that record every call."""

    def __init__(self, payload=None, fail_on=None, fail_description_for=None):
        self.calls: list[tuple] = []
        self.payload = script_payload(3) if payload is None else payload
        self.fail_on = fail_on  # e.g. ("storyboard", 2) or ("video", 3)
        self.fail_description_for = fail_description_for
        self.output_paths: list = []

        self.analyzer = SimpleNamespace(describe_character=self._describe)
        self.script_agent = SimpleNamespace(generate_script=self._script)
        self.image_generator = SimpleNamespace(generate_storyboard_image=self._storyboard)
        self.video_generator = SimpleNamespace(generate_video=self._video)

    def calls_of(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]

    def _describe(self, character):
        self.calls.append(("describe", character.name))
        if character.name == self.fail_description_for:
            raise CharacterAnalysisError()
        return character.model_copy(update={"description": f"{character.name} looks great"})

    def _script(self, idea, characters):
        self.calls.append(("script", idea, tuple(c.description for c in characters)))
        return parse_scenes(self.payload)

    def _storyboard(self, scene_number, prompt, output_path=None):
        self.calls.append(("storyboard", scene_number))
        self.output_paths.append(output_path)
        if self.fail_on == ("storyboard", scene_number):
            raise StoryboardGenerationError()
        return StoryboardImage(scene_number=scene_number, image_bytes=f"png{scene_number}".encode())

    def _video(self, scene_number, prompt, seed, seed_mime_type="image/png", output_path=None):
        self.calls.append(("video", scene_number, seed))
        self.output_paths.append(output_path)
        if self.fail_on == ("video", scene_number):
            raise VideoGenerationError()
        return VideoResult(scene_number=scene_number, video_bytes=f"mp4{scene_number}".encode())


@pytest.fixture
def characters(png_bytes):
    return [
        Character(id=0, name="Whiskers", image_bytes=png_bytes, mime_type="image/png"),
        Character(id=1, name="Character 2"),
        Character(id=2, name="Box", image_bytes=png_bytes, mime_type="image/png"),
    ]


@pytest.fixture
def fake_services():
    """Factory for :class:`FakeServices`."""
    return FakeServices
