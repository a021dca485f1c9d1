"""Tests for data models."""

import pytest
from pydantic import ValidationError

from storyboarder.models.schemas import (
    MAX_CHARACTERS,
    AppState,
    Character,
    PipelineStage,
    PipelineState,
    Scene,
    StoryboardImage,
    VideoResult,
)


class TestCharacter:
    def test_placeholders(self):
        characters = Character.placeholders()
        assert len(characters) == MAX_CHARACTERS
        assert [c.name for c in characters] == ["Character 1", "Character 2", "Character 3"]
        assert not any(c.has_image for c in characters)

    def test_has_image(self):
        assert Character(id=0, name="Cat", image_bytes=b"png").has_image
        assert not Character(id=0, name="Cat", image_bytes=b"").has_image


class TestScene:
    def test_accepts_camel_case(self):
        scene = Scene.model_validate(
            {"sceneNumber": 2, "description": "desc", "videoPrompt": "prompt"}
        )
        assert scene.scene_number == 2
        assert scene.video_prompt == "prompt"

    def test_accepts_field_names(self):
        scene = Scene(scene_number=1, description="desc", video_prompt="prompt")
        assert scene.scene_number == 1

    def test_is_frozen(self):
        scene = Scene(scene_number=1, description="desc", video_prompt="prompt")
        with pytest.raises(ValidationError):
            scene.description = "changed"


class TestResults:
    def test_storyboard_defaults_to_png(self):
        storyboard = StoryboardImage(scene_number=1, image_bytes=b"abc")
        assert storyboard.mime_type == "image/png"
        assert storyboard.path is None

    def test_video_file_name(self):
        assert VideoResult(scene_number=3, video_bytes=b"x").file_name == "scene_3.mp4"


class TestPipelineState:
    def test_initial_state(self):
        state = PipelineState()
        assert state.stage == PipelineStage.IDLE
        assert state.error is None
        assert state.scenes == ()

    def test_advance_returns_new_snapshot(self):
        state = PipelineState()
        storyboard = StoryboardImage(scene_number=1, image_bytes=b"png")

        advanced = state.advance(
            PipelineStage.ANIMATING, "Generating video for scene 1...", storyboards=(storyboard,)
        )

        assert advanced.stage == PipelineStage.ANIMATING
        assert advanced.storyboard_for(1) == storyboard
        assert advanced.video_for(1) is None
        assert state.storyboards == ()
        assert state.stage == PipelineStage.IDLE


class TestAppState:
    def test_initial_state(self):
        state = AppState()
        assert state.idea == ""
        assert len(state.characters) == MAX_CHARACTERS
        assert not state.is_loading
        assert state.error is None
        assert not state.can_submit

    def test_can_submit_needs_idea_and_image(self):
        state = AppState()
        state.idea = "A cat jumps out of a box"
        assert not state.can_submit

        state.characters[0] = state.characters[0].model_copy(update={"image_bytes": b"png"})
        assert state.can_submit
        assert [c.id for c in state.active_characters] == [0]

        state.is_loading = True
        assert not state.can_submit
