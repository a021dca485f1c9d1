"""Pydantic models shared by the services, the pipeline and the UI."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


MAX_CHARACTERS = 3


class Character(BaseModel):
    """A user-supplied character: a name plus an optional reference image."""

    id: int
    name: str
    image_bytes: Optional[bytes] = None
    mime_type: Optional[str] = None
    description: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return bool(self.image_bytes)

    @classmethod
    def placeholders(cls, count: int = MAX_CHARACTERS) -> list["Character"]:
        """Empty character slots shown when the form is first rendered."""
        return [cls(id=i, name=f"Character {i + 1}") for i in range(count)]


class Scene(BaseModel):
    """One scene of the generated script.

    The script model answers with camelCase keys, so both spellings are
    accepted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    scene_number: int = Field(alias="sceneNumber")
    description: str
    video_prompt: str = Field(alias="videoPrompt")


class StoryboardImage(BaseModel):
    """Still image for a scene; the bytes double as the video seed frame."""

    model_config = ConfigDict(frozen=True)

    scene_number: int
    image_bytes: bytes
    mime_type: str = "image/png"
    path: Optional[Path] = None


class VideoResult(BaseModel):
    """Finished clip for a scene."""

    model_config = ConfigDict(frozen=True)

    scene_number: int
    video_bytes: bytes
    mime_type: str = "video/mp4"
    path: Optional[Path] = None

    @property
    def file_name(self) -> str:
        return f"scene_{self.scene_number}.mp4"


class PipelineStage(str, Enum):
    """Where a pipeline run currently is."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    SCRIPTING = "scripting"
    STORYBOARDING = "storyboarding"
    ANIMATING = "animating"
    COMPLETE = "complete"
    FAILED = "failed"


class PipelineState(BaseModel):
    """Immutable snapshot of a pipeline run.

    Every stage produces a new snapshot with ``model_copy(update=...)``;
    earlier snapshots handed to callers never change.
    """

    model_config = ConfigDict(frozen=True)

    stage: PipelineStage = PipelineStage.IDLE
    message: str = ""
    characters: tuple[Character, ...] = ()
    scenes: tuple[Scene, ...] = ()
    storyboards: tuple[StoryboardImage, ...] = ()
    videos: tuple[VideoResult, ...] = ()
    error: Optional[str] = None

    def storyboard_for(self, scene_number: int) -> Optional[StoryboardImage]:
        return next(
            (s for s in self.storyboards if s.scene_number == scene_number), None
        )

    def video_for(self, scene_number: int) -> Optional[VideoResult]:
        return next((v for v in self.videos if v.scene_number == scene_number), None)

    def advance(self, stage: PipelineStage, message: str, **changes) -> "PipelineState":
        """Return a new snapshot at ``stage`` with ``changes`` applied."""
        return self.model_copy(update={"stage": stage, "message": message, **changes})


class AppState(BaseModel):
    """Mutable Streamlit session state for the single page."""

    idea: str = ""
    characters: list[Character] = Field(default_factory=Character.placeholders)
    is_loading: bool = False
    error: Optional[str] = None
    pipeline: PipelineState = Field(default_factory=PipelineState)

    @property
    def active_characters(self) -> list[Character]:
        return [c for c in self.characters if c.has_image]

    @property
    def can_submit(self) -> bool:
        return bool(self.idea.strip()) and bool(self.active_characters) and not self.is_loading
