"""Error types raised by the generation services.

Each error carries the message shown to the user; the underlying SDK or
HTTP exception is chained via ``raise ... from``.
"""


class StoryboarderError(Exception):
    """Base class for all Storyboarder failures."""

    default_message = "An unknown error occurred."

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)


class ConfigurationError(StoryboarderError):
    default_message = "GOOGLE_API_KEY environment variable is not set."


class CharacterAnalysisError(StoryboarderError):
    default_message = "Failed to analyze character image."


class ScriptGenerationError(StoryboarderError):
    default_message = "Failed to generate video script."


class StoryboardGenerationError(StoryboarderError):
    default_message = "Failed to generate a storyboard image."


class VideoGenerationError(StoryboarderError):
    default_message = "Failed to generate a video clip."


class VideoTimeoutError(VideoGenerationError):
    default_message = "Video generation timed out."
