"""Services for Storyboarder."""

from storyboarder.services.character_analyzer import CharacterAnalyzer
from storyboarder.services.image_generator import ImageGenerator
from storyboarder.services.video_generator import VideoGenerator
from storyboarder.services.pipeline import StoryboardPipeline

__all__ = [
    "CharacterAnalyzer",
    "ImageGenerator",
    "VideoGenerator",
    "StoryboardPipeline",
]
