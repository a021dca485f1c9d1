"""Storyboarder - turn a viral video idea and character images into a storyboarded video."""

__version__ = "0.1.0"
