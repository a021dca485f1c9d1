"""Scene video generation using Google Veo.

Video generation is a long-running operation: the request is submitted, the
operation is polled until it reports done, and the finished clip is then
downloaded from the URI the API hands back.
"""

import logging
import math
import time
from pathlib import Path
from typing import Callable, Optional

import requests

from storyboarder.config import Config
from storyboarder.exceptions import VideoGenerationError, VideoTimeoutError
from storyboarder.models.schemas import VideoResult
from storyboarder.gemini_client import GeminiService

logger = logging.getLogger(__name__)

STYLE_SUFFIX = "Cinematic, high-quality, 4K, trending on social media."


class VideoGenerator(GeminiService):
    """Generate a video clip from a scene prompt and a seed frame."""

    def __init__(
        self,
        config: Optional[Config] = None,
        client=None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(config=config, client=client)
        self._session = session or requests.Session()
        self._sleep = sleep

    @property
    def max_polls(self) -> int:
        """Status checks allowed before giving up on a clip."""
        video = self.config.video
        return max(1, math.ceil(video.timeout / video.poll_interval))

    def build_prompt(self, scene_prompt: str) -> str:
        return f"{scene_prompt}. {STYLE_SUFFIX}"

    def _wait_for_operation(
        self,
        operation,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ):
        """Poll ``operation`` until done, sleeping ``poll_interval`` between checks."""
        client = self._get_client()
        poll_count = 0
        max_polls = self.max_polls

        while not operation.done:
            poll_count += 1
            if poll_count > max_polls:
                logger.error("Video generation timed out")
                raise VideoTimeoutError(
                    f"Video generation timed out after {self.config.video.timeout:.0f} seconds."
                )

            if progress_callback:
                progress = min(0.1 + (poll_count / max_polls) * 0.8, 0.9)
                progress_callback("Rendering video...", progress)

            self._sleep(self.config.video.poll_interval)
            operation = client.operations.get(operation)

        logger.info(f"Video operation finished after {poll_count} status checks")
        return operation

    def _download(self, uri: str) -> bytes:
        """Fetch the finished clip; the API key goes in the ``key`` query parameter."""
        response = self._session.get(
            uri,
            params={"key": self.config.google_api_key},
            timeout=self.config.video.download_timeout,
        )
        if not response.ok:
            raise VideoGenerationError(
                f"Failed to fetch video data: {response.reason}"
            )
        return response.content

    def generate_video_bytes(
        self,
        scene_prompt: str,
        seed_image_bytes: bytes,
        seed_mime_type: str = "image/png",
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ) -> bytes:
        """
        Generate a clip for ``scene_prompt`` starting from the seed frame.

        Args:
            scene_prompt: The scene's video prompt
            seed_image_bytes: Storyboard still used as the first frame
            seed_mime_type: MIME type of the seed frame
            progress_callback: Optional progress callback

        Returns:
            MP4 bytes

        Raises:
            VideoTimeoutError: If the operation does not finish in time
            VideoGenerationError: On any other failure
        """
        from google.genai import types

        client = self._get_client()
        full_prompt = self.build_prompt(scene_prompt)

        logger.info(f"Generating video with {self.config.video.model}")
        logger.debug(f"Prompt: {full_prompt}")

        if progress_callback:
            progress_callback("Submitting video request...", 0.05)

        try:
            operation = client.models.generate_videos(
                model=self.config.video.model,
                prompt=full_prompt,
                image=types.Image(image_bytes=seed_image_bytes, mime_type=seed_mime_type),
                config=types.GenerateVideosConfig(number_of_videos=1),
            )

            operation = self._wait_for_operation(operation, progress_callback)

            if getattr(operation, "error", None):
                raise VideoGenerationError(f"Video operation failed: {operation.error}")

            generated = (
                operation.response.generated_videos
                if operation.response and operation.response.generated_videos
                else []
            )
            video = generated[0].video if generated else None
            download_link = video.uri if video else None
            if not download_link:
                raise VideoGenerationError(
                    "Video generation completed, but no download link was found."
                )

            video_bytes = self._download(download_link)

            if progress_callback:
                progress_callback("Video complete", 1.0)

            return video_bytes

        except VideoTimeoutError:
            raise
        except Exception as e:
            logger.error(f'Error generating video for prompt "{scene_prompt}": {e}')
            raise VideoGenerationError() from e

    def generate_video(
        self,
        scene_number: int,
        scene_prompt: str,
        seed_image_bytes: bytes,
        seed_mime_type: str = "image/png",
        output_path: Optional[Path] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ) -> VideoResult:
        """Generate the clip for a scene, optionally saving it to ``output_path``."""
        video_bytes = self.generate_video_bytes(
            scene_prompt,
            seed_image_bytes,
            seed_mime_type=seed_mime_type,
            progress_callback=progress_callback,
        )

        if output_path:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(video_bytes)
            logger.info(f"Saved scene {scene_number} video: {output_path}")

        return VideoResult(
            scene_number=scene_number,
            video_bytes=video_bytes,
            path=output_path,
        )
