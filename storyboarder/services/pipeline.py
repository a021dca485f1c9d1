"""Storyboard pipeline: idea + characters -> script -> stills -> clips.

The run is strictly sequential by scene. The only concurrency is the
character analysis fan-out, which waits for every description before the
script is requested; a single failed description fails the run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from storyboarder.agents.script_agent import ScriptAgent
from storyboarder.config import Config, config as default_config
from storyboarder.exceptions import StoryboarderError
from storyboarder.models.schemas import (
    Character,
    PipelineStage,
    PipelineState,
    Scene,
)
from storyboarder.services.character_analyzer import CharacterAnalyzer
from storyboarder.services.image_generator import ImageGenerator
from storyboarder.services.video_generator import VideoGenerator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, float], None]


class StoryboardPipeline:
    """Run the four generation steps and publish a snapshot after each one."""

    def __init__(
        self,
        config: Optional[Config] = None,
        analyzer: Optional[CharacterAnalyzer] = None,
        script_agent: Optional[ScriptAgent] = None,
        image_generator: Optional[ImageGenerator] = None,
        video_generator: Optional[VideoGenerator] = None,
        save_outputs: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.config = config or default_config
        self.analyzer = analyzer or CharacterAnalyzer(self.config)
        self.script_agent = script_agent or ScriptAgent(self.config)
        self.image_generator = image_generator or ImageGenerator(self.config)
        self.video_generator = video_generator or VideoGenerator(self.config)
        self.save_outputs = save_outputs
        self.progress_callback = progress_callback

    def _report(self, message: str, progress: float) -> None:
        logger.info(message)
        if self.progress_callback:
            self.progress_callback(message, progress)

    def describe_characters(self, characters: Sequence[Character]) -> list[Character]:
        """
        Describe every character that has an image, in parallel.

        Input order is preserved. Any failure propagates once all submitted
        requests have settled, so no partial descriptions are returned.
        """
        with_images = [i for i, c in enumerate(characters) if c.has_image]
        if not with_images:
            return list(characters)

        with ThreadPoolExecutor(max_workers=len(with_images)) as executor:
            futures = {
                i: executor.submit(self.analyzer.describe_character, characters[i])
                for i in with_images
            }
            described = {i: future.result() for i, future in futures.items()}

        return [described.get(i, c) for i, c in enumerate(characters)]

    def _storyboard_path(self, scene: Scene) -> Optional[Path]:
        if not self.save_outputs:
            return None
        return self.config.images_dir / f"scene_{scene.scene_number}.png"

    def _video_path(self, scene: Scene) -> Optional[Path]:
        if not self.save_outputs:
            return None
        return self.config.videos_dir / f"scene_{scene.scene_number}.mp4"

    def _run_stages(
        self, idea: str, characters: Sequence[Character], state: PipelineState
    ) -> Iterator[PipelineState]:
        state = state.advance(PipelineStage.ANALYZING, "Analyzing characters...")
        self._report(state.message, 0.05)
        yield state

        described = self.describe_characters(characters)
        state = state.advance(
            PipelineStage.SCRIPTING, "Creating script...", characters=tuple(described)
        )
        self._report(state.message, 0.15)
        yield state

        scenes = self.script_agent.generate_script(idea, described)
        state = state.model_copy(update={"scenes": tuple(scenes)})
        yield state

        total = len(scenes)
        for i, scene in enumerate(scenes):
            state = state.advance(
                PipelineStage.STORYBOARDING,
                f"Generating storyboard for scene {scene.scene_number}...",
            )
            self._report(state.message, 0.2 + 0.8 * i / total)
            yield state

            storyboard = self.image_generator.generate_storyboard_image(
                scene.scene_number,
                scene.video_prompt,
                output_path=self._storyboard_path(scene),
            )
            state = state.advance(
                PipelineStage.ANIMATING,
                f"Generating video for scene {scene.scene_number}...",
                storyboards=state.storyboards + (storyboard,),
            )
            self._report(state.message, 0.2 + 0.8 * (i + 0.3) / total)
            yield state

            video = self.video_generator.generate_video(
                scene.scene_number,
                scene.video_prompt,
                storyboard.image_bytes,
                seed_mime_type=storyboard.mime_type,
                output_path=self._video_path(scene),
            )
            state = state.model_copy(update={"videos": state.videos + (video,)})
            yield state

        state = state.advance(PipelineStage.COMPLETE, "All scenes complete!")
        self._report(state.message, 1.0)
        yield state

    def run(self, idea: str, characters: Sequence[Character]) -> Iterator[PipelineState]:
        """
        Run the pipeline, yielding a new snapshot whenever something changes.

        Failures never escape: the last snapshot then has stage ``FAILED``
        and a human-readable ``error``, and keeps everything published before
        the failure.

        Args:
            idea: The viral video description
            characters: Characters taking part; those without images are
                passed through untouched

        Yields:
            PipelineState snapshots, ending with a COMPLETE or FAILED one
        """
        state = PipelineState(characters=tuple(characters))
        try:
            for state in self._run_stages(idea, characters, state):
                yield state
        except StoryboarderError as e:
            logger.exception("Pipeline failed")
            yield state.advance(PipelineStage.FAILED, "", error=str(e))
        except Exception as e:
            logger.exception("Pipeline failed with unexpected error")
            yield state.advance(
                PipelineStage.FAILED, "", error=str(e) or "An unknown error occurred."
            )

    def run_to_completion(self, idea: str, characters: Sequence[Character]) -> PipelineState:
        """Drain :meth:`run` and return the final snapshot."""
        final = PipelineState()
        for final in self.run(idea, characters):
            pass
        return final
