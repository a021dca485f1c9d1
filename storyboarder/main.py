"""Main entry point for Storyboarder CLI."""

import argparse
import logging
import sys
from pathlib import Path


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Storyboarder - AI-powered viral video storyboard and clip generator"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # UI command
    subparsers.add_parser("ui", help="Launch the Streamlit UI")

    # Generate command
    gen_parser = subparsers.add_parser(
        "generate", help="Run the full pipeline without the UI"
    )
    gen_parser.add_argument("idea", type=str, help="Viral video idea")
    gen_parser.add_argument(
        "--character",
        action="append",
        default=[],
        metavar="NAME=IMAGE",
        help="Character name and image path (repeat up to 3 times)",
    )
    gen_parser.add_argument("--output", type=Path, help="Output directory")

    args = parser.parse_args()

    if args.command == "ui":
        run_ui()
    elif args.command == "generate":
        sys.exit(run_generate(args.idea, args.character, args.output))
    else:
        parser.print_help()


def run_ui():
    """Launch the Streamlit UI."""
    import subprocess

    app_path = Path(__file__).parent / "ui" / "app.py"
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)])


def parse_character_args(values: list[str], max_characters: int) -> list:
    """Turn ``NAME=IMAGE`` arguments into characters with loaded images."""
    from storyboarder.models.schemas import Character
    from storyboarder.services.character_analyzer import detect_mime_type

    if len(values) > max_characters:
        raise ValueError(f"At most {max_characters} characters are supported")

    characters = []
    for i, value in enumerate(values):
        name, sep, path = value.partition("=")
        if not sep or not name.strip() or not path.strip():
            raise ValueError(f"Expected NAME=IMAGE, got: {value!r}")

        image_path = Path(path.strip())
        image_bytes = image_path.read_bytes()
        mime_type = detect_mime_type(image_bytes)
        if mime_type is None:
            raise ValueError(f"Not an image file: {image_path}")

        characters.append(
            Character(
                id=i,
                name=name.strip(),
                image_bytes=image_bytes,
                mime_type=mime_type,
            )
        )
    return characters


def run_generate(idea: str, character_args: list[str], output_dir: Path = None) -> int:
    """Run the pipeline headless, writing storyboards and clips to disk."""
    from dataclasses import replace

    from storyboarder.config import config
    from storyboarder.services.pipeline import StoryboardPipeline

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if output_dir:
        config = replace(config, output_root=output_dir)

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}")
        return 2

    try:
        characters = parse_character_args(character_args, config.max_characters)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 2

    if not characters:
        print("Error: at least one --character NAME=IMAGE is required")
        return 2

    config.ensure_directories()

    def progress(msg, p):
        print(f"  [{p:4.0%}] {msg}")

    pipeline = StoryboardPipeline(
        config=config, save_outputs=True, progress_callback=progress
    )
    final = pipeline.run_to_completion(idea, characters)

    for scene in final.scenes:
        print(f"\nScene {scene.scene_number}: {scene.description}")
        storyboard = final.storyboard_for(scene.scene_number)
        video = final.video_for(scene.scene_number)
        if storyboard and storyboard.path:
            print(f"  Storyboard: {storyboard.path}")
        if video and video.path:
            print(f"  Video: {video.path}")

    if final.error:
        print(f"\nAn error occurred: {final.error}")
        return 1

    print(f"\nAll scenes saved to: {config.output_dir}")
    return 0


if __name__ == "__main__":
    main()
