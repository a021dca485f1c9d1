"""Setup page - idea, characters, and the generate button."""

import logging

import streamlit as st

from storyboarder.config import config
from storyboarder.models.schemas import PipelineStage
from storyboarder.services.character_analyzer import detect_mime_type
from storyboarder.services.pipeline import StoryboardPipeline
from storyboarder.ui.components.loading import LoadingStatus
from storyboarder.ui.components.state import (
    finish_run,
    get_state,
    reset_state,
    set_character,
    start_run,
    update_state,
)
from storyboarder.ui.page_modules._results import render_results

logger = logging.getLogger(__name__)


def _render_character_slots() -> None:
    state = get_state()
    cols = st.columns(len(state.characters))

    for col, char in zip(cols, state.characters):
        with col:
            name = st.text_input(
                "Name",
                value=char.name,
                key=f"character_name_{char.id}",
                disabled=state.is_loading,
                label_visibility="collapsed",
            )
            if name != char.name:
                set_character(char.id, name=name)

            uploaded = st.file_uploader(
                f"Image for {name}",
                type=["png", "jpg", "jpeg", "webp"],
                key=f"character_image_{char.id}",
                disabled=state.is_loading,
                label_visibility="collapsed",
            )
            if uploaded is not None:
                image_bytes = uploaded.getvalue()
                if image_bytes != char.image_bytes:
                    mime_type = uploaded.type or detect_mime_type(image_bytes)
                    set_character(char.id, image_bytes=image_bytes, mime_type=mime_type)
                st.image(image_bytes, width="stretch")
            else:
                if char.has_image:
                    set_character(char.id, clear_image=True)
                st.caption("Click above to upload")


def run_generation(results_placeholder, status_placeholder) -> None:
    """Run the pipeline, redrawing results after every snapshot."""
    state = get_state()
    idea = state.idea.strip()
    characters = state.active_characters

    start_run()
    status = LoadingStatus(status_placeholder)
    pipeline = StoryboardPipeline(progress_callback=status.update)

    logger.info(f"Starting run with {len(characters)} character(s)")
    final = state.pipeline
    try:
        for final in pipeline.run(idea, characters):
            update_state(pipeline=final)
            with results_placeholder.container():
                render_results(final, interactive=False)
    except Exception as e:
        logger.exception("Run aborted while showing results")
        final = final.advance(
            PipelineStage.FAILED, "", error=str(e) or "An unknown error occurred."
        )
    finally:
        status.clear()
        finish_run(final)


def render_setup_page() -> None:
    """Render the setup form and, when submitted, run the pipeline."""
    state = get_state()

    st.subheader("1. Describe the Viral Video Idea")
    idea = st.text_area(
        "Viral video idea",
        value=state.idea,
        placeholder="e.g., 'A cat surprisingly jumps out of a box to scare its owner'",
        height=100,
        disabled=state.is_loading,
        label_visibility="collapsed",
    )
    update_state(idea=idea)

    st.subheader(f"2. Upload Your Characters (at least 1, up to {config.max_characters})")
    _render_character_slots()

    col1, col2 = st.columns([3, 1])
    with col1:
        submitted = st.button(
            "Generating..." if state.is_loading else "Create My Video!",
            type="primary",
            disabled=not state.can_submit,
            width="stretch",
        )
    with col2:
        if st.button("Start Over", disabled=state.is_loading, width="stretch"):
            reset_state()
            st.rerun()

    status_placeholder = st.empty()
    results_placeholder = st.empty()

    if submitted:
        run_generation(results_placeholder, status_placeholder)
        st.rerun()
