"""Session state management for Streamlit."""

from typing import Optional

import streamlit as st

from storyboarder.config import config
from storyboarder.models.schemas import AppState, Character, PipelineState


def init_session_state() -> None:
    """Initialize session state with defaults."""
    if "app_state" not in st.session_state:
        st.session_state.app_state = AppState(
            characters=Character.placeholders(config.max_characters)
        )


def get_state() -> AppState:
    """Get the current app state."""
    init_session_state()
    return st.session_state.app_state


def update_state(**kwargs) -> None:
    """
    Update state attributes.

    Args:
        **kwargs: Key-value pairs to update
    """
    state = get_state()
    for key, value in kwargs.items():
        if hasattr(state, key):
            setattr(state, key, value)


def set_character(
    character_id: int,
    name: Optional[str] = None,
    image_bytes: Optional[bytes] = None,
    mime_type: Optional[str] = None,
    clear_image: bool = False,
) -> None:
    """Replace a character slot with an updated copy.

    ``clear_image`` drops the slot's image (the uploader was emptied).
    """
    state = get_state()
    updated = []
    for char in state.characters:
        if char.id == character_id:
            changes = {}
            if name is not None:
                changes["name"] = name
            if image_bytes is not None:
                changes["image_bytes"] = image_bytes
                changes["mime_type"] = mime_type
                changes["description"] = None
            elif clear_image:
                changes["image_bytes"] = None
                changes["mime_type"] = None
                changes["description"] = None
            char = char.model_copy(update=changes)
        updated.append(char)
    state.characters = updated


def start_run() -> None:
    """Clear previous results and mark a run as in progress."""
    update_state(
        is_loading=True,
        error=None,
        pipeline=PipelineState(),
    )


def finish_run(final: PipelineState) -> None:
    """Store the final snapshot and surface its error, if any."""
    update_state(
        is_loading=False,
        pipeline=final,
        error=final.error,
    )


def reset_state() -> None:
    """Reset the entire app state, including the form widgets."""
    for key in list(st.session_state.keys()):
        if str(key).startswith("character_"):
            del st.session_state[key]
    st.session_state.app_state = AppState(
        characters=Character.placeholders(config.max_characters)
    )
