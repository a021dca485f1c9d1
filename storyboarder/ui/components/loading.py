"""Loading indicator with rotating status messages."""

import random
import time
from typing import Callable, Optional

import streamlit as st


LOADING_MESSAGES = [
    "Warming up the digital director's chair...",
    "Casting your characters...",
    "Scouting virtual locations...",
    "Writing a script worth going viral...",
    "Sketching the storyboard frames...",
    "Setting up the lights and cameras...",
    "Rolling camera... and action!",
    "Rendering pixels into motion...",
    "Adding a sprinkle of movie magic...",
    "Teaching the AI some comedic timing...",
    "Polishing the final cut...",
    "Almost ready for the premiere...",
]

ROTATE_SECONDS = 3.0


class LoadingStatus:
    """Shows the current pipeline step plus a fun message.

    The fun message changes at most every ``rotate_seconds``; Streamlit only
    redraws between pipeline updates, so rotation happens on each update.
    """

    def __init__(
        self,
        placeholder=None,
        rotate_seconds: float = ROTATE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        choose: Callable[[list], str] = random.choice,
    ):
        self.placeholder = placeholder
        self.rotate_seconds = rotate_seconds
        self._clock = clock
        self._choose = choose
        self._fun_message: Optional[str] = None
        self._changed_at = 0.0

    def fun_message(self) -> str:
        now = self._clock()
        if self._fun_message is None or now - self._changed_at >= self.rotate_seconds:
            self._fun_message = self._choose(LOADING_MESSAGES)
            self._changed_at = now
        return self._fun_message

    def update(self, step_message: str, progress: float = 0.0) -> None:
        """Progress callback: redraw the indicator for ``step_message``."""
        if self.placeholder is None:
            return
        with self.placeholder.container():
            st.progress(min(max(progress, 0.0), 1.0), text=step_message)
            st.caption(self.fun_message())
            st.caption("This multi-step process can take several minutes. Please be patient.")

    def clear(self) -> None:
        if self.placeholder is not None:
            self.placeholder.empty()
