"""Tests for the rotating loading message."""

from storyboarder.ui.components.loading import LOADING_MESSAGES, LoadingStatus


class TestLoadingStatus:
    def test_message_rotates_after_interval(self):
        now = [0.0]
        picks = iter(LOADING_MESSAGES)
        status = LoadingStatus(
            rotate_seconds=3.0, clock=lambda: now[0], choose=lambda _: next(picks)
        )

        first = status.fun_message()
        now[0] = 1.0
        assert status.fun_message() == first

        now[0] = 3.5
        assert status.fun_message() == LOADING_MESSAGES[1]

    def test_update_without_placeholder_is_noop(self):
        LoadingStatus().update("Creating script...", 0.2)
