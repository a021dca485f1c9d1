"""Shared construction of the google-genai client."""

import logging
from typing import Optional

from storyboarder.config import Config, config as default_config
from storyboarder.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_client(config: Optional[Config] = None):
    """Build a Gemini client, failing fast when no API key is configured."""
    cfg = config or default_config
    if not cfg.google_api_key:
        raise ConfigurationError()

    try:
        from google import genai
    except ImportError as exc:
        raise ImportError(
            "google-genai package not installed. Run: pip install google-genai"
        ) from exc

    logger.debug("Creating Gemini client")
    return genai.Client(api_key=cfg.google_api_key)


class GeminiService:
    """Base for services that talk to the Gemini API.

    The client is created lazily on first use; tests pass a fake ``client``.
    """

    def __init__(self, config: Optional[Config] = None, client=None):
        self.config = config or default_config
        self._client = client

    def _get_client(self):
        """Lazy-load the Gemini client."""
        if self._client is None:
            self._client = create_client(self.config)
        return self._client
