"""Main Streamlit application for Storyboarder."""

import logging
import streamlit as st

# Configure logging to show INFO level for our services
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
# Reduce noise from other loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)

from storyboarder.config import config
from storyboarder.ui.components.state import init_session_state, get_state
from storyboarder.ui.page_modules._results import render_error, render_results
from storyboarder.ui.page_modules._setup import render_setup_page


def main():
    """Main application entry point."""
    # Page config
    st.set_page_config(
        page_title="Viral Video Storyboarder",
        page_icon="🎬",
        layout="wide",
    )

    # Initialize session state
    init_session_state()

    # Header
    st.title("🎬 Viral Video Storyboarder")
    st.markdown("*Bring your characters to life in a viral video format!*")

    # Validate configuration
    errors = config.validate()
    if errors:
        st.error("Configuration errors:")
        for error in errors:
            st.error(f"- {error}")
        st.info("Please set the required environment variables in your .env file")
        st.stop()

    render_setup_page()

    state = get_state()

    if state.error:
        render_error(state.error)

    if not state.is_loading and state.pipeline.scenes:
        st.markdown("---")
        render_results(state.pipeline)

    # Footer
    st.markdown("---")
    st.markdown(
        """
        <div style='text-align: center; color: gray; font-size: 0.8em;'>
        Storyboarder uses Gemini for character analysis and scripting,
        Imagen for storyboards, and Veo for video generation.
        </div>
        """,
        unsafe_allow_html=True,
    )


if __name__ == "__main__":
    main()
