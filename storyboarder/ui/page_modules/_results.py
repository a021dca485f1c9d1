"""Results display - one card per scene with storyboard and video."""

import streamlit as st

from storyboarder.models.schemas import PipelineState


def render_results(pipeline: PipelineState, interactive: bool = True) -> None:
    """
    Render every known scene with whatever results exist so far.

    Args:
        pipeline: Snapshot to render
        interactive: Include the download buttons. Live redraws during a run
            pass False; keyed widgets may only appear once per script run.
    """
    for scene in pipeline.scenes:
        storyboard = pipeline.storyboard_for(scene.scene_number)
        video = pipeline.video_for(scene.scene_number)

        with st.container(border=True):
            st.subheader(f"Scene {scene.scene_number}")
            st.markdown(f'*"{scene.description}"*')

            col1, col2 = st.columns(2)

            with col1:
                st.markdown("**Storyboard**")
                if storyboard:
                    st.image(
                        storyboard.image_bytes,
                        caption=f"Storyboard for scene {scene.scene_number}",
                        width="stretch",
                    )
                elif pipeline.error:
                    st.caption("Not generated")
                else:
                    st.caption("Generating...")

            with col2:
                st.markdown("**Video**")
                if video:
                    st.video(video.video_bytes, format=video.mime_type)
                elif pipeline.error:
                    st.caption("Not generated")
                elif storyboard:
                    st.caption("Generating...")
                else:
                    st.caption("Waiting for storyboard...")

            if video and interactive:
                st.download_button(
                    f"Download Scene {scene.scene_number}",
                    data=video.video_bytes,
                    file_name=video.file_name,
                    mime=video.mime_type,
                    key=f"download_scene_{scene.scene_number}",
                )


def render_error(message: str) -> None:
    st.error(f"**An Error Occurred**\n\n{message}")
