"""
History component: list transcriptions with play, copy and delete.

Only one entry plays at a time: the :class:`PlaybackController` in
session state holds the playing id and is the sole source of truth.
"""

import logging

import streamlit as st

from src.ui.api_client import APIError, get_api_client
from src.ui.playback import PlaybackController
from src.ui.utils import copy_to_clipboard, display_name, flash, format_timestamp

logger = logging.getLogger(__name__)


def _playback() -> PlaybackController:
    if "playback" not in st.session_state:
        st.session_state.playback = PlaybackController()
    return st.session_state.playback


def load_history(force: bool = False) -> list[dict]:
    """Fetch entries once per visit; ``force`` refetches."""
    if force or st.session_state.get("history") is None:
        client = get_api_client(st.session_state.api_base_url)
        try:
            st.session_state.history = client.list_history()
        except APIError as exc:
            logger.warning("Failed to fetch history: %s", exc.message)
            flash("Failed to fetch history.", ok=False)
            st.session_state.history = []
    return st.session_state.history


def delete_entry(entry_id: str) -> bool:
    """Delete on the server, then drop the entry from the displayed list."""
    client = get_api_client(st.session_state.api_base_url)
    try:
        client.delete_entry(entry_id)
    except APIError as exc:
        logger.warning("Failed to delete %s: %s", entry_id, exc.message)
        flash("Failed to delete. Try again.", ok=False)
        return False
    st.session_state.history = [
        item for item in st.session_state.get("history") or [] if item["_id"] != entry_id
    ]
    _playback().forget(entry_id)
    flash("Deleted successfully!")
    return True


def _render_card(item: dict) -> None:
    entry_id = item["_id"]
    playback = _playback()
    client = get_api_client(st.session_state.api_base_url)

    with st.container(border=True):
        st.markdown(f"**{display_name(item.get('filePath'))}**")

        col1, col2, col3 = st.columns(3)
        with col1:
            label = "Pause" if playback.is_playing(entry_id) else "Play"
            if st.button(label, key=f"play-{entry_id}", use_container_width=True):
                playback.toggle(entry_id)
                st.rerun()
        with col2:
            if st.button("Copy", key=f"copy-{entry_id}", use_container_width=True):
                copy_to_clipboard(item.get("text") or "")
                flash("Transcription copied!")
        with col3:
            if st.button("Delete", key=f"delete-{entry_id}", use_container_width=True):
                if delete_entry(entry_id):
                    st.rerun()

        if playback.is_playing(entry_id):
            audio = client.download_audio(item.get("filePath") or "")
            if audio is None:
                st.warning("Audio file missing.")
            else:
                st.audio(audio, autoplay=True)

        st.write(item.get("text") or "No transcription available.")
        st.caption(format_timestamp(item.get("createdAt")))


def render_history() -> None:
    """Render the history grid."""
    if st.button("Refresh"):
        load_history(force=True)

    history = load_history()
    if not history:
        st.info("No transcriptions found.")
        return

    columns = st.columns(3)
    for index, item in enumerate(history):
        with columns[index % 3]:
            _render_card(item)
