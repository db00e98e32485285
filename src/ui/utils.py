"""UI utility functions."""

import json
from datetime import datetime
from pathlib import PurePosixPath

import streamlit as st
import streamlit.components.v1 as components


def copy_to_clipboard(text: str) -> None:
    """Write *text* to the browser clipboard via a zero-height script."""
    components.html(
        f"<script>navigator.clipboard.writeText({json.dumps(text)});</script>",
        height=0,
    )


def flash(message: str, ok: bool = True) -> None:
    """Show a transient notification."""
    st.toast(message, icon="✅" if ok else "❌")


def display_name(file_path: str | None) -> str:
    """Last path component of a stored file path, for card titles."""
    if not file_path:
        return "Unknown File"
    return PurePosixPath(file_path.replace("\\", "/")).name or "Unknown File"


def format_timestamp(value: str | None) -> str:
    """Render an ISO timestamp from the API in human-readable form."""
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return value
