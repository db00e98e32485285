"""
Recorder component: capture or pick audio, show levels, upload.

States: idle -> recording -> (paused <-> recording) -> stopped -> idle
The lifecycle lives in a :class:`Recorder` kept in ``st.session_state``;
this module only renders it.
"""

import logging

import streamlit as st

from src.ui.api_client import APIError, get_api_client
from src.ui.levels import glow_scale, meter_bars, safe_levels
from src.ui.recorder_state import Recorder, RecorderStatus, UploadGuard, format_elapsed
from src.ui.utils import flash

logger = logging.getLogger(__name__)

RECORDING_FILENAME = "recording.wav"
_METER_BARS = 20


def _recorder() -> Recorder:
    if "recorder" not in st.session_state:
        st.session_state.recorder = Recorder()
    return st.session_state.recorder


def _guard() -> UploadGuard:
    if "upload_guard" not in st.session_state:
        st.session_state.upload_guard = UploadGuard()
    return st.session_state.upload_guard


def queue_upload(filename: str, data: bytes, mimetype: str, *, reset_recorder: bool = False) -> None:
    """Stash audio for upload and rerun so the next pass renders the loading state.

    Duplicate clicks while an upload is pending are ignored.
    """
    if not _guard().begin():
        return
    st.session_state._pending_upload = {
        "filename": filename,
        "data": data,
        "mimetype": mimetype,
        "reset_recorder": reset_recorder,
    }
    st.rerun()


def _process_pending_upload() -> None:
    """Submit the stashed audio, then release the guard and rerun."""
    pending = st.session_state.pop("_pending_upload", None)
    guard = _guard()
    if pending is None:
        guard.end()
        return
    client = get_api_client(st.session_state.api_base_url)
    try:
        with st.spinner("Transcribing..."):
            text = client.upload_audio(pending["filename"], pending["data"], pending["mimetype"])
    except APIError as exc:
        logger.warning("Upload failed: %s", exc.message)
        flash("Upload failed. Please try again.", ok=False)
    else:
        st.session_state.transcript_text = text
        if pending["reset_recorder"]:
            _recorder().reset()
        flash("Transcription complete!")
    finally:
        guard.end()
    st.rerun()


def _render_level_meter(audio_bytes: bytes) -> None:
    """Glow and bar meter driven by the frequency-domain level."""
    levels = safe_levels(audio_bytes)
    if not levels:
        return
    peak = max(levels)
    lit = meter_bars(peak, _METER_BARS)
    scale = glow_scale(peak)
    bars = "".join(
        '<div style="width:6px;height:%dpx;background:%s"></div>'
        % (8 + i, "#22c55e" if i < lit else "#e5e7eb")
        for i in range(_METER_BARS)
    )
    st.html(
        f"""
        <div style="display:flex;align-items:center;gap:16px">
          <div style="width:48px;height:48px;border-radius:50%;
                      background:radial-gradient(circle,#ef4444 0%,transparent 70%);
                      transform:scale({scale:.2f})"></div>
          <div style="display:flex;gap:2px;align-items:flex-end;height:32px">
            {bars}
          </div>
        </div>
        """
    )
    st.line_chart(levels, height=120)


@st.fragment(run_every=1)
def _render_timer() -> None:
    """Elapsed counter, refreshed once per second."""
    recorder = _recorder()
    label = "Paused" if recorder.status == RecorderStatus.paused else "Recording"
    st.metric(label, format_elapsed(recorder.elapsed_seconds()))


def render_recorder() -> None:
    """Render the recorder UI based on current session state."""
    status = _recorder().status

    if status == RecorderStatus.idle:
        _render_idle()
    elif status in (RecorderStatus.recording, RecorderStatus.paused):
        _render_recording()
    elif status == RecorderStatus.stopped:
        _render_stopped()

    transcript = st.session_state.get("transcript_text")
    if transcript:
        st.subheader("Transcription")
        st.code(transcript, language=None)

    # Buttons above were drawn disabled; now do the work.
    if _guard().loading:
        _process_pending_upload()


def _render_idle() -> None:
    """Start a recording, or upload an existing file."""
    recorder = _recorder()
    loading = _guard().loading

    if st.button("Start Recording", type="primary", disabled=loading):
        recorder.start()
        st.rerun()

    st.divider()
    selected = st.file_uploader(
        "Or choose an audio file", type=None, accept_multiple_files=False, disabled=loading
    )
    if st.button("Upload File", disabled=loading):
        if selected is None:
            flash("Select an audio file first.", ok=False)
            return
        queue_upload(selected.name, selected.getvalue(), selected.type or "audio/wav")


def _render_recording() -> None:
    """Capture audio with the browser microphone; pause/resume the counter."""
    recorder = _recorder()
    _render_timer()

    audio = st.audio_input("Microphone")

    col1, col2 = st.columns(2)
    with col1:
        label = "Resume" if recorder.status == RecorderStatus.paused else "Pause"
        if st.button(label, use_container_width=True):
            recorder.toggle_pause()
            st.rerun()
    with col2:
        if st.button("Stop", type="primary", use_container_width=True):
            if audio is None:
                flash("Nothing recorded yet.", ok=False)
                return
            recorder.stop(audio.getvalue())
            st.rerun()


def _render_stopped() -> None:
    """Preview the finalized recording and submit it."""
    recorder = _recorder()
    loading = _guard().loading

    st.caption(f"Recorded {format_elapsed(recorder.elapsed_seconds())}")
    st.audio(recorder.blob, format="audio/wav")
    _render_level_meter(recorder.blob)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Upload Recording", type="primary", disabled=loading, use_container_width=True):
            if not recorder.blob:
                flash("Record something first.", ok=False)
                return
            queue_upload(RECORDING_FILENAME, recorder.blob, "audio/wav", reset_recorder=True)
    with col2:
        if st.button("Reset", disabled=loading, use_container_width=True):
            recorder.reset()
            st.session_state.transcript_text = ""
            st.rerun()
