"""
Amplitude feedback for the recorder.

Mirrors what a browser ``AnalyserNode`` does: for every animation frame
take an FFT of the most recent samples, map magnitudes to 0..255 bytes,
and average them. The normalised level drives a pulsing glow and a bar
meter. Purely cosmetic.
"""

import io
import logging
from collections.abc import Iterator

import numpy as np
import soundfile as sf

logger = logging.getLogger(__name__)

FRAME_RATE = 60  # animation frames per second
FFT_SIZE = 256
# AnalyserNode defaults for the dB range mapped onto 0..255.
MIN_DECIBELS = -100.0
MAX_DECIBELS = -30.0


def decode_audio(audio_bytes: bytes) -> tuple[np.ndarray, int]:
    """Decode WAV/FLAC/OGG bytes to mono float32 samples.

    Returns:
        (samples, sample_rate). Stereo input is averaged to mono.
    """
    data, sample_rate = sf.read(io.BytesIO(audio_bytes), dtype="float32")
    if data.ndim > 1:
        data = data.mean(axis=1)
    return data, sample_rate


def frequency_level(window: np.ndarray) -> float:
    """Average frequency-domain energy of one window, normalised to 0..1."""
    if window.size == 0:
        return 0.0
    if window.size < FFT_SIZE:
        window = np.pad(window, (0, FFT_SIZE - window.size))
    window = window[-FFT_SIZE:] * np.blackman(FFT_SIZE)
    magnitude = np.abs(np.fft.rfft(window))[: FFT_SIZE // 2] / FFT_SIZE
    with np.errstate(divide="ignore"):
        decibels = 20 * np.log10(magnitude)
    scaled = (decibels - MIN_DECIBELS) / (MAX_DECIBELS - MIN_DECIBELS)
    byte_values = np.clip(np.nan_to_num(scaled, neginf=0.0) * 255, 0, 255)
    return float(byte_values.mean() / 255)


def glow_scale(level: float, strength: float = 0.5) -> float:
    """Scale factor for the radial glow (1.0 at silence)."""
    return 1.0 + strength * min(max(level, 0.0), 1.0)


def meter_bars(level: float, bars: int = 20) -> int:
    """Number of lit bars for a level in 0..1."""
    return round(min(max(level, 0.0), 1.0) * bars)


class AmplitudeAnalyser:
    """Produces one level per animation frame until released.

    Args:
        samples: Mono float samples.
        sample_rate: Samples per second.
        frame_rate: Frames per second of the visual loop.
    """

    def __init__(self, samples: np.ndarray, sample_rate: int, frame_rate: int = FRAME_RATE) -> None:
        self._samples = samples
        self._hop = max(int(sample_rate / frame_rate), 1)
        self._released = False

    @classmethod
    def from_bytes(cls, audio_bytes: bytes, frame_rate: int = FRAME_RATE) -> "AmplitudeAnalyser":
        samples, sample_rate = decode_audio(audio_bytes)
        return cls(samples, sample_rate, frame_rate)

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Stop the loop; further iteration yields nothing."""
        self._released = True

    def frames(self) -> Iterator[float]:
        for end in range(self._hop, len(self._samples) + 1, self._hop):
            if self._released:
                return
            yield frequency_level(self._samples[max(end - FFT_SIZE, 0) : end])

    def levels(self) -> list[float]:
        return list(self.frames())


def safe_levels(audio_bytes: bytes) -> list[float]:
    """Levels for display, or an empty list when the audio cannot be decoded."""
    try:
        analyser = AmplitudeAnalyser.from_bytes(audio_bytes)
    except (sf.LibsndfileError, RuntimeError, ValueError) as exc:
        logger.info("No level preview for this audio: %s", exc)
        return []
    try:
        return analyser.levels()
    finally:
        analyser.release()
