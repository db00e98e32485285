"""
Transcription module - Speech-to-text abstraction layer.

Factory function for creating STT instances based on provider configuration.
"""

from .base import NO_SPEECH_TEXT, UNABLE_TO_TRANSCRIBE_TEXT, BaseSTT

__all__ = ["NO_SPEECH_TEXT", "UNABLE_TO_TRANSCRIBE_TEXT", "BaseSTT", "create_stt"]


def create_stt(provider: str = "deepgram", **kwargs) -> BaseSTT:
    """
    Factory function to create STT instance based on provider.

    Args:
        provider: STT provider name ("deepgram")
        **kwargs: Provider-specific configuration

    Returns:
        BaseSTT implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "deepgram":
        from .deepgram import DeepgramSTT
        return DeepgramSTT(**kwargs)
    else:
        raise ValueError(f"Unknown STT provider: {provider}")
