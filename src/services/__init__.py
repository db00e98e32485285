"""Service layer: storage, transcription and request pipelines."""
