"""VoiceScribe: speech-to-text web application."""
