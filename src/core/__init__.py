"""Core configuration, exceptions and shared models."""
