"""Service layer helpers (settings persistence)."""

from .settings import OUTPUT_FORMAT_CHOICES, Settings, SettingsStore

__all__ = ["OUTPUT_FORMAT_CHOICES", "Settings", "SettingsStore"]
