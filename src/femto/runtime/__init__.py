"""Telemetry and configuration shared by every layer."""

from .config import EditorConfig

__all__ = ["EditorConfig", "telemetry"]
