"""Concrete image-generation providers."""

from .gemini import GeminiImageProvider

__all__ = ["GeminiImageProvider"]
