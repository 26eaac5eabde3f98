"""Imago - generate images from text prompts with the Gemini API."""

__version__ = "0.1.0"
