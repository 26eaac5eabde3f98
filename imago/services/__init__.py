"""Services for the application."""

from .extractor import decode_inline_data, extract_image_data
from .gemini import GeminiClient, model_sequence
from .image_handler import ImageHandler
from .session import close_session, get_session

__all__ = [
    "GeminiClient",
    "ImageHandler",
    "close_session",
    "decode_inline_data",
    "extract_image_data",
    "get_session",
    "model_sequence",
]
