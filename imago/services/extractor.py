"""Turn a parsed generation response into image bytes or a typed failure."""

import base64
import binascii

from loguru import logger

from imago.errors import (
    ApiResponseError,
    DecodeError,
    NoImageDataError,
    SafetyFilterError,
)
from imago.models.response import (
    Candidate,
    GenerateContentResponse,
    InlineDataPart,
    TextPart,
)

FINISH_REASON_STOP = "STOP"
FINISH_REASON_IMAGE_SAFETY = "IMAGE_SAFETY"


def decode_inline_data(data: str) -> bytes:
    """Decode a standard, padded base64 payload."""
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(str(e)) from e


def _check_finish_reason(candidate: Candidate) -> None:
    reason = candidate.finishReason
    if reason is None or reason == FINISH_REASON_STOP:
        return

    blocked = [
        f"{rating.category}: {rating.probability}"
        for rating in candidate.safetyRatings or []
        if rating.blocked
    ]
    if blocked:
        raise SafetyFilterError(", ".join(blocked))

    if reason == FINISH_REASON_IMAGE_SAFETY:
        raise SafetyFilterError("Image content blocked by safety filters")

    # Other finish reasons may still carry a usable image.
    logger.warning(f"Generation finished with reason {reason}, inspecting content")


def extract_image_data(
    response: GenerateContentResponse,
) -> tuple[bytes, str | None]:
    """
    Extract the generated image from a response.

    Only the first candidate is considered. Prompt feedback is checked before
    any candidate, then the finish reason, then the parts in order: the first
    ``image/*`` inline part wins and the last text part seen before it is
    returned alongside.

    Returns:
        Tuple of (image_bytes, text)

    Raises:
        SafetyFilterError: The prompt or the output was blocked.
        NoImageDataError: The response carries nothing usable.
        ApiResponseError: The model answered with text only.
        DecodeError: The image payload is not valid base64.
    """
    feedback = response.promptFeedback
    if feedback is not None and feedback.blockReason:
        raise SafetyFilterError(f"Request blocked: {feedback.blockReason}")

    if not response.candidates:
        raise NoImageDataError()

    candidate = response.candidates[0]
    _check_finish_reason(candidate)

    if candidate.content is None:
        raise NoImageDataError()

    text_response = None
    for part in candidate.content.parts:
        if isinstance(part, InlineDataPart):
            if part.inlineData.mimeType.startswith("image/"):
                image_bytes = decode_inline_data(part.inlineData.data)
                logger.debug(
                    f"Found {part.inlineData.mimeType} part ({len(image_bytes)} bytes)"
                )
                return image_bytes, text_response
            logger.debug(f"Skipping non-image part: {part.inlineData.mimeType}")
        elif isinstance(part, TextPart):
            text_response = part.text
        else:
            raise TypeError(f"Unhandled response part: {type(part).__name__}")

    if text_response is not None:
        raise ApiResponseError(
            f"Model returned text instead of image: {text_response}"
        )

    raise NoImageDataError()
