"""Data models for the application."""

from .request import GenerateContentRequest, Content, GenerationConfig, build_request
from .response import (
    GenerateContentResponse,
    Candidate,
    CandidateContent,
    InlineData,
    InlineDataPart,
    PromptFeedback,
    ResponsePart,
    SafetyRating,
    TextPart,
    UsageMetadata,
)

__all__ = [
    "GenerateContentRequest",
    "Content",
    "GenerationConfig",
    "build_request",
    "GenerateContentResponse",
    "Candidate",
    "CandidateContent",
    "InlineData",
    "InlineDataPart",
    "PromptFeedback",
    "ResponsePart",
    "SafetyRating",
    "TextPart",
    "UsageMetadata",
]
