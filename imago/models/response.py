"""Response models for the Gemini generateContent endpoint."""

from typing import Annotated

from pydantic import BaseModel, Field


class InlineData(BaseModel):
    """Inline binary payload."""

    mimeType: str = Field(..., description="MIME type of the data")
    data: str = Field(..., description="Base64 encoded data")


class TextPart(BaseModel):
    """Text returned by the model."""

    text: str = Field(..., description="Text content")


class InlineDataPart(BaseModel):
    """Binary data returned by the model."""

    inlineData: InlineData = Field(..., description="Inline data")


# Text is tried first, matching how the API tags mixed parts.
ResponsePart = Annotated[TextPart | InlineDataPart, Field(union_mode="left_to_right")]


class CandidateContent(BaseModel):
    """Content of a candidate."""

    parts: list[ResponsePart] = Field(
        default_factory=list, description="Parts of the content"
    )


class SafetyRating(BaseModel):
    """Per-category safety rating."""

    category: str = Field(..., description="Harm category")
    probability: str = Field(..., description="Harm probability level")
    blocked: bool | None = Field(default=None, description="Whether it blocked output")


class Candidate(BaseModel):
    """Candidate response from the model."""

    content: CandidateContent | None = Field(
        default=None, description="Content of the candidate"
    )
    finishReason: str | None = Field(default=None, description="Reason for finishing")
    safetyRatings: list[SafetyRating] | None = Field(
        default=None, description="Safety ratings"
    )


class PromptFeedback(BaseModel):
    """Feedback on the prompt itself."""

    safetyRatings: list[SafetyRating] | None = Field(
        default=None, description="Safety ratings"
    )
    blockReason: str | None = Field(default=None, description="Block reason")


class UsageMetadata(BaseModel):
    """Usage metadata for the response."""

    promptTokenCount: int | None = Field(default=None, description="Prompt token count")
    candidatesTokenCount: int | None = Field(
        default=None, description="Candidates token count"
    )
    totalTokenCount: int | None = Field(default=None, description="Total token count")


class GenerateContentResponse(BaseModel):
    """Response model for generateContent endpoint."""

    candidates: list[Candidate] | None = Field(
        default=None, description="Candidates from generation"
    )
    promptFeedback: PromptFeedback | None = Field(
        default=None, description="Prompt feedback"
    )
    usageMetadata: UsageMetadata | None = Field(
        default=None, description="Usage metadata"
    )
