"""Request models for the Gemini generateContent endpoint."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TextPart(BaseModel):
    """Text part of outbound content. The only part type ever sent."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Prompt text")


class Content(BaseModel):
    """Content block made of ordered parts."""

    model_config = ConfigDict(frozen=True)

    parts: tuple[TextPart, ...] = Field(..., description="Parts of the content")


class GenerationConfig(BaseModel):
    """Generation configuration."""

    model_config = ConfigDict(frozen=True)

    responseModalities: tuple[Literal["IMAGE"], ...] = Field(
        default=("IMAGE",), description="Response modalities"
    )


class GenerateContentRequest(BaseModel):
    """Request model for generateContent endpoint."""

    model_config = ConfigDict(frozen=True)

    contents: tuple[Content, ...] = Field(..., description="Contents to generate from")
    generationConfig: GenerationConfig = Field(
        default_factory=GenerationConfig, description="Generation configuration"
    )


def build_request(prompt: str) -> GenerateContentRequest:
    """Build an image-only generation request for a single prompt."""
    return GenerateContentRequest(
        contents=(Content(parts=(TextPart(text=prompt),)),),
        generationConfig=GenerationConfig(responseModalities=("IMAGE",)),
    )
