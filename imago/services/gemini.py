"""Gemini image generation client with model fallback."""

from collections.abc import Iterable, Iterator

from curl_cffi.requests import AsyncSession
from curl_cffi.requests.exceptions import RequestException, Timeout
from loguru import logger
from pydantic import ValidationError

from imago.config import settings
from imago.errors import (
    ApiError,
    ApiResponseError,
    NetworkError,
    RequestTimeoutError,
    ResponseFormatError,
)
from imago.models.request import GenerateContentRequest, build_request
from imago.models.response import GenerateContentResponse
from imago.services.extractor import extract_image_data

MODEL_NOT_FOUND = 404


def model_sequence(primary: str, fallbacks: Iterable[str]) -> Iterator[str]:
    """Yield the primary model, then each fallback not yet yielded, in order."""
    seen = set()
    for model in [primary, *fallbacks]:
        if model in seen:
            continue
        seen.add(model)
        yield model


class GeminiClient:
    """Client for the Gemini generateContent image API."""

    def __init__(
        self,
        session: AsyncSession,
        api_key: str,
        model: str | None = None,
        fallbacks: Iterable[str] | None = None,
        base_api: str | None = None,
    ):
        self.session = session
        self.api_key = api_key
        self.model = model or settings.gemini_model
        self.fallbacks = list(
            settings.fallback_models if fallbacks is None else fallbacks
        )
        self.base_api = (base_api or settings.gemini_base_api).rstrip("/")

    async def generate_image(self, prompt: str) -> tuple[bytes, str | None]:
        """
        Generate an image from a text prompt.

        Returns:
            Tuple of (image_bytes, text) where text is whatever the model
            said alongside the image, if anything.
        """
        request = build_request(prompt)
        response = await self.send_request(request)
        return extract_image_data(response)

    def _endpoint(self, model: str) -> str:
        return f"{self.base_api}/{model}:generateContent?key={self.api_key}"

    async def send_request(
        self, request: GenerateContentRequest
    ) -> GenerateContentResponse:
        """
        Submit the request, falling back to the next model on 404.

        Attempts are strictly sequential. Any status other than success or 404
        stops the loop with ApiError, and an unparseable success body stops it
        with ResponseFormatError.
        """
        body = request.model_dump(mode="json")
        tried = []

        for model in model_sequence(self.model, self.fallbacks):
            tried.append(model)
            logger.info(f"Requesting image from model: {model}")

            try:
                response = await self.session.post(
                    url=self._endpoint(model),
                    headers={"Content-Type": "application/json"},
                    json=body,
                )
            except Timeout as e:
                logger.error(f"Request timeout for model {model}: {e}")
                raise RequestTimeoutError() from e
            except RequestException as e:
                logger.error(f"Request to model {model} failed: {e}")
                raise NetworkError(str(e)) from e

            status = response.status_code
            if 200 <= status < 300:
                return self._parse_response(response.text)

            if status == MODEL_NOT_FOUND:
                logger.warning(f"Model {model} not available, trying next fallback")
                continue

            logger.error(
                f"API request failed - model: {model}, status: {status}, "
                f"response: {response.text[:1024]}"
            )
            raise ApiError(status, response.text)

        raise ApiResponseError(
            f"No available image model found. Tried: {', '.join(tried)}",
            tried=tried,
        )

    @staticmethod
    def _parse_response(text: str) -> GenerateContentResponse:
        try:
            return GenerateContentResponse.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Invalid response body: {text[:500] if text else 'empty'}")
            raise ResponseFormatError(f"Failed to parse API response: {e}") from e
