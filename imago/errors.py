"""Error types raised while generating, saving and previewing images."""


class ImagoError(Exception):
    """Base class for every error surfaced to the command line."""

    @property
    def is_retryable(self) -> bool:
        """Whether retrying the same call may succeed (network/server errors)."""
        return False


class MissingApiKeyError(ImagoError):
    """No API key was given on the command line or in the environment."""

    def __init__(self):
        super().__init__(
            "API key not found. Please set GEMINI_API_KEY environment variable"
        )


class NetworkError(ImagoError):
    """The request never got an HTTP response."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Network error: {message}")

    @property
    def is_retryable(self) -> bool:
        """Network errors are always retryable."""
        return True


class RequestTimeoutError(NetworkError):
    """The request exceeded the session timeout."""

    def __init__(self, message: str = "Request timeout"):
        super().__init__(message)


class ApiError(ImagoError):
    """Non-success status other than 404; the fallback loop stops here."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"API error (status {status}): {message}")

    @property
    def is_retryable(self) -> bool:
        """Only server-side (5xx) failures are retryable."""
        return 500 <= self.status <= 599


class ApiResponseError(ImagoError):
    """The API answered, but not with a usable image."""

    def __init__(self, message: str, tried: list[str] | None = None):
        self.message = message
        self.tried = tried or []
        super().__init__(f"API response error: {message}")


class ResponseFormatError(ApiResponseError):
    """The endpoint answered with a body that is not a generation response."""

    def __init__(self, message: str):
        self.message = message
        self.tried = []
        ImagoError.__init__(self, f"Invalid response format: {message}")


class SafetyFilterError(ImagoError):
    """The prompt or the generated image was blocked by safety filters."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Safety filter blocked image generation. Reason: {reason}"
        )


class NoImageDataError(ImagoError):
    """The response carries no image data."""

    def __init__(self):
        super().__init__("No image data found in response")


class DecodeError(ImagoError):
    """Inline image data is not valid base64."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Base64 decoding error: {message}")


class ImageError(ImagoError):
    """The generated bytes could not be decoded as an image."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Image processing error: {message}")


class DisplayError(ImagoError):
    """The terminal preview failed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Terminal display error: {message}")


class OutputError(ImagoError):
    """The image could not be written to disk."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"File I/O error: {message}")
