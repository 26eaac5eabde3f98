"""HTTP session management."""

from curl_cffi.requests import AsyncSession

from imago.config import settings


_session: AsyncSession | None = None


async def get_session() -> AsyncSession:
    """Get or create the shared async session.

    The session carries the proxy and the connect/overall timeouts, which bound
    the whole model-fallback loop.
    """
    global _session
    if _session is None:
        _session = AsyncSession(
            timeout=(settings.connect_timeout, settings.timeout),
            proxy=settings.proxy,
        )
    return _session


async def close_session() -> None:
    """Close the shared async session."""
    global _session
    if _session is not None:
        await _session.close()
        _session = None
