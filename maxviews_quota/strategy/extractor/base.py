from typing import Optional, Protocol

from starlette.requests import Request


class UserIdExtractorStrategy(Protocol):
    """
    Protocol for user id extraction strategies.
    This protocol defines a method for finding the requesting user's id.
    """

    async def __call__(self, request: Request) -> Optional[str]: ...


class NullUserIdExtractor(UserIdExtractorStrategy):
    """
    A null extractor strategy that always returns None.
    This is used when no JWT secret is configured, so every request is anonymous.
    """

    async def __call__(self, request: Request) -> None:
        """Always return None regardless of the request."""
        return None

    def __str__(self) -> str:
        return "NullUserIdExtractor()"


def audience_from_forwarded_headers(request: Request) -> Optional[str]:
    """Build the expected JWT audience from the reverse proxy's forwarded headers."""
    fwd_host = request.headers.get("x-forwarded-host")
    fwd_proto = request.headers.get("x-forwarded-proto")
    fwd_port = request.headers.get("x-forwarded-port")

    if not (fwd_host and fwd_proto):
        return None

    port_part = f":{fwd_port}" if fwd_port and fwd_port not in ["80", "443"] else ""
    return f"{fwd_proto}://{fwd_host}{port_part}"
