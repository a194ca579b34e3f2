import logging
from typing import Optional

from starlette.requests import Request

from maxviews_quota.strategy.extractor.base import (
    UserIdExtractorStrategy,
    audience_from_forwarded_headers,
)
from maxviews_quota.utils.jwt_utils import get_user_id, validate_jwt

logger = logging.getLogger(__name__)


def extract_bearer_token(request: Request) -> Optional[str]:
    """Return the token of an `Authorization: Bearer <token>` header, if any."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]


class BearerTokenUserIdExtractor(UserIdExtractorStrategy):
    """
    Extract the user ID from a JWT bearer token.

    The token is read from the standard Authorization header, validated, and
    its `sub` claim returned.
    """

    def __init__(
        self,
        jwt_secret: str,
        jwt_algorithms: Optional[list[str]] = None,
        verify_audience: bool = True,
    ):
        self.jwt_secret = jwt_secret
        self.jwt_algorithms = jwt_algorithms
        self.verify_audience = verify_audience

    async def __call__(self, request: Request) -> Optional[str]:
        token = extract_bearer_token(request)
        if not token:
            return None

        token_content = validate_jwt(
            token=token,
            secret=self.jwt_secret,
            audience=audience_from_forwarded_headers(request),
            algorithms=self.jwt_algorithms,
            verify_audience=self.verify_audience,
        )
        if not token_content:
            return None
        return get_user_id(token_content)

    def __str__(self) -> str:
        return f"BearerTokenUserIdExtractor(verify_audience={self.verify_audience})"
