"""Cookie-based user ID extractor that gets the user ID from the JWT `sub` claim."""

import logging
from typing import Optional

from starlette.requests import Request

from maxviews_quota.strategy.extractor.base import (
    UserIdExtractorStrategy,
    audience_from_forwarded_headers,
)
from maxviews_quota.utils.jwt_utils import get_user_id, validate_jwt

logger = logging.getLogger(__name__)


class CookieUserIdExtractor(UserIdExtractorStrategy):
    """
    A strategy to extract a user ID from a JWT token stored in a cookie.

    This extractor:
    1. Retrieves the cookie value from the request
    2. Validates the JWT token
    3. Returns the user ID from the `sub` claim of the validated token
    """

    def __init__(
        self,
        cookie_name: str,
        jwt_secret: str,
        jwt_algorithms: Optional[list[str]] = None,
        verify_audience: bool = True,
    ):
        """
        Initialize the cookie user ID extractor.

        Args:
            cookie_name: The name of the cookie containing the JWT token
            jwt_secret: The secret key used to validate the JWT token
            jwt_algorithms: List of allowed algorithms for decoding, defaults to ['HS256']
            verify_audience: Whether to verify the JWT audience claim
        """
        self.cookie_name = cookie_name
        self.jwt_secret = jwt_secret
        self.jwt_algorithms = jwt_algorithms
        self.verify_audience = verify_audience

    async def __call__(self, request: Request) -> Optional[str]:
        cookie_value = request.cookies.get(self.cookie_name)
        if not cookie_value:
            logger.debug("Cookie '%s' not found in request", self.cookie_name)
            return None

        token_content = validate_jwt(
            token=cookie_value,
            secret=self.jwt_secret,
            audience=audience_from_forwarded_headers(request),
            algorithms=self.jwt_algorithms,
            verify_audience=self.verify_audience,
        )
        if not token_content:
            logger.warning(
                "Failed to validate JWT token from cookie '%s'", self.cookie_name
            )
            return None

        user_id = get_user_id(token_content)
        if not user_id:
            logger.warning("User ID ('sub' claim) not found in validated token")
        return user_id

    def __str__(self) -> str:
        return f"CookieUserIdExtractor(cookie_name='{self.cookie_name}', verify_audience={self.verify_audience})"
