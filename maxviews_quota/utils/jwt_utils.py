import jwt
import logging
from typing import Dict, Optional, Any, cast

logger = logging.getLogger(__name__)


def validate_jwt(
    token: str,
    secret: str,
    audience: str | None = None,
    algorithms: list[str] | None = None,
    verify_audience: bool = True,
) -> Optional[Dict[str, Any]]:
    """
    Validates a JWT token and returns its content as a dictionary.

    Args:
        token: The JWT token string to validate
        secret: The secret key used to sign the JWT
        audience: Expected audience, if any
        algorithms: List of allowed algorithms for decoding, defaults to ['HS256']
        verify_audience: Whether to verify the audience claim

    Returns:
        Dict containing the JWT payload if valid, None otherwise
    """
    if algorithms is None:
        algorithms = ["HS256"]

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=algorithms,
            audience=audience,
            options={"verify_exp": True, "verify_aud": verify_audience},
        )
        return cast(Dict[str, Any], payload)
    except jwt.ExpiredSignatureError:
        logger.warning("JWT validation failed: token has expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("JWT validation failed: %s", str(e))
        return None


def get_user_id(token_content: Dict[str, Any], key: str = "sub") -> Optional[str]:
    """
    Extracts the user id from the JWT content.

    Args:
        token_content: The decoded JWT payload
        key: The claim holding the user id

    Returns:
        The user id as a string if present, None otherwise
    """
    user_id = token_content.get(key)
    if user_id is None or user_id == "":
        return None
    return str(user_id)
