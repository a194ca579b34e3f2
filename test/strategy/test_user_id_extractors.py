"""
Tests for extracting the requesting user's id from JWT tokens.
"""

import time
from typing import Dict

import jwt
from starlette.datastructures import Headers
from starlette.requests import Request

from maxviews_quota.strategy.extractor.base import (
    NullUserIdExtractor,
    audience_from_forwarded_headers,
)
from maxviews_quota.strategy.extractor.bearer_token import (
    BearerTokenUserIdExtractor,
    extract_bearer_token,
)
from maxviews_quota.strategy.extractor.cookie_user_id import CookieUserIdExtractor

SECRET = "test-secret"


def make_token(claims: Dict[str, object], secret: str = SECRET) -> str:
    return jwt.encode({"exp": int(time.time()) + 60, **claims}, secret, algorithm="HS256")


def make_request(headers: Dict[str, str]) -> Request:
    return Request({"type": "http", "headers": Headers(headers).raw})


async def test_cookie_user_id() -> None:
    request = make_request({"cookie": f"maxviews_token={make_token({'sub': '7'})}"})
    extractor = CookieUserIdExtractor(cookie_name="maxviews_token", jwt_secret=SECRET)

    assert await extractor(request) == "7"


async def test_cookie_missing() -> None:
    extractor = CookieUserIdExtractor(cookie_name="maxviews_token", jwt_secret=SECRET)

    assert await extractor(make_request({})) is None


async def test_cookie_signed_with_other_secret() -> None:
    token = make_token({"sub": "7"}, secret="other-secret")
    request = make_request({"cookie": f"maxviews_token={token}"})
    extractor = CookieUserIdExtractor(cookie_name="maxviews_token", jwt_secret=SECRET)

    assert await extractor(request) is None


async def test_cookie_audience_from_forwarded_headers() -> None:
    token = make_token({"sub": "7", "aud": "https://lms.example.org"})
    request = make_request(
        {
            "cookie": f"maxviews_token={token}",
            "x-forwarded-host": "lms.example.org",
            "x-forwarded-proto": "https",
            "x-forwarded-port": "443",
        }
    )
    extractor = CookieUserIdExtractor(cookie_name="maxviews_token", jwt_secret=SECRET)

    assert await extractor(request) == "7"


async def test_bearer_token_user_id() -> None:
    request = make_request({"Authorization": f"Bearer {make_token({'sub': '7'})}"})

    assert await BearerTokenUserIdExtractor(jwt_secret=SECRET)(request) == "7"


async def test_bearer_token_without_sub() -> None:
    request = make_request({"Authorization": f"Bearer {make_token({'name': 'x'})}"})

    assert await BearerTokenUserIdExtractor(jwt_secret=SECRET)(request) is None


def test_extract_bearer_token() -> None:
    assert extract_bearer_token(make_request({"Authorization": "Bearer abc"})) == "abc"
    assert extract_bearer_token(make_request({"Authorization": "Basic abc"})) is None
    assert extract_bearer_token(make_request({})) is None


def test_audience_from_forwarded_headers() -> None:
    request = make_request(
        {
            "x-forwarded-host": "lms.example.org",
            "x-forwarded-proto": "http",
            "x-forwarded-port": "8080",
        }
    )

    assert audience_from_forwarded_headers(request) == "http://lms.example.org:8080"
    assert audience_from_forwarded_headers(make_request({})) is None


async def test_null_user_id_extractor() -> None:
    assert await NullUserIdExtractor()(make_request({})) is None
