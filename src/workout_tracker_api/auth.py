"""Caller identification for the detection endpoints.

A request carries either an ``X-API-Key`` header (``key`` or ``key:user_id``)
or a Clerk session token as ``Authorization: Bearer <jwt>``. The resolved user
id is forwarded to the AI provider for usage tracking.
"""
import logging
import os
from functools import lru_cache
from typing import Optional

import jwt
from fastapi import Header, HTTPException

logger = logging.getLogger(__name__)

# User id for API keys sent without a ":user_id" suffix
SERVICE_USER_ID = "admin"
BEARER_PREFIX = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail)


@lru_cache(maxsize=None)
def _jwks_client_for(domain: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(f"https://{domain}/.well-known/jwks.json")


def get_jwks_client() -> Optional[jwt.PyJWKClient]:
    """JWKS client for the CLERK_DOMAIN currently configured, or None."""
    domain = os.getenv("CLERK_DOMAIN", "").strip()
    return _jwks_client_for(domain) if domain else None


def user_from_api_key(api_key: str) -> str:
    configured = {key.strip() for key in os.getenv("API_KEYS", "").split(",") if key.strip()}
    if not configured:
        logger.warning("X-API-Key sent but API_KEYS is empty")
        raise _unauthorized("API key authentication not configured")

    key, _, user_id = api_key.partition(":")
    if key not in configured:
        raise _unauthorized("Invalid API key")
    return user_id or SERVICE_USER_ID


def user_from_bearer_token(authorization: str) -> str:
    """Verify a Clerk RS256 token and return its subject."""
    if not authorization.startswith(BEARER_PREFIX):
        raise _unauthorized("Invalid authorization header format")

    jwks_client = get_jwks_client()
    if jwks_client is None:
        raise HTTPException(
            status_code=500,
            detail="JWT validation not configured (missing CLERK_DOMAIN)",
        )

    token = authorization[len(BEARER_PREFIX):].strip()
    try:
        signing_key = jwks_client.get_signing_key_from_jwt(token)
        claims = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except jwt.PyJWKClientError as e:
        logger.warning(f"Could not fetch Clerk signing key: {e}")
        raise _unauthorized("Invalid token: signing key not found")
    except jwt.InvalidTokenError as e:
        raise _unauthorized(f"Invalid token: {e}")

    subject = claims.get("sub")
    if not subject:
        raise _unauthorized("Token missing user ID")
    return subject


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """FastAPI dependency returning the caller's user id. The API key wins when both are sent."""
    if x_api_key:
        return user_from_api_key(x_api_key)
    if authorization:
        return user_from_bearer_token(authorization)
    raise _unauthorized("Missing authentication. Provide Authorization header or X-API-Key.")
