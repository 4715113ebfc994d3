"""Bearer token verification and identity resolution.

Provides a FastAPI dependency ``get_current_user`` that resolves the acting
identity for a request from ``Authorization: Bearer <token>``. The result is
optional on purpose: a request without the header is anonymous (``None``) and
the guard pipeline decides whether that is acceptable for the operation.

Two verification modes:
* Shared secret (``AUTH_SECRET_KEY`` set): HS256 tokens verified locally.
* JWKS (default): RS256 tokens checked against
  ``https://<AUTH_DOMAIN>/.well-known/jwks.json``, fetched with httpx and
  cached for ``AUTH_JWKS_CACHE_TTL`` seconds.

Either way python-jose does the JWT work. The ``sub`` claim is the stable
external user id; ``email`` is used to auto-provision a local user record the
first time a subject is seen.
"""
from __future__ import annotations

import logging
import time
import uuid
import httpx
from functools import lru_cache
from typing import Any, Optional
from jose import jwk, jwt
from jose.exceptions import JOSEError
from jose.utils import base64url_decode
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from forum.core.config import Settings, get_settings
from forum.core.errors import UnauthenticatedError
from forum.db.session import get_db
from forum.models.user import User
from forum.repositories import user as user_repo

logger = logging.getLogger(__name__)

SHARED_SECRET_ALGORITHM = "HS256"


class JWKSCache:
    def __init__(self, ttl_seconds: int) -> None:
        self._ttl = ttl_seconds
        self._expires_at = 0.0
        self._jwks: dict[str, Any] | None = None

    async def get(self, domain: str) -> dict[str, Any]:
        now = time.time()
        if self._jwks and now < self._expires_at:
            return self._jwks
        url = f"https://{domain}/.well-known/jwks.json"
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            data = resp.json()
        self._jwks = data
        self._expires_at = now + self._ttl
        return data


@lru_cache
def _jwks_cache(ttl: int) -> JWKSCache:
    return JWKSCache(ttl)


def _verify_shared_secret(token: str, secret: str, settings: Settings) -> dict[str, Any]:
    return jwt.decode(
        token,
        secret,
        algorithms=[SHARED_SECRET_ALGORITHM],
        audience=settings.auth0_api_audience,
        issuer=settings.auth_issuer,
    )


async def _verify_jwks(token: str, settings: Settings) -> dict[str, Any]:
    domain = settings.auth_domain_host
    if not domain:
        raise UnauthenticatedError("Token verification is not configured")
    jwks = await _jwks_cache(settings.auth_jwks_cache_ttl_seconds).get(domain)
    kid = jwt.get_unverified_header(token).get("kid")
    if not kid:
        raise UnauthenticatedError("Missing kid header")
    key = next((k for k in jwks.get("keys", []) if k.get("kid") == kid), None)
    if not key:
        raise UnauthenticatedError("Unknown kid")
    message, encoded_signature = token.rsplit(".", 1)
    if not jwk.construct(key).verify(message.encode(), base64url_decode(encoded_signature.encode())):
        raise UnauthenticatedError("Invalid signature")
    return jwt.decode(
        token,
        key,
        algorithms=settings.auth_algorithms,
        audience=settings.auth0_api_audience,
        issuer=settings.auth_issuer,
    )


async def verify_token(token: str, settings: Settings) -> dict[str, Any]:
    """Return verified claims or raise UnauthenticatedError."""
    if token.count(".") != 2:
        raise UnauthenticatedError("Malformed bearer token")
    try:
        if settings.auth_secret_key is not None:
            return _verify_shared_secret(token, settings.auth_secret_key.get_secret_value(), settings)
        return await _verify_jwks(token, settings)
    except JOSEError as e:
        raise UnauthenticatedError("Invalid bearer token") from e
    except httpx.HTTPError as e:
        logger.warning("jwks fetch failed", extra={"error": str(e)})
        raise UnauthenticatedError("Token verification failed") from e


def subject_to_user_id(sub: str) -> uuid.UUID:
    """Map an external subject to a local UUID.

    Subjects that already are UUIDs are used as-is; anything else gets a
    deterministic UUIDv5.
    """
    try:
        return uuid.UUID(sub)
    except ValueError:
        return uuid.uuid5(uuid.NAMESPACE_URL, f"auth:{sub}")


async def resolve_user(session: AsyncSession, claims: dict[str, Any]) -> User:
    external_sub = claims.get("sub")
    if not external_sub:
        raise UnauthenticatedError("Missing sub claim")
    user_id = subject_to_user_id(str(external_sub))
    user = await user_repo.get_by_id(session, user_id)
    if user:
        return user
    email = claims.get("email")
    if not email:
        raise UnauthenticatedError("User not provisioned and email missing")
    if await user_repo.get_by_email(session, email):
        raise UnauthenticatedError("Email already bound to another identity")
    user = await user_repo.create(session, email=email, id=user_id)
    await session.commit()
    logger.info("user provisioned", extra={"user_id": user_id})
    return user


async def get_current_user(
    authorization: Optional[str] = Header(None),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    """Return the authenticated local User, or None for anonymous requests.

    A present but unverifiable Authorization header is an error (401), not a
    silent downgrade to anonymous.
    """
    if not settings.auth_enabled or not authorization:
        return None
    if not authorization.startswith("Bearer "):
        raise UnauthenticatedError("Missing bearer token")
    token = authorization[len("Bearer "):].strip()
    try:
        claims = await verify_token(token, settings)
    except UnauthenticatedError as e:
        logger.info("token rejected", extra={"reason": e.detail})
        raise
    return await resolve_user(session, claims)


__all__ = ["get_current_user", "verify_token", "resolve_user", "subject_to_user_id"]
