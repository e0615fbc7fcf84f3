# property_authz/domains/auth/dependencies.py
import logging
from functools import lru_cache
from typing import Any, Optional

import jwt
from fastapi import Header
from jwt import PyJWKClient

from property_authz.core.settings import settings
from property_authz.shared.exceptions import AuthNotConfiguredError, InvalidTokenError
from property_authz.shared.permissions.types import GlobalRole, Identity

from .types import JwtPayload

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _jwks_client(supabase_url: str) -> PyJWKClient:
    return PyJWKClient(f"{supabase_url}/auth/v1/jwks")


def decode_access_token(token: str) -> JwtPayload:
    """
    Verify an access token.

    Uses JWT_SECRET (HS256) when configured, otherwise the Supabase JWKS
    endpoint (RS256).

    Raises:
        InvalidTokenError: If the token is invalid or expired
        AuthNotConfiguredError: If neither verification method is configured
    """
    if settings.JWT_SECRET:
        key: Any = settings.JWT_SECRET
        algorithms = ["HS256"]
    elif settings.SUPABASE_URL:
        try:
            client = _jwks_client(settings.SUPABASE_URL)
            key = client.get_signing_key_from_jwt(token).key
        except jwt.PyJWTError:
            raise InvalidTokenError("Invalid or expired token")
        algorithms = ["RS256"]
    else:
        raise AuthNotConfiguredError()

    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=algorithms,
            options={"verify_aud": False},
        )
    except jwt.PyJWTError:
        raise InvalidTokenError("Invalid or expired token")

    return JwtPayload(**dict(payload))


def identity_from_payload(payload: JwtPayload) -> Identity:
    """
    Build the caller identity from a verified token payload.

    The global role comes from `app_metadata`, which users cannot edit;
    anything other than "admin" is an ordinary user.
    """
    if not payload.sub:
        raise InvalidTokenError("Token has no subject")

    metadata = payload.app_metadata or {}
    role_claim = metadata.get(settings.ADMIN_ROLE_CLAIM)
    global_role = GlobalRole.admin if role_claim == "admin" else GlobalRole.user

    return Identity(user_id=payload.sub, email=payload.email, global_role=global_role)


def get_current_identity(authorization: Optional[str] = Header(None)) -> Identity:
    """
    Extracts and validates the bearer token from the Authorization header.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError("Missing token")

    token = authorization.split(" ", 1)[1]
    identity = identity_from_payload(decode_access_token(token))
    if identity.global_role == GlobalRole.admin:
        logger.info(f"Superuser request from {identity.user_id}")
    return identity
