"""
Access-token verification for the hosted auth provider.

Tokens are HS256 JWTs; the subject claim is the user id that every
``created_by`` / ``user_id`` column refers to.
"""

from typing import Any, Dict, Optional

import jwt

from animeforge.core.config import settings
from animeforge.core.errors import AuthenticationError


def decode_access_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """
    Decode and validate an access token.

    Raises:
        AuthenticationError: If the token is malformed, expired or lacks a subject
    """
    secret = settings.SUPABASE_JWT_SECRET if secret is None else secret

    if not secret:
        try:
            payload = jwt.decode(token, options={"verify_signature": False})
        except jwt.DecodeError as e:
            raise AuthenticationError(f"Invalid token format: {e}")
    else:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[settings.JWT_ALGORITHM],
                audience=settings.JWT_AUDIENCE,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Session expired, please sign in again")
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid token: {e}")

    if not payload.get("sub"):
        raise AuthenticationError("User ID not found in token")
    return payload


def display_name_from_claims(claims: Dict[str, Any]) -> Optional[str]:
    metadata = claims.get("user_metadata") or {}
    name = metadata.get("display_name") or metadata.get("full_name")
    if name:
        return name
    email = claims.get("email")
    if email:
        return email.split("@", 1)[0]
    return None
