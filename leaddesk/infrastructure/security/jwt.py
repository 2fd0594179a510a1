"""Bearer tokens naming the calling staff account (python-jose, HS256 by default).

The search API only relies on ``sub`` (an app_user id) and ``exp``; any
other claim is carried through untouched.
"""

from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from leaddesk.core.config import get_settings
from leaddesk.shared.utils.datetime import utc_now


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
    extra_claims: Mapping[str, Any] | None = None,
) -> str:
    """Sign a token for subject, valid for expires_delta (settings default otherwise)."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**(extra_claims or {}), "sub": subject, "exp": utc_now() + expires_delta}
    return jwt.encode(
        claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode token and return its claims.

    Raises:
        ValueError: Bad signature, expired, malformed, or no usable ``sub``/``exp``.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not isinstance(claims.get("sub"), str) or not claims["sub"]:
        raise ValueError("Token subject must be a non-empty user id")
    return claims
