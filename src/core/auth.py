"""
Supabase JWT Authentication Module.

Browsing is anonymous; cart mutations need a signed-in shopper. The
`require_auth` dependency verifies the Supabase access token and yields
the shopper.

Usage:
    from core.auth import require_auth, SupabaseUser

    @router.post("/cart/items")
    async def add_item(user: SupabaseUser = Depends(require_auth)):
        user_id = user.id
"""

from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.settings import Settings, get_settings


security = HTTPBearer(
    scheme_name="Supabase JWT",
    description="Access token from Supabase Auth.",
    auto_error=False,
)


@dataclass
class SupabaseUser:
    """
    Authenticated shopper from a Supabase JWT.

    Attributes:
        id: User's UUID (from 'sub' claim)
        email: User's email address
        role: Postgres role (usually 'authenticated')
        is_anonymous: True if anonymous auth
    """
    id: str
    email: Optional[str] = None
    role: str = "authenticated"
    is_anonymous: bool = False


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_jwt(token: str, settings: Settings) -> dict:
    """
    Verify and decode a Supabase JWT token.

    Raises:
        HTTPException: 401 if the token is invalid, expired, or malformed,
                       500 if no JWT secret is configured
    """
    if not settings.supabase_jwt_secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication is not configured",
        )

    try:
        return jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience="authenticated",
            options={
                "verify_exp": True,
                "verify_aud": True,
                "require": ["sub", "exp", "aud"],
            }
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidAudienceError:
        raise _unauthorized("Invalid token audience")
    except jwt.InvalidTokenError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")


def extract_user(payload: dict) -> SupabaseUser:
    """Build a SupabaseUser from a verified JWT payload."""
    return SupabaseUser(
        id=payload["sub"],
        email=payload.get("email"),
        role=payload.get("role", "authenticated"),
        is_anonymous=payload.get("is_anonymous", False),
    )


async def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> SupabaseUser:
    """
    FastAPI dependency that requires authentication.

    Raises 401 if no valid token is provided.
    """
    if not credentials or not credentials.credentials:
        raise _unauthorized("Please login to add items to cart")

    payload = verify_jwt(credentials.credentials, settings)
    return extract_user(payload)
