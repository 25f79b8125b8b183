#!/usr/bin/env python3
"""
JWT authentication helpers.
Tokens are HS256-signed with JWT_SECRET and carry the caller id in `userId`.
Accepted from the `token` cookie (browser) or an `Authorization: Bearer` header.
"""

import logging
from typing import Optional, Dict, Any

import jwt
from fastapi import HTTPException, Request, status

from content_calendar import config

logger = logging.getLogger(__name__)

TOKEN_COOKIE_NAME = "token"


def get_token(request: Request) -> Optional[str]:
    token = request.cookies.get(TOKEN_COOKIE_NAME)
    if token:
        return token
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


def verify_jwt_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify a token and return its payload.
    Returns None if verification fails.
    """
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        logger.info("JWT token has expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.info("Invalid JWT token: %s", e)
        return None


def require_user_id(request: Request) -> str:
    """
    Require and return the authenticated user id.
    Raises HTTPException if the request carries no valid token.
    """
    if not config.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No JWT_SECRET configured",
        )

    token = get_token(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No Token Provided")

    payload = verify_jwt_token(token)
    if not payload or not payload.get("userId"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    return str(payload["userId"])
