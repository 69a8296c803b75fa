"""
JWT helpers for the demo login flow.
"""
import jwt
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

JWT_ALGORITHM = 'HS256'
DEFAULT_ACCESS_TOKEN_EXPIRY = 900  # 15 minutes


def generate_access_token(secret_key: str, user_id: str, email: str, username: str = None,
                          expires_in: int = DEFAULT_ACCESS_TOKEN_EXPIRY) -> str:
    """
    Generate a JWT access token.

    Args:
        secret_key: HMAC signing key
        user_id: User identifier
        email: User email
        username: Optional username
        expires_in: Token lifetime in seconds

    Returns:
        Encoded JWT token
    """
    if not secret_key:
        raise ValueError("SECRET_KEY must be set for JWT token generation")

    now = datetime.now(timezone.utc)
    payload = {
        'user_id': user_id,
        'email': email,
        'username': username,
        'type': 'access',
        'iat': now,
        'exp': now + timedelta(seconds=expires_in)
    }

    return jwt.encode(payload, secret_key, algorithm=JWT_ALGORITHM)


def verify_token(secret_key: str, token: str, token_type: str = 'access') -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded token payload or None if invalid
    """
    if not secret_key:
        logger.error("SECRET_KEY not set, cannot verify token")
        return None

    try:
        payload = jwt.decode(token, secret_key, algorithms=[JWT_ALGORITHM])

        if payload.get('type') != token_type:
            logger.warning(f"Token type mismatch: expected {token_type}, got {payload.get('type')}")
            return None

        return payload
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        return None
