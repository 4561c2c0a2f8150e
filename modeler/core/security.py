import hashlib
import logging
import time
import uuid
from typing import Optional

import jwt

from modeler.config import settings

logger = logging.getLogger(__name__)


def generate_salt() -> str:
    return str(uuid.uuid4())


def hash_password(password: str, salt: str) -> str:
    """Hex SHA-256 of password followed by salt."""
    return hashlib.sha256((password + salt).encode("utf-8")).hexdigest()


def verify_password(password: str, salt: str, hashed: str) -> bool:
    return hash_password(password, salt) == hashed


def issue_access_token(user_id: str) -> str:
    now = int(time.time())
    body = {
        "sub": user_id,
        "iat": now,
        "exp": now + settings.access_token_ttl_hours * 3600,
    }
    return jwt.encode(body, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Optional[str]:
    """Return the user id carried by a valid session token, else None."""
    try:
        decoded = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as e:
        logger.debug("Session token rejected: %s", e)
        return None
    return decoded.get("sub")
