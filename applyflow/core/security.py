from datetime import datetime, timedelta, timezone
from jose import jwt
from applyflow.core import config


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """
    Mint a bearer token shaped like the auth provider's.

    Used by tests and local development; production tokens come from the
    hosted auth provider and are only verified here.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=60))
    to_encode.update({"exp": expire})
    if config.AUTH_JWT_AUDIENCE and "aud" not in to_encode:
        to_encode["aud"] = config.AUTH_JWT_AUDIENCE
    return jwt.encode(to_encode, config.AUTH_JWT_SECRET, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and verify a bearer token. Raises jose.JWTError on failure."""
    if config.AUTH_JWT_AUDIENCE:
        return jwt.decode(
            token,
            config.AUTH_JWT_SECRET,
            algorithms=[config.ALGORITHM],
            audience=config.AUTH_JWT_AUDIENCE,
        )
    return jwt.decode(
        token,
        config.AUTH_JWT_SECRET,
        algorithms=[config.ALGORITHM],
        options={"verify_aud": False},
    )
