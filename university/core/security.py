import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from pydantic import ValidationError

from university.core.config import ACCESS_TOKEN_EXPIRE, ALGORITHM, BCRYPT_ROUNDS, SECRET_KEY
from university.core.errors import InvalidToken
from university.schemas.token import Claim

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # malformed stored hash or over-long secret
        return False


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update(
        {
            "iat": now,
            "exp": now + (expires_delta or ACCESS_TOKEN_EXPIRE),
        }
    )
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Claim:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired access token")
        raise InvalidToken("Token expired")
    except jwt.InvalidTokenError as exc:
        logger.warning("Token verification error: %s", exc)
        raise InvalidToken()

    try:
        return Claim.model_validate(payload)
    except ValidationError:
        logger.warning("Access token payload is missing claim fields")
        raise InvalidToken()
