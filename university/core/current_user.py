from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from university.core.errors import Unauthenticated
from university.core.security import decode_access_token
from university.schemas.token import Claim

# auto_error=False so a missing header is reported as 401, not the framework default
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_claim(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Claim:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return decode_access_token(credentials.credentials)
