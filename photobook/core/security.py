from typing import Any, Dict

from jose import jwt

from ..config import get_settings

ALGORITHM = "HS256"


def decode_access_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
