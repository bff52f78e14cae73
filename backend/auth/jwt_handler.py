from jose import JWTError, jwt

from config import config

SECRET_KEY = config.auth.jwt.secret_key
ALGORITHM = config.auth.jwt.algorithm


def decode_user_id(token: str) -> str | None:
    """Return the identity provider's subject for a valid token, else None."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    return str(subject) if subject else None
