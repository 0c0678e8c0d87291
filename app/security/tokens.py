"""
app/security/tokens.py

Emissão e verificação dos bearer tokens (JWT HS256, sem estado no servidor).
"""

from datetime import datetime, timedelta, timezone

import jwt

from app.config import settings
from app.errors import UnauthorizedError

ALGORITHM = "HS256"


def issue_token(user_id: str, now: datetime | None = None) -> str:
    """Assina um token com o id do usuário, válido por `token_expire_days` dias."""
    now = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(days=settings.token_expire_days),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def verify_token(token: str) -> str:
    """
    Valida assinatura e expiração e devolve o id do usuário.
    Levanta UnauthorizedError para qualquer token inválido.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Not authorized, token expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Not authorized, token failed")

    user_id = payload["sub"]
    if not isinstance(user_id, str) or not user_id:
        raise UnauthorizedError("Not authorized, token failed")
    return user_id
