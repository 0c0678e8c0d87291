import asyncio

import bcrypt

from app.config import settings


def _hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _check(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # hash corrompido ou senha acima do limite do bcrypt
        return False


async def hash_password(password: str) -> str:
    """Gera o hash bcrypt com salt aleatório. Roda fora do event loop."""
    return await asyncio.to_thread(_hash, password)


async def verify_password(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(_check, password, password_hash)
