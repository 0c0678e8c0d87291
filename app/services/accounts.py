"""
app/services/accounts.py

Registro, login e leitura do usuário autenticado.
"""

import logging
import uuid

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from app.models.user import User
from app.security.passwords import hash_password, verify_password
from app.security.tokens import issue_token

log = logging.getLogger(__name__)

# Mesma mensagem para "usuário inexistente" e "senha errada"
INVALID_CREDENTIALS = "Invalid credentials"


def parse_id(value: str, label: str = "ID") -> str:
    """Normaliza um identificador UUID ou levanta BadRequestError."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise BadRequestError(f"Invalid {label} format")


async def get_user(session: AsyncSession, user_id: str) -> User:
    user = await session.get(User, parse_id(user_id, "user ID"))
    if user is None:
        raise NotFoundError("User not found")
    return user


async def register(
    session: AsyncSession, username: str, email: str, password: str
) -> User:
    """
    Cria a conta. Falha com ConflictError se username ou email já existirem.
    A checagem prévia dá a mensagem amigável; a constraint UNIQUE cobre a
    corrida entre dois registros simultâneos.
    """
    email = email.lower()
    existing = await session.scalar(
        select(User.id).where(or_(User.username == username, User.email == email))
    )
    if existing is not None:
        raise ConflictError("User already exists with this email or username")

    user = User(
        username=username,
        email=email,
        password_hash=await hash_password(password),
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        raise ConflictError("User already exists with this email or username")

    log.info(f"Usuário registrado: {username}")
    return user


async def login(session: AsyncSession, identifier: str, password: str) -> str:
    """Autentica por username ou email e devolve um bearer token."""
    user = await session.scalar(
        select(User).where(
            or_(User.username == identifier, User.email == identifier.lower())
        )
    )
    if user is None or not await verify_password(password, user.password_hash):
        log.info(f"Falha de login para {identifier!r}")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    return issue_token(user.id)
