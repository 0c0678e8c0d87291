"""
app/services/follows.py

Manutenção do grafo de follows e leitura de perfis públicos.

follow e unfollow são um único comando SQL cada, contra a chave primária
composta de `follows`: repetir a operação não altera o estado e duas
requisições concorrentes não deixam o grafo inconsistente.
"""

import logging
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import insert_ignore
from app.errors import BadRequestError, NotFoundError
from app.models.follow import Follow
from app.models.user import User
from app.services.accounts import get_user, parse_id

log = logging.getLogger(__name__)


async def follow(session: AsyncSession, actor_id: str, target_id: str) -> User:
    """Cria a aresta actor → target e devolve o usuário seguido."""
    actor_id = parse_id(actor_id, "user ID")
    target_id = parse_id(target_id, "user ID")
    if actor_id == target_id:
        raise BadRequestError("You cannot follow yourself")

    await get_user(session, actor_id)
    target = await get_user(session, target_id)

    await session.execute(
        insert_ignore(session, Follow).values(
            follower_id=actor_id, following_id=target_id
        )
    )
    log.info(f"{actor_id} passou a seguir {target_id}")
    return target


async def unfollow(session: AsyncSession, actor_id: str, target_id: str) -> None:
    """
    Remove a aresta actor → target. Não exige que o alvo ainda exista:
    a linha é apagada pelo par de ids.
    """
    actor_id = parse_id(actor_id, "user ID")
    target_id = parse_id(target_id, "user ID")

    await get_user(session, actor_id)
    await session.execute(
        delete(Follow).where(
            Follow.follower_id == actor_id,
            Follow.following_id == target_id,
        )
    )


async def following_ids(session: AsyncSession, user_id: str) -> list[str]:
    result = await session.scalars(
        select(Follow.following_id)
        .where(Follow.follower_id == user_id)
        .order_by(Follow.created_at)
    )
    return list(result)


async def follower_ids(session: AsyncSession, user_id: str) -> list[str]:
    result = await session.scalars(
        select(Follow.follower_id)
        .where(Follow.following_id == user_id)
        .order_by(Follow.created_at)
    )
    return list(result)


async def get_profile(session: AsyncSession, identifier: str) -> dict:
    """Perfil público por id (UUID) ou, caso contrário, por username."""
    try:
        user_id = str(uuid.UUID(identifier))
    except ValueError:
        user = await session.scalar(select(User).where(User.username == identifier))
    else:
        user = await session.get(User, user_id)

    if user is None:
        raise NotFoundError("User not found")

    followers_count = await session.scalar(
        select(func.count()).select_from(Follow).where(Follow.following_id == user.id)
    )
    following_count = await session.scalar(
        select(func.count()).select_from(Follow).where(Follow.follower_id == user.id)
    )
    return {
        "id": user.id,
        "username": user.username,
        "followers_count": followers_count,
        "following_count": following_count,
        "created_at": user.created_at,
    }
