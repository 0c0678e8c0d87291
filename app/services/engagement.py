"""
app/services/engagement.py

Posts e engajamento: criação, edição e remoção de posts, curtidas e
comentários.

Curtir é um toggle: um DELETE da curtida e, se nada foi apagado, um
INSERT ... ON CONFLICT DO NOTHING. Só uma curtida realmente inserida por
alguém que não é o autor gera notificação. Comentários de terceiros
também notificam o autor.
"""

import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import insert_ignore
from app.errors import BadRequestError, ForbiddenError, NotFoundError
from app.models.notification import Notification, NotificationType
from app.models.post import Comment, Like, Post
from app.services import notifications
from app.services.accounts import parse_id

log = logging.getLogger(__name__)


def _require_text(value: str, message: str) -> str:
    value = (value or "").strip()
    if not value:
        raise BadRequestError(message)
    return value


async def get_post(session: AsyncSession, post_id: str, reload: bool = False) -> Post:
    """Busca o post. `reload=True` recarrega o post e suas relações do banco."""
    post = await session.get(
        Post, parse_id(post_id, "post ID"), populate_existing=reload
    )
    if post is None:
        raise NotFoundError("Post not found")
    return post


async def _get_own_post(session: AsyncSession, actor_id: str, post_id: str) -> Post:
    post = await get_post(session, post_id)
    if post.author_id != actor_id:
        raise ForbiddenError("User not authorized to modify this post")
    return post


async def create_post(session: AsyncSession, author_id: str, content: str) -> Post:
    content = _require_text(content, "Post content is required")
    post = Post(author_id=author_id, content=content)
    session.add(post)
    await session.flush()
    return await get_post(session, post.id, reload=True)


async def update_post(
    session: AsyncSession, actor_id: str, post_id: str, content: str
) -> Post:
    post = await _get_own_post(session, actor_id, post_id)
    post.content = _require_text(content, "Post content is required")
    await session.flush()
    return post


async def delete_post(session: AsyncSession, actor_id: str, post_id: str) -> None:
    """Remove o post com suas curtidas, comentários e notificações."""
    post = await _get_own_post(session, actor_id, post_id)
    await session.execute(delete(Notification).where(Notification.post_id == post.id))
    await session.delete(post)
    await session.flush()
    log.info(f"Post {post.id} removido por {actor_id}")


async def toggle_like(session: AsyncSession, actor_id: str, post_id: str) -> Post:
    post = await get_post(session, post_id)

    result = await session.execute(
        delete(Like).where(Like.post_id == post.id, Like.user_id == actor_id)
    )
    liked = False
    if result.rowcount == 0:
        result = await session.execute(
            insert_ignore(session, Like).values(post_id=post.id, user_id=actor_id)
        )
        liked = result.rowcount == 1
    # ids em variáveis locais: um rollback em emit expira os objetos da sessão
    post_id, author_id = post.id, post.author_id
    await session.commit()

    if liked and actor_id != author_id:
        await notifications.emit(
            session, author_id, actor_id, NotificationType.LIKE, post_id
        )
    return await get_post(session, post_id, reload=True)


async def add_comment(
    session: AsyncSession, actor_id: str, post_id: str, text: str
) -> Post:
    text = _require_text(text, "Comment text is required")
    post = await get_post(session, post_id)
    post.comments.append(Comment(author_id=actor_id, text=text))
    post_id, author_id = post.id, post.author_id
    await session.commit()

    if actor_id != author_id:
        await notifications.emit(
            session, author_id, actor_id, NotificationType.COMMENT, post_id
        )
    return await get_post(session, post_id, reload=True)
