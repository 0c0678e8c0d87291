"""
app/services/feed.py

Composição do feed: posts do próprio usuário e de quem ele segue,
mais recentes primeiro.

Sem paginação — o resultado cresce com o número de posts seguidos.
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.follow import Follow
from app.models.post import Post
from app.services.accounts import parse_id


async def get_feed(session: AsyncSession, user_id: str) -> list[Post]:
    user_id = parse_id(user_id, "user ID")
    following = select(Follow.following_id).where(Follow.follower_id == user_id)
    result = await session.scalars(
        select(Post)
        .where(or_(Post.author_id == user_id, Post.author_id.in_(following)))
        .order_by(Post.created_at.desc())
    )
    return list(result)


async def get_user_posts(session: AsyncSession, user_id: str) -> list[Post]:
    """Listagem pública dos posts de um autor, independente de follow."""
    user_id = parse_id(user_id, "user ID")
    result = await session.scalars(
        select(Post)
        .where(Post.author_id == user_id)
        .order_by(Post.created_at.desc())
    )
    return list(result)
