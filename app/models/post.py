"""
app/models/post.py

Modelos ORM de posts e do engajamento embutido neles.

- `Post`    — texto publicado por um único autor
- `Like`    — uma curtida por (post, usuário); a chave composta dá semântica de conjunto
- `Comment` — comentário imutável, sempre referenciando o usuário autor

Likes e comentários pertencem ao post e são removidos junto com ele.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.user import User, new_id


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    author_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=_now, index=True
    )

    # selectin: o contexto assíncrono não permite lazy-load implícito
    author: Mapped[User] = relationship(lazy="selectin")
    likes: Mapped[list["Like"]] = relationship(
        lazy="selectin",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list["Comment"]] = relationship(
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )

    @property
    def liked_by(self) -> list[str]:
        return [like.user_id for like in self.likes]

    def __repr__(self) -> str:
        return f"<Post id={self.id!r} author_id={self.author_id!r}>"


class Like(Base):
    __tablename__ = "post_likes"

    post_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=_now
    )


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    post_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("posts.id", ondelete="CASCADE"), index=True
    )
    author_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE")
    )
    text: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=_now
    )

    author: Mapped[User] = relationship(lazy="selectin")
