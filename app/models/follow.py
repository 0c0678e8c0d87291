"""
app/models/follow.py

Aresta dirigida do grafo de follows: `follower_id` segue `following_id`.

Cada linha representa as duas pontas da relação ao mesmo tempo
(B ∈ A.following ⟺ A ∈ B.followers), então não existe par de listas
para manter em sincronia. A chave primária composta dá semântica de
conjunto e o CHECK impede que alguém siga a si mesmo.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Follow(Base):
    __tablename__ = "follows"
    __table_args__ = (
        CheckConstraint("follower_id <> following_id", name="ck_follows_not_self"),
    )

    follower_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    following_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Follow {self.follower_id!r} -> {self.following_id!r}>"
