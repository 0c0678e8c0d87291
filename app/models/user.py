"""
app/models/user.py

Modelo ORM das contas registradas.

Os conjuntos de followers/following não ficam no registro do usuário:
são derivados da tabela `follows` (ver app/models/follow.py).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    username: Mapped[str] = mapped_column(String(30), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)

    # Hash bcrypt (já contém o salt) — a senha em texto puro nunca é persistida
    password_hash: Mapped[str] = mapped_column(String(60))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User username={self.username!r}>"
