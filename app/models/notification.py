"""
app/models/notification.py

Evento de mão única gerado por curtidas e comentários.

Só o campo `read` muda depois da criação.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.user import User, new_id


class NotificationType(str, enum.Enum):
    LIKE = "like"
    COMMENT = "comment"


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        # listagem por destinatário, mais recentes primeiro
        Index("ix_notifications_recipient_created", "recipient_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    recipient_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE")
    )
    sender_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE")
    )
    type: Mapped[NotificationType] = mapped_column(
        Enum(
            NotificationType,
            native_enum=False,
            length=16,
            values_callable=lambda e: [member.value for member in e],
        )
    )
    post_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("posts.id", ondelete="CASCADE"), index=True
    )
    read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=lambda: datetime.now(timezone.utc),
    )

    sender: Mapped[User] = relationship(foreign_keys=[sender_id], lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<Notification type={self.type.value!r} "
            f"recipient_id={self.recipient_id!r} read={self.read!r}>"
        )
