"""
app/services/notifications.py

Emissão e leitura de notificações.

`emit` é efeito colateral das curtidas e comentários: roda numa transação
própria, depois que a operação principal já foi confirmada, e qualquer
erro é apenas registrado no log.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import ForbiddenError, NotFoundError
from app.models.notification import Notification, NotificationType
from app.services.accounts import parse_id

log = logging.getLogger(__name__)


async def emit(
    session: AsyncSession,
    recipient_id: str,
    sender_id: str,
    type_: NotificationType,
    post_id: str,
) -> Notification | None:
    """Grava a notificação e confirma. Devolve None se a gravação falhar."""
    try:
        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=type_,
            post_id=post_id,
        )
        session.add(notification)
        await session.commit()
    except Exception as e:
        await session.rollback()
        log.error(
            f"Erro ao criar notificação {type_.value} para {recipient_id}: {e}",
            exc_info=True,
        )
        return None
    return notification


async def list_notifications(session: AsyncSession, user_id: str) -> list[Notification]:
    result = await session.scalars(
        select(Notification)
        .where(Notification.recipient_id == user_id)
        .order_by(Notification.created_at.desc())
        .limit(settings.notifications_limit)
    )
    return list(result)


async def mark_read(
    session: AsyncSession, user_id: str, notification_id: str
) -> Notification:
    """Marca uma notificação como lida. Se já estiver lida, nada muda."""
    notification = await session.get(
        Notification, parse_id(notification_id, "notification ID")
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.recipient_id != user_id:
        raise ForbiddenError("User not authorized to update this notification")

    if not notification.read:
        notification.read = True
        await session.flush()
    return notification


async def mark_all_read(session: AsyncSession, user_id: str) -> int:
    """Marca todas as não lidas do usuário e devolve quantas foram alteradas."""
    result = await session.execute(
        update(Notification)
        .where(Notification.recipient_id == user_id, Notification.read.is_(False))
        .values(read=True)
    )
    return result.rowcount
