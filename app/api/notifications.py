from fastapi import APIRouter

from app.api.deps import CurrentUserId, Session
from app.schemas import CountResponse, NotificationOut
from app.services import notifications

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
async def list_notifications(user_id: CurrentUserId, session: Session):
    return await notifications.list_notifications(session, user_id)


@router.patch("/{notification_id}/read", response_model=NotificationOut)
async def mark_read(notification_id: str, user_id: CurrentUserId, session: Session):
    return await notifications.mark_read(session, user_id, notification_id)


# PATCH também aceito: é o verbo que o cliente web usa
@router.api_route("/read-all", methods=["POST", "PATCH"], response_model=CountResponse)
async def mark_all_read(user_id: CurrentUserId, session: Session):
    count = await notifications.mark_all_read(session, user_id)
    return CountResponse(message=f"Marked {count} notifications as read.", count=count)
