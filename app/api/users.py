from fastapi import APIRouter

from app.api.deps import CurrentUserId, Session
from app.schemas import MessageResponse, ProfileOut
from app.services import follows

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{identifier}", response_model=ProfileOut)
async def get_profile(identifier: str, session: Session):
    """Perfil público por id ou username."""
    return await follows.get_profile(session, identifier)


@router.post("/{target_id}/follow", response_model=MessageResponse)
async def follow_user(target_id: str, user_id: CurrentUserId, session: Session):
    target = await follows.follow(session, user_id, target_id)
    return MessageResponse(message=f"Successfully followed {target.username}")


@router.delete("/{target_id}/follow", response_model=MessageResponse)
async def unfollow_user(target_id: str, user_id: CurrentUserId, session: Session):
    await follows.unfollow(session, user_id, target_id)
    # mensagem genérica: o alvo pode nem existir mais
    return MessageResponse(message="Successfully unfollowed user")
