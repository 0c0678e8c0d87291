from fastapi import APIRouter, status

from app.api.deps import CurrentUserId, Session
from app.schemas import (
    CurrentUserOut,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from app.services import accounts, follows

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(body: RegisterRequest, session: Session):
    user = await accounts.register(session, body.username, body.email, body.password)
    return RegisterResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, session: Session):
    token = await accounts.login(session, body.identifier, body.password)
    return TokenResponse(token=token)


@router.get("/verify", response_model=CurrentUserOut)
async def verify(user_id: CurrentUserId, session: Session):
    user = await accounts.get_user(session, user_id)
    return CurrentUserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        created_at=user.created_at,
        followers=await follows.follower_ids(session, user.id),
        following=await follows.following_ids(session, user.id),
    )
