from fastapi import APIRouter, status

from app.api.deps import CurrentUserId, Session
from app.schemas import CommentRequest, MessageResponse, PostContent, PostOut
from app.services import engagement, feed

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=list[PostOut])
async def get_feed(user_id: CurrentUserId, session: Session):
    return await feed.get_feed(session, user_id)


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def create_post(body: PostContent, user_id: CurrentUserId, session: Session):
    return await engagement.create_post(session, user_id, body.content)


@router.get("/user/{author_id}", response_model=list[PostOut])
async def get_user_posts(author_id: str, session: Session):
    return await feed.get_user_posts(session, author_id)


@router.put("/{post_id}", response_model=PostOut)
async def update_post(
    post_id: str, body: PostContent, user_id: CurrentUserId, session: Session
):
    return await engagement.update_post(session, user_id, post_id, body.content)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(post_id: str, user_id: CurrentUserId, session: Session):
    await engagement.delete_post(session, user_id, post_id)
    return MessageResponse(message="Post removed")


@router.patch("/{post_id}/like", response_model=PostOut)
async def toggle_like(post_id: str, user_id: CurrentUserId, session: Session):
    return await engagement.toggle_like(session, user_id, post_id)


@router.post(
    "/{post_id}/comment",
    response_model=PostOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: str, body: CommentRequest, user_id: CurrentUserId, session: Session
):
    return await engagement.add_comment(session, user_id, post_id, body.text)
