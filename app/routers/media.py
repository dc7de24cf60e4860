"""Медиа: удаление автором, лайки, комментарии к медиа."""
from fastapi import APIRouter, Depends, HTTPException, Response

from app.database import get_store
from app.models import Comment, Like
from app.schemas import (
    CommentCreate,
    LikeCountResponse,
    LikeCreate,
    LikeToggleResponse,
    VisitorAction,
)
from app.services.event_store import EventStore

router = APIRouter(prefix="/api/media", tags=["media"])


@router.delete("/{media_id}", status_code=204)
async def delete_media(
    media_id: str,
    body: VisitorAction,
    store: EventStore = Depends(get_store),
):
    """Удалить может только автор. Комментарии и лайки удаляются вместе с медиа."""
    media = await store.get_media(media_id)
    if not media:
        raise HTTPException(status_code=404, detail="Media not found")
    if media.visitor_id != body.visitor_id:
        raise HTTPException(status_code=403, detail="You can only delete your own content")
    await store.delete_media(media_id)
    return Response(status_code=204)


@router.get("/{media_id}/likes", response_model=LikeCountResponse)
async def get_like_count(media_id: str, store: EventStore = Depends(get_store)):
    return LikeCountResponse(media_id=media_id, like_count=await store.count_likes(media_id))


@router.post("/{media_id}/likes", response_model=Like, status_code=201)
async def like_media(
    media_id: str,
    body: LikeCreate,
    store: EventStore = Depends(get_store),
):
    if await store.find_like(media_id, body.visitor_id):
        raise HTTPException(status_code=409, detail="Already liked")
    return await store.create_like(media_id, body.gallery_id, body.visitor_id)


@router.delete("/{media_id}/likes", status_code=204)
async def unlike_media(
    media_id: str,
    body: VisitorAction,
    store: EventStore = Depends(get_store),
):
    await store.delete_like(media_id, body.visitor_id)
    return Response(status_code=204)


@router.post("/{media_id}/likes/toggle", response_model=LikeToggleResponse)
async def toggle_like(
    media_id: str,
    body: LikeCreate,
    store: EventStore = Depends(get_store),
):
    result = await store.toggle_like(media_id, body.gallery_id, body.visitor_id)
    return LikeToggleResponse(
        status="liked" if result.liked else "unliked",
        like=result.like,
        like_count=await store.count_likes(media_id),
    )


@router.get("/{media_id}/comments", response_model=list[Comment])
async def list_comments(media_id: str, store: EventStore = Depends(get_store)):
    return await store.get_comments_by_media(media_id)


@router.post("/{media_id}/comments", response_model=Comment, status_code=201)
async def create_comment(
    media_id: str,
    body: CommentCreate,
    store: EventStore = Depends(get_store),
):
    text = body.text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Comment text is empty")
    return await store.create_comment(media_id, body.gallery_id, body.visitor_id, text)
