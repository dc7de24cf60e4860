"""Комментарии: удаление автором."""
from fastapi import APIRouter, Depends, HTTPException, Response

from app.database import get_store
from app.schemas import VisitorAction
from app.services.event_store import EventStore

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: str,
    body: VisitorAction,
    store: EventStore = Depends(get_store),
):
    comment = await store.get_comment(comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    if comment.visitor_id != body.visitor_id:
        raise HTTPException(status_code=403, detail="You can only delete your own comments")
    await store.delete_comment(comment_id)
    return Response(status_code=204)
