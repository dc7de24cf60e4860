"""Галереи: создание, просмотр, настройки владельца; регистрация гостей; медиа и истории галереи."""
import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.config import settings
from app.database import get_store
from app.models import Gallery, Media, MediaType, Visitor
from app.schemas import GalleryCreate, GalleryUpdate, MediaCreate, VisitorRegister
from app.services.event_store import EventStore, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/galleries", tags=["galleries"])


@router.post("", response_model=Gallery, status_code=201)
async def create_gallery(body: GalleryCreate, store: EventStore = Depends(get_store)):
    data = body.model_dump(exclude={"id"}, exclude_none=True)
    data["name"] = body.name.strip()
    if not data["name"]:
        raise HTTPException(status_code=400, detail="Name and owner_email are required")
    return await store.create_gallery(data, gallery_id=body.id)


@router.get("/{gallery_id}", response_model=Gallery)
async def get_gallery(gallery_id: str, store: EventStore = Depends(get_store)):
    gallery = await store.get_gallery(gallery_id)
    if not gallery:
        raise HTTPException(status_code=404, detail="Gallery not found")
    return gallery


@router.put("/{gallery_id}", response_model=Gallery)
async def update_gallery(
    gallery_id: str,
    body: GalleryUpdate,
    store: EventStore = Depends(get_store),
):
    try:
        return await store.update_gallery(gallery_id, body.model_dump(exclude_unset=True))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Gallery not found")


@router.post("/{gallery_id}/visitors", response_model=Visitor, status_code=201)
async def register_visitor(
    gallery_id: str,
    body: VisitorRegister,
    response: Response,
    store: EventStore = Depends(get_store),
):
    """
    Гость узнаётся по (device_id, fingerprint) в рамках галереи.
    Новый: 201, вернувшийся: 200 с обновлённым last_active.
    """
    name = body.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name, device_id and fingerprint are required")
    visitor, created = await store.register_visitor(
        gallery_id, name, body.device_id, body.fingerprint
    )
    if created:
        logger.info("New visitor %s in gallery %s", visitor.id, gallery_id)
    else:
        response.status_code = 200
    return visitor


@router.get("/{gallery_id}/media", response_model=list[Media])
async def list_media(
    gallery_id: str,
    media_type: MediaType | None = Query(None, alias="type", description="photo | video | story"),
    store: EventStore = Depends(get_store),
):
    return await store.get_media_by_gallery(gallery_id, media_type)


@router.post("/{gallery_id}/media", response_model=Media, status_code=201)
async def create_media(
    gallery_id: str,
    body: MediaCreate,
    store: EventStore = Depends(get_store),
):
    expires_at = None
    if body.type == "story":
        expires_at = store.now() + timedelta(hours=settings.story_ttl_hours)
    return await store.create_media(
        gallery_id=gallery_id,
        visitor_id=body.visitor_id,
        url=body.url.strip(),
        media_type=body.type,
        thumbnail_url=body.thumbnail_url,
        caption=body.caption,
        expires_at=expires_at,
    )


@router.get("/{gallery_id}/stories", response_model=list[Media])
async def list_stories(gallery_id: str, store: EventStore = Depends(get_store)):
    return await store.get_active_stories(gallery_id)
