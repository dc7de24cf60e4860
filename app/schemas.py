"""Pydantic schemas for API."""
from typing import Literal

from pydantic import BaseModel, Field

from app.models import Like, MediaType, SpotifyConfig, Theme


# Galleries
class GalleryCreate(BaseModel):
    id: str | None = Field(None, min_length=1, max_length=128)  # стабильная ссылка для гостей
    name: str = Field(..., min_length=1, max_length=256)
    owner_email: str = Field(..., min_length=1, max_length=256)
    theme: Theme = "wedding"
    custom_theme: str | None = Field(None, max_length=128)
    profile_image: str | None = None
    bio: str | None = None
    spotify_config: SpotifyConfig | None = None


class GalleryUpdate(BaseModel):
    # id и created_at не меняются, даже если пришли в теле
    name: str | None = Field(None, min_length=1, max_length=256)
    owner_email: str | None = Field(None, min_length=1, max_length=256)
    theme: Theme | None = None
    custom_theme: str | None = Field(None, max_length=128)
    profile_image: str | None = None
    bio: str | None = None
    is_live: bool | None = None
    spotify_config: SpotifyConfig | None = None


# Visitors
class VisitorRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    device_id: str = Field(..., min_length=1, max_length=256)
    fingerprint: str = Field(..., min_length=1, max_length=256)


# Media
class MediaCreate(BaseModel):
    visitor_id: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1, max_length=2048)
    thumbnail_url: str | None = Field(None, max_length=2048)
    type: MediaType
    caption: str | None = None


class VisitorAction(BaseModel):
    """Тело DELETE-запросов: кто удаляет (проверка владельца)."""
    visitor_id: str = Field(..., min_length=1)


# Likes
class LikeCreate(BaseModel):
    visitor_id: str = Field(..., min_length=1)
    gallery_id: str = Field(..., min_length=1)


class LikeToggleResponse(BaseModel):
    status: Literal["liked", "unliked"]
    like: Like | None = None
    like_count: int


class LikeCountResponse(BaseModel):
    media_id: str
    like_count: int


# Comments
class CommentCreate(BaseModel):
    visitor_id: str = Field(..., min_length=1)
    gallery_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, max_length=2000)
