"""Entity records held by the event store: gallery, visitor, media, comment, like, user.

Все id: непрозрачные строки (кроме legacy User с целочисленным id).
Время в timezone-aware UTC."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr

Theme = Literal["wedding", "birthday", "vacation", "custom"]
MediaType = Literal["photo", "video", "story"]


class SpotifyConfig(BaseModel):
    access_token: str | None = None
    playlist_id: str | None = None


class Gallery(BaseModel):
    """Галерея события. custom_theme имеет смысл только при theme == "custom"."""
    id: str
    name: str
    owner_email: str
    theme: Theme
    custom_theme: str | None = None
    profile_image: str | None = None
    bio: str | None = None
    is_live: bool = True
    created_at: datetime
    spotify_config: SpotifyConfig | None = None


class Visitor(BaseModel):
    """Гость без аккаунта: узнаём по (gallery_id, device_id, fingerprint)."""
    id: str
    gallery_id: str
    name: str
    device_id: str
    fingerprint: str
    created_at: datetime
    last_active: datetime


class Media(BaseModel):
    """Фото, видео или история. expires_at заполняется только для историй."""
    id: str
    gallery_id: str
    visitor_id: str
    url: str
    thumbnail_url: str | None = None
    type: MediaType
    caption: str | None = None
    created_at: datetime
    expires_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now


class Comment(BaseModel):
    id: str
    media_id: str
    gallery_id: str
    visitor_id: str
    text: str
    created_at: datetime


class Like(BaseModel):
    id: str
    media_id: str
    gallery_id: str
    visitor_id: str
    created_at: datetime


class User(BaseModel):
    # legacy: галереи пользователей не используют
    id: int
    username: str
    email: EmailStr
    created_at: datetime
