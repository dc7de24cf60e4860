"""In-memory event store: galleries, visitors, media, comments, likes (+ legacy users).

Состояние живёт только в процессе и сбрасывается при рестарте.
Истёкшие истории физически остаются в памяти, но не попадают в выборки."""
import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from app.models import Comment, Gallery, Like, Media, User, Visitor

logger = logging.getLogger(__name__)

# Поля, которые нельзя перезаписать через update_gallery
IMMUTABLE_GALLERY_FIELDS = ("id", "created_at")
# Обязательные поля: null в обновлении означает "не менять"
REQUIRED_GALLERY_FIELDS = ("name", "owner_email", "theme", "is_live")


class NotFoundError(LookupError):
    """Mutation targets an id that is not in the store."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


@dataclass
class LikeToggleResult:
    liked: bool
    like: Like | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


class EventStore:
    """
    Один экземпляр на процесс, передаётся в роуты через зависимость get_store.
    Методы async ради совместимости с настоящей БД, но внутри не ждут ничего:
    составные операции (toggle_like, register_visitor, delete_media) выполняются
    под одним RLock целиком.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self._clock = clock or _utcnow
        self._new_id = id_factory or _new_id
        self._lock = threading.RLock()
        self._users: dict[int, User] = {}
        self._galleries: dict[str, Gallery] = {}
        self._visitors: dict[str, Visitor] = {}
        self._media: dict[str, Media] = {}
        self._comments: dict[str, Comment] = {}
        self._likes: dict[str, Like] = {}
        self._next_user_id = 1

    def now(self) -> datetime:
        return self._clock()

    def load(
        self,
        galleries: Iterable[Gallery] = (),
        visitors: Iterable[Visitor] = (),
        media: Iterable[Media] = (),
    ) -> None:
        """Bulk-insert already built records as-is (ids and timestamps are kept)."""
        with self._lock:
            for g in galleries:
                self._galleries[g.id] = g
            for v in visitors:
                self._visitors[v.id] = v
            for m in media:
                self._media[m.id] = m

    # Users (legacy)
    async def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    async def create_user(self, username: str, email: str) -> User:
        with self._lock:
            user = User(
                id=self._next_user_id,
                username=username,
                email=email,
                created_at=self.now(),
            )
            self._next_user_id += 1
            self._users[user.id] = user
        return user

    # Galleries
    async def get_gallery(self, gallery_id: str) -> Gallery | None:
        return self._galleries.get(gallery_id)

    async def create_gallery(self, data: dict, gallery_id: str | None = None) -> Gallery:
        """
        Создаёт галерею. gallery_id можно передать снаружи (стабильные ссылки для гостей);
        повтор того же id молча перезаписывает прежнюю запись. is_live всегда True.
        """
        fields = {k: v for k, v in data.items() if k not in ("id", "created_at", "is_live")}
        gallery = Gallery(
            **fields,
            id=gallery_id or self._new_id(),
            created_at=self.now(),
            is_live=True,
        )
        with self._lock:
            if gallery.id in self._galleries:
                logger.debug("Gallery %s overwritten", gallery.id)
            self._galleries[gallery.id] = gallery
        logger.debug("Gallery created: %s", gallery.id)
        return gallery

    async def update_gallery(self, gallery_id: str, updates: dict) -> Gallery:
        with self._lock:
            existing = self._galleries.get(gallery_id)
            if existing is None:
                raise NotFoundError("gallery", gallery_id)
            merged = existing.model_dump()
            merged.update(
                {
                    k: v for k, v in updates.items()
                    if k not in IMMUTABLE_GALLERY_FIELDS
                    and not (v is None and k in REQUIRED_GALLERY_FIELDS)
                }
            )
            merged["id"] = existing.id
            merged["created_at"] = existing.created_at
            updated = Gallery.model_validate(merged)
            self._galleries[gallery_id] = updated
        return updated

    # Visitors
    async def find_visitor_by_device(
        self, gallery_id: str, device_id: str, fingerprint: str
    ) -> Visitor | None:
        return self._find_visitor(gallery_id, device_id, fingerprint)

    def _find_visitor(self, gallery_id: str, device_id: str, fingerprint: str) -> Visitor | None:
        for v in self._visitors.values():
            if v.gallery_id == gallery_id and v.device_id == device_id and v.fingerprint == fingerprint:
                return v
        return None

    async def create_visitor(
        self, gallery_id: str, name: str, device_id: str, fingerprint: str
    ) -> Visitor:
        """Не проверяет уникальность (gallery_id, device_id, fingerprint); для этого register_visitor."""
        return self._create_visitor(gallery_id, name, device_id, fingerprint)

    def _create_visitor(self, gallery_id: str, name: str, device_id: str, fingerprint: str) -> Visitor:
        now = self.now()
        visitor = Visitor(
            id=self._new_id(),
            gallery_id=gallery_id,
            name=name,
            device_id=device_id,
            fingerprint=fingerprint,
            created_at=now,
            last_active=now,
        )
        with self._lock:
            self._visitors[visitor.id] = visitor
        logger.debug("Visitor created: %s in gallery %s", visitor.id, gallery_id)
        return visitor

    async def update_visitor_activity(self, visitor_id: str) -> Visitor:
        return self._touch_visitor(visitor_id)

    def _touch_visitor(self, visitor_id: str) -> Visitor:
        with self._lock:
            visitor = self._visitors.get(visitor_id)
            if visitor is None:
                raise NotFoundError("visitor", visitor_id)
            visitor.last_active = self.now()
        return visitor

    async def register_visitor(
        self, gallery_id: str, name: str, device_id: str, fingerprint: str
    ) -> tuple[Visitor, bool]:
        """Возвращает (visitor, created). Повторный гость получает обновлённый last_active."""
        with self._lock:
            existing = self._find_visitor(gallery_id, device_id, fingerprint)
            if existing is not None:
                return self._touch_visitor(existing.id), False
            return self._create_visitor(gallery_id, name, device_id, fingerprint), True

    # Media
    async def get_media(self, media_id: str) -> Media | None:
        return self._media.get(media_id)

    def _active_media(self, gallery_id: str, media_type: str | None = None) -> list[Media]:
        now = self.now()
        items = [
            m for m in self._media.values()
            if m.gallery_id == gallery_id
            and (media_type is None or m.type == media_type)
            and not m.is_expired(now)
        ]
        items.sort(key=lambda m: m.created_at, reverse=True)
        return items

    async def get_media_by_gallery(self, gallery_id: str, media_type: str | None = None) -> list[Media]:
        """Новые сверху; истёкшие истории отфильтрованы."""
        return self._active_media(gallery_id, media_type or None)

    async def get_active_stories(self, gallery_id: str) -> list[Media]:
        return self._active_media(gallery_id, "story")

    async def create_media(
        self,
        gallery_id: str,
        visitor_id: str,
        url: str,
        media_type: str,
        thumbnail_url: str | None = None,
        caption: str | None = None,
        expires_at: datetime | None = None,
    ) -> Media:
        """expires_at для историй считает вызывающий код (роут), хранилище его не вычисляет."""
        media = Media(
            id=self._new_id(),
            gallery_id=gallery_id,
            visitor_id=visitor_id,
            url=url,
            thumbnail_url=thumbnail_url,
            type=media_type,
            caption=caption,
            created_at=self.now(),
            expires_at=expires_at,
        )
        with self._lock:
            self._media[media.id] = media
        logger.debug("Media created: %s (%s) in gallery %s", media.id, media.type, gallery_id)
        return media

    async def delete_media(self, media_id: str) -> None:
        """Удаляет медиа вместе с его комментариями и лайками. Нет такого id: ничего не делает."""
        with self._lock:
            self._media.pop(media_id, None)
            comment_ids = [cid for cid, c in self._comments.items() if c.media_id == media_id]
            for cid in comment_ids:
                del self._comments[cid]
            like_ids = [lid for lid, lk in self._likes.items() if lk.media_id == media_id]
            for lid in like_ids:
                del self._likes[lid]
        logger.debug(
            "Media %s deleted with %d comments, %d likes",
            media_id, len(comment_ids), len(like_ids),
        )

    # Comments
    async def get_comment(self, comment_id: str) -> Comment | None:
        return self._comments.get(comment_id)

    async def get_comments_by_media(self, media_id: str) -> list[Comment]:
        """Хронологический порядок: старые сверху."""
        items = [c for c in self._comments.values() if c.media_id == media_id]
        items.sort(key=lambda c: c.created_at)
        return items

    async def create_comment(self, media_id: str, gallery_id: str, visitor_id: str, text: str) -> Comment:
        comment = Comment(
            id=self._new_id(),
            media_id=media_id,
            gallery_id=gallery_id,
            visitor_id=visitor_id,
            text=text,
            created_at=self.now(),
        )
        with self._lock:
            self._comments[comment.id] = comment
        return comment

    async def delete_comment(self, comment_id: str) -> None:
        with self._lock:
            self._comments.pop(comment_id, None)

    # Likes
    def _find_like(self, media_id: str, visitor_id: str) -> Like | None:
        for lk in self._likes.values():
            if lk.media_id == media_id and lk.visitor_id == visitor_id:
                return lk
        return None

    async def find_like(self, media_id: str, visitor_id: str) -> Like | None:
        return self._find_like(media_id, visitor_id)

    async def count_likes(self, media_id: str) -> int:
        return sum(1 for lk in self._likes.values() if lk.media_id == media_id)

    def _create_like(self, media_id: str, gallery_id: str, visitor_id: str) -> Like:
        like = Like(
            id=self._new_id(),
            media_id=media_id,
            gallery_id=gallery_id,
            visitor_id=visitor_id,
            created_at=self.now(),
        )
        with self._lock:
            self._likes[like.id] = like
        return like

    async def create_like(self, media_id: str, gallery_id: str, visitor_id: str) -> Like:
        """Уникальность (media_id, visitor_id) проверяет вызывающий через find_like, либо toggle_like."""
        return self._create_like(media_id, gallery_id, visitor_id)

    async def delete_like(self, media_id: str, visitor_id: str) -> None:
        with self._lock:
            like = self._find_like(media_id, visitor_id)
            if like is not None:
                del self._likes[like.id]

    async def toggle_like(self, media_id: str, gallery_id: str, visitor_id: str) -> LikeToggleResult:
        """Есть лайк: снимаем, нет: ставим. Проверка и запись под одним локом."""
        with self._lock:
            existing = self._find_like(media_id, visitor_id)
            if existing is not None:
                del self._likes[existing.id]
                return LikeToggleResult(liked=False)
            return LikeToggleResult(liked=True, like=self._create_like(media_id, gallery_id, visitor_id))
