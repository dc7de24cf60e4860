"""Демо-данные: свадебные галереи с фото, историями и гостями (settings.seed_sample_data)."""
import logging
from datetime import timedelta

from app.models import Gallery, Media, Visitor
from app.services.event_store import EventStore

logger = logging.getLogger(__name__)

SAMPLE_GALLERY_ID = "sample-wedding-2024"
DEMO_GALLERY_IDS = (
    "gallery_1750698174963_peuob45wp",
    "gallery_1750698416295_8oa17yn3q",
)

_PHOTOS = (
    # (url, caption, возраст)
    ("https://images.unsplash.com/photo-1519741497674-611481863552?w=800", "Beautiful moment captured!", timedelta(hours=1)),
    ("https://images.unsplash.com/photo-1606216794074-735e91aa2c92?w=800", "Amazing celebration", timedelta(hours=2)),
    ("https://images.unsplash.com/photo-1511285560929-80b456fea0bc?w=800", "Perfect day!", timedelta(hours=3)),
)
_STORIES = (
    # (url, caption, возраст, сколько осталось жить)
    ("https://images.unsplash.com/photo-1465495976277-4387d4b0e4a6?w=400", "Behind the scenes",
     timedelta(minutes=30), timedelta(hours=24)),
    ("https://images.unsplash.com/photo-1583939003579-730e3918a45a?w=400", "Getting ready",
     timedelta(hours=1), timedelta(hours=23)),
)
_VISITORS = (
    ("Anna Schmidt", timedelta(days=1)),
    ("Max Mueller", timedelta(hours=12)),
    ("Lisa Weber", timedelta(hours=6)),
)


def build_sample_galleries(store: EventStore) -> list[Gallery]:
    now = store.now()
    galleries = [
        Gallery(
            id=SAMPLE_GALLERY_ID,
            name="Anna & Max Hochzeit",
            owner_email="anna@example.com",
            theme="wedding",
            profile_image="",
            bio="Willkommen zu unserer Hochzeit! Teilt eure schönsten Momente mit uns.",
            created_at=now,
        )
    ]
    for i, gid in enumerate(DEMO_GALLERY_IDS):
        galleries.append(
            Gallery(
                id=gid,
                name="Wedding Gallery" if i == 0 else f"Wedding Gallery {i + 1}",
                owner_email="test@example.com" if i == 0 else f"test{i + 1}@example.com",
                theme="wedding",
                profile_image="",
                bio="Share your beautiful moments with us!",
                created_at=now,
            )
        )
    return galleries


def build_gallery_content(store: EventStore, gallery_id: str, index: int) -> tuple[list[Visitor], list[Media]]:
    now = store.now()
    visitors = [
        Visitor(
            id=f"visitor_{index}_{n}",
            gallery_id=gallery_id,
            name=name,
            device_id=f"device_{index}_{n}",
            fingerprint=f"fp_{index}_{n}",
            created_at=now - age,
            last_active=now,
        )
        for n, (name, age) in enumerate(_VISITORS, start=1)
    ]
    media = [
        Media(
            id=f"media_{index}_{n}",
            gallery_id=gallery_id,
            visitor_id=f"visitor_{index}_{n}",
            url=url,
            type="photo",
            caption=caption,
            created_at=now - age,
        )
        for n, (url, caption, age) in enumerate(_PHOTOS, start=1)
    ]
    media += [
        Media(
            id=f"story_{index}_{n}",
            gallery_id=gallery_id,
            visitor_id=f"visitor_{index}_{n}",
            url=url,
            type="story",
            caption=caption,
            created_at=now - age,
            expires_at=now + ttl,
        )
        for n, (url, caption, age, ttl) in enumerate(_STORIES, start=1)
    ]
    return visitors, media


def seed_sample_data(store: EventStore) -> None:
    galleries = build_sample_galleries(store)
    visitors: list[Visitor] = []
    media: list[Media] = []
    for index, gid in enumerate(DEMO_GALLERY_IDS):
        v, m = build_gallery_content(store, gid, index)
        visitors += v
        media += m
    store.load(galleries=galleries, visitors=visitors, media=media)
    logger.info(
        "Sample data loaded: %d galleries, %d visitors, %d media",
        len(galleries), len(visitors), len(media),
    )
