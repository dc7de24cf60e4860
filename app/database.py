"""Хранилище процесса: создаётся при старте приложения, в роуты попадает через get_store."""
import logging

from fastapi import Request

from app.config import settings
from app.services.event_store import EventStore
from app.services.sample_data import seed_sample_data

logger = logging.getLogger(__name__)


def init_store() -> EventStore:
    store = EventStore()
    if settings.seed_sample_data:
        seed_sample_data(store)
    logger.info("Event store initialised (in-memory, state resets on restart)")
    return store


def get_store(request: Request) -> EventStore:
    return request.app.state.store
