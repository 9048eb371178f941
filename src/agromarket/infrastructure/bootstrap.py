"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dotenv import load_dotenv

from agromarket.application.geocoding import Geocoder
from agromarket.application.notifications import Notifier
from agromarket.infrastructure.config import Settings
from agromarket.infrastructure.geocoding.nominatim_geocoder import NominatimGeocoder
from agromarket.infrastructure.notifications.dispatcher import (
    ThreadedNotificationDispatcher,
)
from agromarket.infrastructure.notifications.logging_notifier import LoggingNotifier
from agromarket.infrastructure.notifications.resend_notifier import ResendNotifier
from agromarket.infrastructure.persistence.json_database import JsonDatabase
from agromarket.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def settings() -> Settings:
    load_dotenv()
    return Settings.from_env()


def database(config: Settings) -> JsonDatabase:
    return JsonDatabase(config.database_path, lock_timeout=config.store_timeout)


def unit_of_work(config: Settings) -> JsonUnitOfWork:
    return JsonUnitOfWork(database(config))


def notifier(config: Settings) -> Notifier:
    if not config.resend_api_key:
        return LoggingNotifier()
    return ResendNotifier(
        api_key=config.resend_api_key,
        sender=config.mail_from,
        url=config.resend_url,
        timeout=config.notify_timeout,
    )


def dispatcher(config: Settings) -> ThreadedNotificationDispatcher:
    return ThreadedNotificationDispatcher(
        notifier(config),
        max_attempts=config.notify_attempts,
        backoff=config.notify_backoff,
        queue_size=config.notify_queue_size,
    )


def geocoder(config: Settings) -> Geocoder:
    return NominatimGeocoder(config.geocoder_url, timeout=config.geocoder_timeout)
