# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application wiring for Roster.

Builds an EnrollmentService from settings: configures logging, creates the
PostgREST store client and hands both to the service.

Example:
    >>> service = create_enrollment_service()
    >>> await service.refresh()
    >>> board = service.board()
"""

import logging

from roster.core.config.settings import Settings, get_settings
from roster.domains.enrollment.service import EnrollmentService
from roster.infrastructure.events import EventBus
from roster.infrastructure.store.postgrest import PostgrestEnrollmentStore
from roster.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_enrollment_service(
    settings: Settings | None = None,
    event_bus: EventBus | None = None,
) -> EnrollmentService:
    """Create an EnrollmentService backed by the configured remote store.

    Close the store with ``await service.store.aclose()`` when done.

    Args:
        settings: Application settings (cached settings if None).
        event_bus: Bus for change notifications (singleton if None).

    Returns:
        EnrollmentService with an empty cache. Call refresh() to load it.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    store = PostgrestEnrollmentStore(settings.store)
    logger.info(
        "Enrollment service ready: environment=%s, store=%s",
        settings.environment,
        settings.store.rest_url,
    )
    return EnrollmentService(store, event_bus=event_bus, board_settings=settings.board)
