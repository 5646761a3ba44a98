"""Background tasks of the core module."""

import structlog
from celery import shared_task
from django.conf import settings
from django.db import transaction

from modules.core.models import OutboxEvent

logger = structlog.get_logger(__name__)


@shared_task(name="core.relay_outbox_events")
def relay_outbox_events(batch_size: int = 100) -> dict:
    """Hand pending outbox events to the in-process event bus.

    Each event is marked published or failed individually; a failing
    handler does not block the rest of the batch.  Failed events are
    picked up again on later runs until ``OMS_OUTBOX_MAX_RETRIES``.
    """
    from shared.infrastructure.bus import event_bus

    published = failed = 0
    with transaction.atomic():
        events = list(
            OutboxEvent.objects.select_for_update().pending(
                max_retries=settings.OMS_OUTBOX_MAX_RETRIES
            )[:batch_size]
        )
        for event in events:
            try:
                event_bus.dispatch(event.event_type, event.payload)
            except Exception as exc:
                logger.exception(
                    "outbox.relay_failed",
                    event_id=str(event.id),
                    event_type=event.event_type,
                )
                event.mark_as_failed(str(exc))
                failed += 1
            else:
                event.mark_as_published()
                published += 1

    logger.info("outbox.relay_finished", published=published, failed=failed)
    return {"published": published, "failed": failed}
