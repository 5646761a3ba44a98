"""Base abstract model and domain infrastructure for the tailoring OMS.

Provides:
- ``BaseModel``: UUIDv7 primary key + created_at / updated_at timestamps.
- ``OutboxEvent``: Transactional Outbox pattern for reliable domain events.

Nothing in the order management domain is ever deleted (customers, orders,
history and quality checks are audit records), so there is no soft-delete
layer: rows are created, updated, and kept.
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.db.models import Q
from django.utils import timezone

from shared.domain.events import DomainEvent

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Transactional Outbox
# ---------------------------------------------------------------------------


class EventStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PUBLISHED = "PUBLISHED", "Published"
    FAILED = "FAILED", "Failed"


class OutboxQuerySet(models.QuerySet):
    def pending(self, max_retries: int = 0) -> OutboxQuerySet:
        """Events waiting for the relay, oldest first.

        Failed events are included again while ``retry_count`` is below
        ``max_retries``.
        """
        waiting = Q(status=EventStatus.PENDING)
        if max_retries > 0:
            waiting |= Q(status=EventStatus.FAILED, retry_count__lt=max_retries)
        return self.filter(waiting).order_by("created_at")

    def backlog(self) -> dict[str, int]:
        """Pending and failed counts, as reported by the health probe."""
        return {
            "pending": self.filter(status=EventStatus.PENDING).count(),
            "failed": self.filter(status=EventStatus.FAILED).count(),
        }


class OutboxEvent(BaseModel):
    """Order and production events waiting to be relayed.

    Rows are written in the same transaction as the order, assignment or
    quality check that raised them, so a rolled-back transition leaves no
    event behind. ``core.relay_outbox_events`` picks up ``PENDING`` rows in
    creation order and hands them to the in-process bus.
    """

    event_type = models.CharField(max_length=100)
    payload = models.JSONField()
    aggregate_id = models.CharField(max_length=255)
    topic = models.CharField(max_length=100)
    status = models.CharField(
        max_length=20,
        choices=EventStatus.choices,
        default=EventStatus.PENDING,
    )
    processed_at = models.DateTimeField(null=True, blank=True, default=None)
    error_message = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01
    retry_count = models.PositiveIntegerField(default=0)

    objects = OutboxQuerySet.as_manager()

    class Meta:
        db_table = "oms_outbox_events"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["event_type"], name="outbox_event_type_idx"),
            models.Index(fields=["aggregate_id"], name="outbox_aggregate_id_idx"),
            models.Index(
                fields=["status", "created_at"],
                name="outbox_status_created_idx",
            ),
        ]

    @classmethod
    def record(cls, event: DomainEvent, topic: str) -> OutboxEvent:
        """Store a domain event raised by an order aggregate."""
        return cls.objects.create(
            event_type=event.event_name,
            aggregate_id=str(event.aggregate_id),
            payload=event.as_payload(),
            topic=topic,
        )

    def mark_as_published(self) -> None:
        self.status = EventStatus.PUBLISHED
        self.processed_at = timezone.now()
        self.save(update_fields=["status", "processed_at"])

    def mark_as_failed(self, error: str) -> None:
        """Keep the handler error; ``retry_count`` counts failed relays."""
        self.status = EventStatus.FAILED
        self.error_message = error
        self.retry_count += 1
        self.save(update_fields=["status", "error_message", "retry_count"])

    def __str__(self) -> str:
        return f"{self.topic}:{self.event_type} [{self.status}] ({self.aggregate_id})"
