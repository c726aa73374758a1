"""Abstract bases shared by every app, plus the outbox table.

``BaseModel`` gives each row a time-ordered UUIDv7 key and timestamps.
``SoftDeleteModel`` hides withdrawn rows behind ``.alive()`` without
breaking foreign keys that still point at them (order lines keep their
product after the farmer withdraws the listing).
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        # auto_now is skipped when update_fields leaves it out
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = [*update_fields, "updated_at"]
        super().save(*args, **kwargs)


class SoftDeleteQuerySet(models.QuerySet):
    def alive(self) -> SoftDeleteQuerySet:
        return self.filter(deleted_at__isnull=True)

    def delete(self) -> tuple[int, dict[str, int]]:
        now = timezone.now()
        count = self.alive().update(deleted_at=now, updated_at=now)
        return count, {self.model._meta.label: count}


class SoftDeleteModel(BaseModel):
    """``delete()`` stamps ``deleted_at``; ``objects`` still sees every row."""

    deleted_at = models.DateTimeField(null=True, blank=True, default=None, db_index=True)

    objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def delete(self, using=None, keep_parents=False) -> tuple[int, dict[str, int]]:
        if self.is_deleted:
            return 0, {}
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at"])
        return 1, {self._meta.label: 1}

    def restore(self) -> None:
        if self.is_deleted:
            self.deleted_at = None
            self.save(update_fields=["deleted_at"])


# ---------------------------------------------------------------------------
# Outbox
# ---------------------------------------------------------------------------


class OutboxStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PUBLISHED = "published", "Published"
    FAILED = "failed", "Failed"


class OutboxEvent(BaseModel):
    """A domain event written in the same transaction as its aggregate.

    Rows start ``pending``; the after-commit publisher flips them to
    ``published`` or ``failed``.  A rolled back checkout leaves no rows.
    """

    event_name = models.CharField(max_length=100)
    aggregate_id = models.CharField(max_length=64)
    stream = models.CharField(max_length=50)
    payload = models.JSONField()
    status = models.CharField(
        max_length=10, choices=OutboxStatus.choices, default=OutboxStatus.PENDING
    )
    published_at = models.DateTimeField(null=True, blank=True)
    last_error = models.TextField(blank=True, default="")
    attempts = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = "outbox_events"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["aggregate_id"], name="outbox_aggregate_idx"),
            models.Index(fields=["status", "created_at"], name="outbox_status_idx"),
        ]

    def mark_published(self) -> None:
        self.status = OutboxStatus.PUBLISHED
        self.published_at = timezone.now()
        self.attempts += 1
        self.save(update_fields=["status", "published_at", "attempts"])

    def mark_failed(self, error: str) -> None:
        self.status = OutboxStatus.FAILED
        self.last_error = error
        self.attempts += 1
        self.save(update_fields=["status", "last_error", "attempts"])

    def __str__(self) -> str:
        return f"{self.stream}:{self.event_name} {self.status}"
