"""Base abstract model shared by every persisted entity.

Provides ``BaseModel``: UUIDv7 primary key + ``created_at`` / ``updated_at``
timestamps.  ``updated_at`` is stamped explicitly in ``save()`` rather than
through ``auto_now`` so partial saves (``update_fields``) and full saves
follow the same rule: every mutation touches the timestamp.
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        abstract = True

    def touch(self) -> None:
        """Stamp ``updated_at`` with the current time."""
        self.updated_at = timezone.now()

    def save(self, *args, **kwargs) -> None:
        """Stamp ``updated_at`` and make sure it is written with ``update_fields``."""
        self.touch()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)
