"""
Base Models for HireLink

This module provides abstract base model classes:
- TimeStampedModel: public UUID plus creation/update timestamps
- VersionedModel: optimistic locking through a version counter

Rows keep integer primary keys; the UUID is the identifier exposed to
clients.
"""

import uuid

from django.db import models
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.db.exceptions import ConcurrentModificationError


# =============================================================================
# TIMESTAMPED MODEL
# =============================================================================

class TimeStampedModel(models.Model):
    """
    Abstract base model with a public UUID and timestamps.

    Example:
        class MyModel(TimeStampedModel):
            name = models.CharField(max_length=100)
    """

    uuid = models.UUIDField(
        default=uuid.uuid4,
        unique=True,
        editable=False,
        verbose_name=_('UUID')
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        verbose_name=_('Created at')
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name=_('Updated at')
    )

    class Meta:
        abstract = True
        ordering = ['-created_at']
        get_latest_by = 'created_at'


# =============================================================================
# VERSIONED MODEL
# =============================================================================

class VersionedModel(TimeStampedModel):
    """
    Abstract model with an optimistic locking counter.

    Writes that must not race go through save_versioned(), which only
    updates the row when its version still matches the one read.
    """

    version = models.PositiveIntegerField(
        default=1,
        verbose_name=_('Version'),
        help_text=_('Record version for optimistic locking.')
    )

    class Meta:
        abstract = True

    def save_versioned(self, update_fields):
        """
        Persist update_fields with a compare-and-swap on version.

        Uses a single UPDATE filtered on the expected version and bumps the
        counter with an F() expression.

        Raises:
            ConcurrentModificationError: If the record was modified by another
                process since it was read.
        """
        model_class = self.__class__
        expected_version = self.version
        now = timezone.now()

        values = {name: getattr(self, name) for name in update_fields}
        values['updated_at'] = now
        values['version'] = F('version') + 1

        updated = model_class.objects.filter(
            pk=self.pk, version=expected_version
        ).update(**values)

        if not updated:
            actual_version = model_class.objects.filter(pk=self.pk).values_list(
                'version', flat=True
            ).first()
            raise ConcurrentModificationError(
                model_name=model_class.__name__,
                object_id=self.pk,
                expected_version=expected_version,
                actual_version=actual_version
            )

        self.version = expected_version + 1
        self.updated_at = now
