"""
Notification Models for In-App Notifications.

Notifications are created once and never edited afterwards, except for
toggling their read state.
"""

import uuid
from django.db import models
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Notification(models.Model):
    """
    In-app notification addressed to a single user.
    """

    class NotificationType(models.TextChoices):
        JOB_POSTED = 'job_posted', _('Job Posted')
        APPLICATION_RECEIVED = 'application_received', _('Application Received')
        APPLICATION_REVIEWED = 'application_reviewed', _('Application Reviewed')
        APPLICATION_ACCEPTED = 'application_accepted', _('Application Accepted')
        APPLICATION_REJECTED = 'application_rejected', _('Application Rejected')
        APPLICATION_WITHDRAWN = 'application_withdrawn', _('Application Withdrawn')
        JOB_COMPLETED = 'job_completed', _('Job Completed')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
        help_text=_("User who receives this notification")
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sent_notifications',
        help_text=_("User who triggered this notification (optional)")
    )
    notification_type = models.CharField(
        max_length=50,
        choices=NotificationType.choices,
        db_index=True
    )

    # Content
    title = models.CharField(max_length=255)
    message = models.TextField()
    action_url = models.CharField(blank=True, max_length=500)

    # Related objects
    related_job = models.ForeignKey(
        'jobs.Job',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notifications'
    )
    related_application = models.ForeignKey(
        'jobs.Application',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notifications'
    )

    # Read tracking
    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', '-created_at'], name='notif_recipient_created_idx'),
            models.Index(fields=['recipient', 'is_read'], name='notif_recipient_read_idx'),
            models.Index(fields=['notification_type', 'created_at'], name='notif_type_created_idx'),
        ]
        verbose_name = _('Notification')
        verbose_name_plural = _('Notifications')

    def __str__(self):
        return f"{self.notification_type}: {self.title} -> {self.recipient_id}"

    def mark_as_read(self):
        """Mark notification as read."""
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=['is_read', 'read_at'])

    def mark_as_unread(self):
        """Mark notification as unread."""
        if self.is_read:
            self.is_read = False
            self.read_at = None
            self.save(update_fields=['is_read', 'read_at'])
