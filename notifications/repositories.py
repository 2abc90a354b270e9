"""
Notification persistence.
"""

from typing import Optional, Protocol

from django.utils import timezone

from .models import Notification


class NotificationStoreProtocol(Protocol):

    def create(self, **fields) -> Notification: ...

    def find_existing(self, recipient_id, notification_type: str, related_application_id) -> Optional[Notification]: ...


class NotificationStore:
    """ORM-backed notification store."""

    def create(self, **fields) -> Notification:
        return Notification.objects.create(**fields)

    def find_existing(self, recipient_id, notification_type: str, related_application_id) -> Optional[Notification]:
        return Notification.objects.filter(
            recipient_id=recipient_id,
            notification_type=notification_type,
            related_application_id=related_application_id,
        ).first()

    def unread_count(self, recipient_id) -> int:
        return Notification.objects.filter(recipient_id=recipient_id, is_read=False).count()

    def mark_all_as_read(self, recipient_id) -> int:
        return Notification.objects.filter(
            recipient_id=recipient_id,
            is_read=False
        ).update(is_read=True, read_at=timezone.now())
