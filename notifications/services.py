"""
Notification Services for Application Lifecycle Events.

NotificationDispatcher turns lifecycle events (new application, review,
acceptance, rejection, withdrawal, job completion) into in-app
notifications and pushes them to the recipient's channel group.

Sending is idempotent per (recipient, type, application): replaying an
event returns the notification created the first time.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from channels.layers import get_channel_layer
from asgiref.sync import async_to_sync

from .models import Notification
from .repositories import NotificationStore, NotificationStoreProtocol

logger = logging.getLogger(__name__)


@dataclass
class NotificationResult:
    """Result of a notification send operation."""
    success: bool
    notification_id: Optional[int] = None
    created: bool = False
    pushed: bool = False
    error_message: Optional[str] = None


def user_group_name(user_id) -> str:
    """Channels group every socket of a user joins."""
    return f"user_{user_id}"


def display_name(user) -> str:
    profile = getattr(user, 'employer_profile', None)
    if profile is not None and profile.company_name:
        return profile.company_name
    return user.get_full_name() or user.username


class NotificationDispatcher:
    """
    Creates in-app notifications and pushes them over the channel layer.

    The push is best-effort; a failure there is logged and reported on the
    result, never raised. Database errors while creating the notification
    propagate to the caller.
    """

    def __init__(self, store: NotificationStoreProtocol = None):
        self.store = store or NotificationStore()

    def send(self, recipient_id, notification_type: str, payload: Dict[str, Any]) -> NotificationResult:
        """
        Create a notification for recipient_id.

        Args:
            recipient_id: User receiving the notification
            notification_type: One of Notification.NotificationType
            payload: title, message and optional sender_id, related_job_id,
                related_application_id and action_url

        Returns:
            NotificationResult with created=False when an identical
            notification for the same application already existed
        """
        related_application_id = payload.get('related_application_id')

        if related_application_id is not None:
            existing = self.store.find_existing(
                recipient_id, notification_type, related_application_id
            )
            if existing is not None:
                logger.info(
                    f"Notification {notification_type} for application "
                    f"{related_application_id} already sent to user {recipient_id}"
                )
                return NotificationResult(success=True, notification_id=existing.id)

        notification = self.store.create(
            recipient_id=recipient_id,
            sender_id=payload.get('sender_id'),
            notification_type=notification_type,
            title=payload['title'],
            message=payload['message'],
            action_url=payload.get('action_url') or '',
            related_job_id=payload.get('related_job_id'),
            related_application_id=related_application_id,
        )

        pushed = self._push(notification)
        return NotificationResult(
            success=True,
            notification_id=notification.id,
            created=True,
            pushed=pushed,
        )

    def _push(self, notification: Notification) -> bool:
        """Send the notification to the recipient's websocket group."""
        try:
            channel_layer = get_channel_layer()
            if not channel_layer:
                return False

            async_to_sync(channel_layer.group_send)(
                user_group_name(notification.recipient_id),
                {
                    'type': 'notification.message',
                    'notification': {
                        'id': notification.id,
                        'uuid': str(notification.uuid),
                        'notification_type': notification.notification_type,
                        'title': notification.title,
                        'message': notification.message[:500],
                        'action_url': notification.action_url,
                        'related_job': notification.related_job_id,
                        'related_application': notification.related_application_id,
                        'created_at': notification.created_at.isoformat(),
                    },
                }
            )
            return True
        except Exception as e:
            logger.warning(f"Realtime push failed for notification {notification.id}: {e}")
            return False

    # ==================== LIFECYCLE EVENTS ====================

    @staticmethod
    def received_payload(application) -> Dict[str, Any]:
        job = application.job
        applicant = application.applicant
        return {
            'title': 'New Application Received',
            'message': f'{display_name(applicant)} has applied for your job "{job.title}".',
            'sender_id': applicant.id,
            'related_job_id': job.id,
            'related_application_id': application.id,
            'action_url': f'/applications/{application.id}',
        }

    def received(self, application) -> NotificationResult:
        """Tell the employer a specialist applied."""
        return self.send(
            application.job.posted_by_id,
            Notification.NotificationType.APPLICATION_RECEIVED,
            self.received_payload(application),
        )

    def reviewed(self, application) -> NotificationResult:
        job = application.job
        employer = job.posted_by
        return self.send(application.applicant_id, Notification.NotificationType.APPLICATION_REVIEWED, {
            'title': 'Application Under Review',
            'message': f'{display_name(employer)} is reviewing your application for "{job.title}".',
            'sender_id': employer.id,
            'related_job_id': job.id,
            'related_application_id': application.id,
            'action_url': f'/applications/{application.id}',
        })

    def accepted(self, application) -> NotificationResult:
        job = application.job
        return self.send(application.applicant_id, Notification.NotificationType.APPLICATION_ACCEPTED, {
            'title': 'Application Accepted! 🎉',
            'message': f'Congratulations! Your application for "{job.title}" has been accepted.',
            'sender_id': job.posted_by_id,
            'related_job_id': job.id,
            'related_application_id': application.id,
            'action_url': f'/applications/{application.id}',
        })

    def rejected(self, application) -> NotificationResult:
        job = application.job
        return self.send(application.applicant_id, Notification.NotificationType.APPLICATION_REJECTED, {
            'title': 'Application Update',
            'message': (
                f'Thank you for your interest in "{job.title}". '
                f"We've decided to move forward with other candidates."
            ),
            'sender_id': job.posted_by_id,
            'related_job_id': job.id,
            'related_application_id': application.id,
            'action_url': '/jobs',
        })

    def withdrawn(self, application) -> NotificationResult:
        job = application.job
        applicant = application.applicant
        return self.send(job.posted_by_id, Notification.NotificationType.APPLICATION_WITHDRAWN, {
            'title': 'Application Withdrawn',
            'message': f'{display_name(applicant)} has withdrawn their application for "{job.title}".',
            'sender_id': applicant.id,
            'related_job_id': job.id,
            'related_application_id': application.id,
            'action_url': f'/jobs/{job.id}',
        })

    def job_completed(self, job, recipient_id, is_employer: bool = False, application_id=None) -> NotificationResult:
        if is_employer:
            title = 'Job Completed'
            message = f'The job "{job.title}" has been marked as completed.'
        else:
            title = 'Job Completed! 🎉'
            message = f'Congratulations on completing the job "{job.title}"!'
        return self.send(recipient_id, Notification.NotificationType.JOB_COMPLETED, {
            'title': title,
            'message': message,
            'related_job_id': job.id,
            'related_application_id': application_id,
            'action_url': f'/jobs/{job.id}',
        })


# Singleton instance
notification_dispatcher = NotificationDispatcher()
