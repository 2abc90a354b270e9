"""
Celery Tasks for Notifications.
"""

import logging
from typing import Any, Dict

from celery import shared_task
from django.contrib.auth import get_user_model

logger = logging.getLogger(__name__)
User = get_user_model()


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_backoff_max=600,
    queue='notifications'
)
def send_notification_task(
    self,
    recipient_id: int,
    notification_type: str,
    payload: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Celery task to send a notification asynchronously.

    Args:
        recipient_id: ID of the user to send notification to
        notification_type: Type of notification
        payload: Same keys NotificationDispatcher.send accepts

    Returns:
        Dict with results of send operation
    """
    from .services import notification_dispatcher

    if not User.objects.filter(pk=recipient_id).exists():
        logger.error(f"User {recipient_id} not found for notification")
        return {'success': False, 'error': f'User {recipient_id} not found'}

    result = notification_dispatcher.send(recipient_id, notification_type, payload)
    return {
        'success': result.success,
        'recipient_id': recipient_id,
        'notification_id': result.notification_id,
        'created': result.created,
    }
