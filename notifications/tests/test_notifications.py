"""
Notification Tests for HireLink

Tests the notification system including:
- Dispatcher idempotency and lifecycle messages
- Realtime push over the channel layer
- The notification Celery task
- Read state tracking
"""

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from notifications.models import Notification
from notifications.repositories import NotificationStore
from notifications.services import NotificationDispatcher, display_name, user_group_name
from notifications.tasks import send_notification_task


def payload(application=None, **overrides):
    data = {
        'title': 'Application Update',
        'message': 'Something happened.',
    }
    if application is not None:
        data['related_application_id'] = application.pk
        data['related_job_id'] = application.job_id
    data.update(overrides)
    return data


# ============================================================================
# DISPATCHER TESTS
# ============================================================================

@pytest.mark.services
@pytest.mark.django_db
class TestNotificationDispatcher:
    """Tests for NotificationDispatcher."""

    def test_send_creates_notification(self, specialist, application):
        result = NotificationDispatcher().send(
            specialist.pk, Notification.NotificationType.APPLICATION_REVIEWED, payload(application)
        )

        assert result.success is True
        assert result.created is True
        notification = Notification.objects.get(pk=result.notification_id)
        assert notification.recipient_id == specialist.pk
        assert notification.related_application_id == application.pk
        assert notification.is_read is False

    def test_send_is_idempotent_per_application(self, specialist, application):
        """Test a replayed event returns the first notification."""
        dispatcher = NotificationDispatcher()
        first = dispatcher.send(specialist.pk, 'application_rejected', payload(application))
        second = dispatcher.send(specialist.pk, 'application_rejected', payload(application))

        assert second.created is False
        assert second.notification_id == first.notification_id
        assert Notification.objects.count() == 1

    def test_different_types_are_separate(self, specialist, application):
        dispatcher = NotificationDispatcher()
        dispatcher.send(specialist.pk, 'application_reviewed', payload(application))
        dispatcher.send(specialist.pk, 'application_accepted', payload(application))

        assert Notification.objects.count() == 2

    def test_unrelated_notifications_are_not_deduplicated(self, specialist):
        dispatcher = NotificationDispatcher()
        dispatcher.send(specialist.pk, 'job_posted', payload())
        dispatcher.send(specialist.pk, 'job_posted', payload())

        assert Notification.objects.count() == 2

    def test_push_reaches_user_group(self, specialist, application):
        """Test the notification is pushed to every socket of the recipient."""
        # Setup
        layer = get_channel_layer()
        channel = async_to_sync(layer.new_channel)()
        async_to_sync(layer.group_add)(user_group_name(specialist.pk), channel)

        # Execute
        result = NotificationDispatcher().send(specialist.pk, 'application_reviewed', payload(application))

        # Verify
        assert result.pushed is True
        message = async_to_sync(layer.receive)(channel)
        assert message['type'] == 'notification.message'
        assert message['notification']['id'] == result.notification_id
        assert message['notification']['related_application'] == application.pk

    def test_accepted_message(self, application, specialist):
        NotificationDispatcher().accepted(application)

        notification = Notification.objects.get(recipient=specialist)
        assert notification.notification_type == 'application_accepted'
        assert application.job.title in notification.message
        assert notification.action_url == f'/applications/{application.pk}'

    def test_withdrawn_goes_to_employer(self, application, employer, specialist):
        NotificationDispatcher().withdrawn(application)

        notification = Notification.objects.get(recipient=employer)
        assert notification.sender_id == specialist.pk
        assert 'has withdrawn their application' in notification.message

    def test_received_goes_to_employer(self, application, employer):
        NotificationDispatcher().received(application)

        notification = Notification.objects.get(recipient=employer)
        assert notification.notification_type == 'application_received'

    def test_job_completed(self, job, employer, specialist):
        dispatcher = NotificationDispatcher()
        dispatcher.job_completed(job, employer.pk, is_employer=True)
        dispatcher.job_completed(job, specialist.pk)

        assert Notification.objects.get(recipient=employer).title == 'Job Completed'
        assert Notification.objects.get(recipient=specialist).message.startswith('Congratulations')

    def test_display_name(self, employer, user_factory):
        assert display_name(employer) == 'Acme Corp'

        person = user_factory(first_name='Ada', last_name='Lovelace')
        assert display_name(person) == 'Ada Lovelace'


# ============================================================================
# TASK TESTS
# ============================================================================

@pytest.mark.django_db
class TestSendNotificationTask:
    """Tests for send_notification_task."""

    def test_task_sends(self, specialist, application):
        result = send_notification_task.delay(
            specialist.pk, 'application_reviewed', payload(application)
        ).get()

        assert result['success'] is True
        assert result['created'] is True
        assert Notification.objects.filter(recipient=specialist).count() == 1

    def test_task_unknown_user(self):
        result = send_notification_task.delay(999999, 'job_posted', payload()).get()

        assert result['success'] is False
        assert Notification.objects.count() == 0


# ============================================================================
# READ STATE TESTS
# ============================================================================

@pytest.mark.models
@pytest.mark.django_db
class TestReadState:
    """Tests for read tracking."""

    def test_mark_as_read_and_unread(self, notification_factory):
        notification = notification_factory()

        notification.mark_as_read()
        notification.refresh_from_db()
        assert notification.is_read is True
        assert notification.read_at is not None

        notification.mark_as_unread()
        notification.refresh_from_db()
        assert notification.is_read is False
        assert notification.read_at is None

    def test_store_counts_and_marks_all(self, specialist, notification_factory):
        notification_factory.create_batch(3, recipient=specialist)
        notification_factory(recipient=specialist, is_read=True)
        store = NotificationStore()

        assert store.unread_count(specialist.pk) == 3
        assert store.mark_all_as_read(specialist.pk) == 3
        assert store.unread_count(specialist.pk) == 0
