"""
ApplicationService tests.
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.utils import timezone

from accounts.models import EmployerProfile
from api.exceptions import ApplicationNotAllowedError, ResourceAlreadyExistsError
from jobs.models import Application, ApplicationActivity
from jobs.services import ApplicationService
from notifications.models import Notification
from notifications.services import NotificationDispatcher


@pytest.mark.services
@pytest.mark.django_db
class TestApplicationService:
    """Tests for ApplicationService.apply."""

    def test_apply_creates_application(self, job, specialist, employer):
        """Test successful application creation."""
        # Execute
        application = ApplicationService().apply(
            job,
            specialist,
            cover_letter='I have built this twice before.',
            proposed_rate=Decimal('950.00'),
            proposed_currency='USD',
            unexpected='ignored',
        )

        # Verify
        assert application.status == Application.ApplicationStatus.PENDING
        assert application.version == 1
        assert application.proposed_rate == Decimal('950.00')
        assert ApplicationActivity.objects.filter(
            application=application,
            activity_type=ApplicationActivity.ActivityType.CREATED,
        ).count() == 1

        job.refresh_from_db()
        assert job.applications_count == 1
        assert job.total_applications_received == 1
        assert EmployerProfile.objects.get(user=employer).total_applications_received == 1

    def test_employer_notified_after_commit(
        self, job, specialist, employer, django_capture_on_commit_callbacks
    ):
        """Test the employer hears about the application once it is committed."""
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            application = ApplicationService().apply(job, specialist)

        assert len(callbacks) == 1
        notification = Notification.objects.get(recipient=employer)
        assert notification.notification_type == 'application_received'
        assert notification.related_application_id == application.pk
        assert notification.sender_id == specialist.pk

    def test_notification_error_keeps_application(
        self, job, specialist, django_capture_on_commit_callbacks
    ):
        with patch.object(NotificationDispatcher, 'received_payload', side_effect=RuntimeError('broker down')):
            with django_capture_on_commit_callbacks(execute=True):
                application = ApplicationService().apply(job, specialist)

        assert Application.objects.filter(pk=application.pk).exists()
        assert Notification.objects.count() == 0

    def test_employer_cannot_apply(self, job, employer_factory):
        with pytest.raises(ApplicationNotAllowedError):
            ApplicationService().apply(job, employer_factory())

    def test_closed_job(self, job_factory, specialist):
        job = job_factory(status='paused')

        with pytest.raises(ApplicationNotAllowedError) as exc_info:
            ApplicationService().apply(job, specialist)

        assert 'no longer accepting' in str(exc_info.value.detail)

    def test_deadline_passed(self, job_factory, specialist):
        job = job_factory(application_deadline=timezone.now() - timedelta(days=1))

        with pytest.raises(ApplicationNotAllowedError) as exc_info:
            ApplicationService().apply(job, specialist)

        assert 'deadline' in str(exc_info.value.detail)
        assert Application.objects.count() == 0

    def test_duplicate_application(self, job, specialist):
        service = ApplicationService()
        service.apply(job, specialist)

        with pytest.raises(ResourceAlreadyExistsError) as exc_info:
            service.apply(job, specialist)

        assert exc_info.value.extra_data['conflicting_fields'] == ['job', 'applicant']
        job.refresh_from_db()
        assert job.applications_count == 1
