"""
Jobs API tests.

Covers the status change, bulk status and apply endpoints and the error
envelope produced by hirelink_exception_handler.
"""

import pytest

from finance.models import Transaction
from jobs.models import Application


def status_url(pk):
    return f'/api/v1/applications/{pk}/status/'


BULK_URL = '/api/v1/applications/bulk-status/'


@pytest.mark.api
@pytest.mark.django_db
class TestApplicationStatusAPI:
    """Tests for POST /api/v1/applications/<id>/status/."""

    def test_review(self, api_client, application, employer):
        api_client.force_authenticate(user=employer)

        response = api_client.post(status_url(application.pk), {'status': 'reviewed'}, format='json')

        assert response.status_code == 200
        assert response.data['success'] is True
        assert response.data['data']['status'] == 'reviewed'
        assert response.data['data']['version'] == 2
        assert response.data['data']['warnings'] == []
        assert 'timestamp' in response.data['meta']

    def test_accept_creates_payment(self, api_client, application, employer):
        api_client.force_authenticate(user=employer)

        response = api_client.post(status_url(application.pk), {'status': 'accepted'}, format='json')

        assert response.status_code == 200
        assert response.data['data']['hired_at'] is not None
        assert Transaction.objects.filter(application=application).count() == 1

    def test_invalid_transition_envelope(self, api_client, application_factory, job, employer):
        """Test a refused edge returns 409 with both statuses in meta."""
        application = application_factory(job=job, status='rejected')
        api_client.force_authenticate(user=employer)

        response = api_client.post(status_url(application.pk), {'status': 'accepted'}, format='json')

        assert response.status_code == 409
        assert response.data['success'] is False
        assert response.data['data'] is None
        assert response.data['error_code'] == 'INVALID_TRANSITION'
        assert response.data['meta']['current_status'] == 'rejected'
        assert response.data['meta']['requested_status'] == 'accepted'

    def test_unknown_status(self, api_client, application, employer):
        api_client.force_authenticate(user=employer)

        response = api_client.post(status_url(application.pk), {'status': 'hired'}, format='json')

        assert response.status_code == 409
        assert response.data['error_code'] == 'INVALID_TRANSITION'

    def test_forbidden(self, api_client, application, specialist):
        api_client.force_authenticate(user=specialist)

        response = api_client.post(status_url(application.pk), {'status': 'accepted'}, format='json')

        assert response.status_code == 403
        assert response.data['error_code'] == 'PERMISSION_DENIED'
        application.refresh_from_db()
        assert application.status == 'pending'

    def test_not_found(self, api_client, employer):
        api_client.force_authenticate(user=employer)

        response = api_client.post(status_url(999999), {'status': 'reviewed'}, format='json')

        assert response.status_code == 404
        assert response.data['error_code'] == 'NOT_FOUND'

    def test_missing_status(self, api_client, application, employer):
        api_client.force_authenticate(user=employer)

        response = api_client.post(status_url(application.pk), {}, format='json')

        assert response.status_code == 400
        assert response.data['error_code'] == 'VALIDATION_ERROR'
        assert response.data['errors'][0]['field'] == 'status'

    def test_requires_authentication(self, api_client, application):
        response = api_client.post(status_url(application.pk), {'status': 'reviewed'}, format='json')

        assert response.status_code in (401, 403)
        assert response.data['success'] is False

    def test_withdraw_by_applicant(self, api_client, application, specialist):
        api_client.force_authenticate(user=specialist)

        response = api_client.post(status_url(application.pk), {'status': 'withdrawn'}, format='json')

        assert response.status_code == 200
        assert response.data['data']['withdrawn_at'] is not None


@pytest.mark.api
@pytest.mark.django_db
class TestBulkStatusAPI:
    """Tests for POST /api/v1/applications/bulk-status/."""

    def test_bulk_reject(self, api_client, job, employer, application_factory):
        applications = [application_factory(job=job) for _ in range(3)]
        api_client.force_authenticate(user=employer)

        response = api_client.post(
            BULK_URL,
            {'application_ids': [a.pk for a in applications], 'status': 'rejected'},
            format='json',
        )

        assert response.status_code == 200
        assert response.data['data']['updated'] == 3
        assert response.data['data']['failed'] == 0
        assert Application.objects.filter(job=job, status='rejected').count() == 3

    def test_bulk_only_accepts_decisions(self, api_client, application, employer):
        api_client.force_authenticate(user=employer)

        response = api_client.post(
            BULK_URL,
            {'application_ids': [application.pk], 'status': 'reviewed'},
            format='json',
        )

        assert response.status_code == 400
        assert response.data['error_code'] == 'VALIDATION_ERROR'

    def test_bulk_requires_ids(self, api_client, employer):
        api_client.force_authenticate(user=employer)

        response = api_client.post(BULK_URL, {'application_ids': [], 'status': 'rejected'}, format='json')

        assert response.status_code == 400


@pytest.mark.api
@pytest.mark.django_db
class TestJobApplyAPI:
    """Tests for POST /api/v1/jobs/<id>/apply/."""

    def test_apply(self, api_client, job, specialist):
        api_client.force_authenticate(user=specialist)

        response = api_client.post(
            f'/api/v1/jobs/{job.pk}/apply/',
            {'cover_letter': 'Available next week.', 'proposed_rate': '900.00'},
            format='json',
        )

        assert response.status_code == 201
        assert response.data['success'] is True
        assert response.data['data']['status'] == 'pending'
        assert response.data['data']['applicant'] == specialist.pk

    def test_apply_twice(self, api_client, job, specialist):
        api_client.force_authenticate(user=specialist)
        url = f'/api/v1/jobs/{job.pk}/apply/'

        api_client.post(url, {}, format='json')
        response = api_client.post(url, {}, format='json')

        assert response.status_code == 409
        assert response.data['error_code'] == 'ALREADY_EXISTS'

    def test_employer_cannot_apply(self, api_client, job, employer):
        api_client.force_authenticate(user=employer)

        response = api_client.post(f'/api/v1/jobs/{job.pk}/apply/', {}, format='json')

        assert response.status_code == 400
        assert response.data['error_code'] == 'APPLICATION_NOT_ALLOWED'

    def test_unknown_job(self, api_client, specialist):
        api_client.force_authenticate(user=specialist)

        response = api_client.post('/api/v1/jobs/999999/apply/', {}, format='json')

        assert response.status_code == 404
