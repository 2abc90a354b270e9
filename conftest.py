"""
HireLink Test Configuration - pytest fixtures and factories

This module provides:
- pytest-django configuration (see [tool.pytest.ini_options] in pyproject.toml)
- factory_boy factories for users, jobs, applications, transactions and
  notifications
- Shared fixtures for the application lifecycle tests

RUNNING TESTS:
# Run all tests
pytest -v

# Run by marker
pytest -m workflow -v
pytest -m services -v
pytest -m api -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

import factory
from factory.django import DjangoModelFactory


# ============================================================================
# USER FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    """Factory for the custom User model."""

    class Meta:
        model = 'accounts.User'
        django_get_or_create = ('email',)

    username = factory.LazyAttribute(lambda o: f"user_{uuid.uuid4().hex[:8]}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    password = factory.django.Password('testpass123')
    is_active = True
    role = 'specialist'


class SpecialistFactory(UserFactory):
    """Factory for specialist accounts."""

    role = 'specialist'


class EmployerFactory(UserFactory):
    """Factory for employer accounts."""

    role = 'employer'


class PartnerFactory(UserFactory):
    """Factory for partner accounts."""

    role = 'partner'


class EmployerProfileFactory(DjangoModelFactory):
    """Factory for employer profiles."""

    class Meta:
        model = 'accounts.EmployerProfile'
        django_get_or_create = ('user',)

    user = factory.SubFactory(EmployerFactory)
    company_name = factory.Faker('company')


class SpecialistProfileFactory(DjangoModelFactory):
    """Factory for specialist profiles."""

    class Meta:
        model = 'accounts.SpecialistProfile'
        django_get_or_create = ('user',)

    user = factory.SubFactory(SpecialistFactory)
    headline = factory.Faker('job')


# ============================================================================
# JOB FACTORIES
# ============================================================================

class JobFactory(DjangoModelFactory):
    """Factory for job postings."""

    class Meta:
        model = 'jobs.Job'

    posted_by = factory.SubFactory(EmployerFactory)
    title = factory.Faker('job')
    description = factory.Faker('text', max_nb_chars=300)
    status = 'active'
    salary_min = Decimal('500.00')
    salary_max = Decimal('1000.00')
    currency = 'USD'
    application_deadline = factory.LazyFunction(lambda: timezone.now() + timedelta(days=30))


class ApplicationFactory(DjangoModelFactory):
    """Factory for job applications."""

    class Meta:
        model = 'jobs.Application'

    job = factory.SubFactory(JobFactory)
    applicant = factory.SubFactory(SpecialistFactory)
    status = 'pending'
    cover_letter = factory.Faker('text', max_nb_chars=500)
    proposed_rate = Decimal('800.00')
    proposed_currency = 'USD'
    applied_at = factory.LazyFunction(lambda: timezone.now() - timedelta(hours=30))


class ApplicationActivityFactory(DjangoModelFactory):
    """Factory for application activities."""

    class Meta:
        model = 'jobs.ApplicationActivity'

    application = factory.SubFactory(ApplicationFactory)
    activity_type = 'status_change'
    performed_by = factory.SelfAttribute('application.job.posted_by')
    old_value = 'pending'
    new_value = 'reviewed'


# ============================================================================
# FINANCE FACTORIES
# ============================================================================

class TransactionFactory(DjangoModelFactory):
    """Factory for ledger transactions."""

    class Meta:
        model = 'finance.Transaction'

    transaction_type = 'job_payment'
    status = 'pending'
    amount = Decimal('500.00')
    platform_fee = Decimal('50.00')
    platform_fee_percentage = Decimal('10.00')
    net_amount = Decimal('450.00')
    currency = 'USD'
    payer = factory.SubFactory(EmployerFactory)
    payee = factory.SubFactory(SpecialistFactory)
    job = factory.SubFactory(JobFactory, posted_by=factory.SelfAttribute('..payer'))
    payment_method = 'bank_transfer'
    description = 'Payment for job completion'


# ============================================================================
# NOTIFICATION FACTORIES
# ============================================================================

class NotificationFactory(DjangoModelFactory):
    """Factory for in-app notifications."""

    class Meta:
        model = 'notifications.Notification'

    recipient = factory.SubFactory(SpecialistFactory)
    notification_type = 'application_reviewed'
    title = factory.Faker('sentence', nb_words=4)
    message = factory.Faker('sentence')
    is_read = False


# ============================================================================
# PYTEST FIXTURES
# ============================================================================

@pytest.fixture
def user_factory(db):
    """Provide UserFactory for tests."""
    return UserFactory


@pytest.fixture
def specialist_factory(db):
    """Provide SpecialistFactory for tests."""
    return SpecialistFactory


@pytest.fixture
def employer_factory(db):
    """Provide EmployerFactory for tests."""
    return EmployerFactory


@pytest.fixture
def partner_factory(db):
    """Provide PartnerFactory for tests."""
    return PartnerFactory


@pytest.fixture
def employer_profile_factory(db):
    """Provide EmployerProfileFactory for tests."""
    return EmployerProfileFactory


@pytest.fixture
def specialist_profile_factory(db):
    """Provide SpecialistProfileFactory for tests."""
    return SpecialistProfileFactory


@pytest.fixture
def job_factory(db):
    """Provide JobFactory for tests."""
    return JobFactory


@pytest.fixture
def application_factory(db):
    """Provide ApplicationFactory for tests."""
    return ApplicationFactory


@pytest.fixture
def application_activity_factory(db):
    """Provide ApplicationActivityFactory for tests."""
    return ApplicationActivityFactory


@pytest.fixture
def transaction_factory(db):
    """Provide TransactionFactory for tests."""
    return TransactionFactory


@pytest.fixture
def notification_factory(db):
    """Provide NotificationFactory for tests."""
    return NotificationFactory


@pytest.fixture
def employer(db):
    """Employer with a profile."""
    profile = EmployerProfileFactory(company_name='Acme Corp')
    return profile.user


@pytest.fixture
def specialist(db):
    """Specialist with a profile."""
    return SpecialistProfileFactory().user


@pytest.fixture
def job(db, employer):
    """Active job posted by the employer fixture, salary_max 1000."""
    return JobFactory(posted_by=employer, title='Backend Developer')


@pytest.fixture
def application(db, job, specialist):
    """Pending application from the specialist fixture."""
    return ApplicationFactory(job=job, applicant=specialist)


@pytest.fixture
def api_client(db):
    """Provide DRF API client."""
    from rest_framework.test import APIClient
    return APIClient()
