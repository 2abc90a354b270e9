"""
Accounts Models - Users, Roles and Marketplace Profiles

This module implements:
- A custom user model carrying the marketplace role
- Employer profiles with hiring counters and spending stats
- Specialist profiles with earnings stats and available balance

Counters on these models are only ever changed through F() updates in
accounts.repositories.UserStore.
"""

from decimal import Decimal

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils.translation import gettext_lazy as _


class User(AbstractUser):
    """Marketplace user. The role decides which profile applies."""

    class Role(models.TextChoices):
        SPECIALIST = 'specialist', _('Specialist')
        EMPLOYER = 'employer', _('Employer')
        PARTNER = 'partner', _('Partner')
        ADMIN = 'admin', _('Administrator')

    # Roles allowed to post jobs and decide on applications
    HIRING_ROLES = {Role.EMPLOYER, Role.PARTNER}

    email = models.EmailField(_('email address'), unique=True)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.SPECIALIST,
        db_index=True
    )

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')

    def __str__(self):
        return self.get_full_name() or self.username

    @property
    def is_specialist(self) -> bool:
        return self.role == self.Role.SPECIALIST

    @property
    def can_hire(self) -> bool:
        return self.role in self.HIRING_ROLES


# =============================================================================
# HIRING STATS
# =============================================================================

class HiringStats(models.Model):
    """
    Abstract hiring counters shared by job postings and employer profiles.

    hiring_success_rate = total_hires / (total_hires + total_rejections) * 100
    response_rate = (total_hires + total_rejections) / total_applications_received * 100
    """

    total_applications_received = models.PositiveIntegerField(default=0)
    total_hires = models.PositiveIntegerField(default=0)
    total_rejections = models.PositiveIntegerField(default=0)
    hiring_success_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00')
    )
    response_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00')
    )

    class Meta:
        abstract = True


# =============================================================================
# PROFILES
# =============================================================================

class EmployerProfile(HiringStats):
    """Hiring side of an employer or partner account."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='employer_profile'
    )
    company_name = models.CharField(max_length=200, blank=True)

    # Decision counters
    hires_count = models.PositiveIntegerField(default=0)
    rejections_count = models.PositiveIntegerField(default=0)

    # Financial stats
    total_spent = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_transactions = models.PositiveIntegerField(default=0)
    total_jobs_completed = models.PositiveIntegerField(default=0)
    average_job_value = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    last_payment_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Employer Profile')
        verbose_name_plural = _('Employer Profiles')

    def __str__(self):
        return self.company_name or f"Employer {self.user_id}"


class SpecialistProfile(models.Model):
    """Earning side of a specialist account."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='specialist_profile'
    )
    headline = models.CharField(max_length=200, blank=True)

    # Financial stats
    total_earned = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_transactions = models.PositiveIntegerField(default=0)
    total_jobs_completed = models.PositiveIntegerField(default=0)
    available_balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    average_job_value = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    last_payment_received = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Specialist Profile')
        verbose_name_plural = _('Specialist Profiles')

    def __str__(self):
        return self.headline or f"Specialist {self.user_id}"
