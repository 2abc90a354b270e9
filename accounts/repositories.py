"""
Accounts Repositories - User and profile counter access.

UserStore is the only writer of profile counters. Every increment, and the
average derived from it, is a single UPDATE with F() expressions so
concurrent hires, rejections and payments never lose an update.
"""

import logging
from decimal import Decimal
from typing import Dict, Optional, Protocol

from django.db.models import Case, DecimalField, ExpressionWrapper, F, Value, When
from django.utils import timezone

from accounts.models import EmployerProfile, SpecialistProfile

logger = logging.getLogger(__name__)


class UserStoreProtocol(Protocol):
    """Interface the transition engine and ledger depend on."""

    def employer_profile(self, user_id) -> EmployerProfile: ...

    def increment_employer_decisions(self, user_id, hires: int = 0, rejections: int = 0) -> None: ...

    def increment_applications_received(self, user_id) -> None: ...

    def employer_totals(self, user_id) -> Optional[Dict[str, int]]: ...

    def save_employer_rates(self, user_id, success_rate: Decimal, response_rate: Decimal) -> None: ...

    def record_payment_sent(self, user_id, amount: Decimal, job_completed: bool = True) -> None: ...

    def record_payment_received(self, user_id, net_amount: Decimal, job_completed: bool = True) -> None: ...


class UserStore:
    """ORM-backed user and profile store."""

    def employer_profile(self, user_id) -> EmployerProfile:
        profile, _ = EmployerProfile.objects.get_or_create(user_id=user_id)
        return profile

    def specialist_profile(self, user_id) -> SpecialistProfile:
        profile, _ = SpecialistProfile.objects.get_or_create(user_id=user_id)
        return profile

    # ==================== HIRING COUNTERS ====================

    def increment_employer_decisions(self, user_id, hires: int = 0, rejections: int = 0) -> None:
        """Bump the employer's decision counters and matching hiring totals."""
        profile = self.employer_profile(user_id)
        EmployerProfile.objects.filter(pk=profile.pk).update(
            hires_count=F('hires_count') + hires,
            total_hires=F('total_hires') + hires,
            rejections_count=F('rejections_count') + rejections,
            total_rejections=F('total_rejections') + rejections,
            updated_at=timezone.now(),
        )

    def increment_applications_received(self, user_id) -> None:
        profile = self.employer_profile(user_id)
        EmployerProfile.objects.filter(pk=profile.pk).update(
            total_applications_received=F('total_applications_received') + 1,
            updated_at=timezone.now(),
        )

    def employer_totals(self, user_id) -> Optional[Dict[str, int]]:
        return EmployerProfile.objects.filter(user_id=user_id).values(
            'total_hires', 'total_rejections', 'total_applications_received'
        ).first()

    def save_employer_rates(self, user_id, success_rate: Decimal, response_rate: Decimal) -> None:
        EmployerProfile.objects.filter(user_id=user_id).update(
            hiring_success_rate=success_rate,
            response_rate=response_rate,
            updated_at=timezone.now(),
        )

    # ==================== FINANCIAL STATS ====================

    def record_payment_sent(self, user_id, amount: Decimal, job_completed: bool = True) -> None:
        """Add a completed payment to the payer's spending stats."""
        profile = self.employer_profile(user_id)
        now = timezone.now()
        completed = 1 if job_completed else 0
        EmployerProfile.objects.filter(pk=profile.pk).update(
            total_spent=F('total_spent') + amount,
            total_transactions=F('total_transactions') + 1,
            total_jobs_completed=F('total_jobs_completed') + completed,
            average_job_value=_running_average('total_spent', amount, completed),
            last_payment_date=now,
            updated_at=now,
        )

    def record_payment_received(self, user_id, net_amount: Decimal, job_completed: bool = True) -> None:
        """Add a completed payment to the payee's earnings and balance."""
        profile = self.specialist_profile(user_id)
        now = timezone.now()
        completed = 1 if job_completed else 0
        SpecialistProfile.objects.filter(pk=profile.pk).update(
            total_earned=F('total_earned') + net_amount,
            available_balance=F('available_balance') + net_amount,
            total_transactions=F('total_transactions') + 1,
            total_jobs_completed=F('total_jobs_completed') + completed,
            average_job_value=_running_average('total_earned', net_amount, completed),
            last_payment_received=now,
            updated_at=now,
        )
        logger.info(f"Credited {net_amount} to specialist {user_id}")


def _running_average(total_field: str, amount: Decimal, completed: int):
    """
    average_job_value after this payment, computed by the UPDATE itself
    from the row's current totals.
    """
    money = DecimalField(max_digits=12, decimal_places=2)
    new_total = F(total_field) + Value(amount, output_field=money)
    average = ExpressionWrapper(
        new_total / (F('total_jobs_completed') + completed),
        output_field=money,
    )
    if completed:
        return average
    return Case(
        When(total_jobs_completed__gt=0, then=average),
        default=Value(Decimal('0.00')),
        output_field=money,
    )
