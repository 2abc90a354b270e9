"""
Transaction persistence.
"""

from typing import Optional, Protocol

from django.db.models import Q, QuerySet
from django.utils import timezone

from .models import Transaction


class TransactionStoreProtocol(Protocol):

    def get(self, transaction_id: str) -> Optional[Transaction]: ...

    def find_active_job_payment(self, job_id, payee_id) -> Optional[Transaction]: ...

    def create(self, **fields) -> Transaction: ...

    def mark_completed(self, transaction_id: str) -> bool: ...

    def mark_failed(self, transaction_id: str, reason: str) -> bool: ...


class TransactionStore:
    """ORM-backed transaction store."""

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return Transaction.objects.filter(transaction_id=transaction_id).first()

    def find_active_job_payment(self, job_id, payee_id) -> Optional[Transaction]:
        return Transaction.objects.filter(
            job_id=job_id,
            payee_id=payee_id,
            transaction_type=Transaction.TransactionType.JOB_PAYMENT,
        ).exclude(status=Transaction.Status.FAILED).first()

    def create(self, **fields) -> Transaction:
        return Transaction.objects.create(**fields)

    def mark_completed(self, transaction_id: str) -> bool:
        """Flip a pending row to completed. False when nothing was pending."""
        updated = Transaction.objects.filter(
            transaction_id=transaction_id,
            status=Transaction.Status.PENDING,
        ).update(
            status=Transaction.Status.COMPLETED,
            completed_at=timezone.now(),
            updated_at=timezone.now(),
        )
        return updated == 1

    def mark_failed(self, transaction_id: str, reason: str) -> bool:
        updated = Transaction.objects.filter(
            transaction_id=transaction_id,
            status=Transaction.Status.PENDING,
        ).update(
            status=Transaction.Status.FAILED,
            failure_reason=reason,
            updated_at=timezone.now(),
        )
        return updated == 1

    def for_user(self, user_id) -> QuerySet:
        return Transaction.objects.filter(
            Q(payer_id=user_id) | Q(payee_id=user_id)
        ).select_related('payer', 'payee', 'job').order_by('-created_at')
