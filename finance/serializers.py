"""
Finance Serializers - DRF Serializers.
"""

from rest_framework import serializers

from .models import Transaction


class TransactionSerializer(serializers.ModelSerializer):
    """Ledger entry serializer (read-only)."""

    class Meta:
        model = Transaction
        fields = [
            'id', 'transaction_id', 'transaction_type', 'status', 'amount',
            'currency', 'platform_fee', 'platform_fee_percentage', 'net_amount',
            'payer', 'payee', 'job', 'application', 'payment_method',
            'description', 'created_at', 'completed_at',
        ]
        read_only_fields = fields


class FinancialSummarySerializer(serializers.Serializer):
    """Totals over a user's completed transactions."""
    total_paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_received = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_fees_paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    completed_jobs = serializers.IntegerField()
    total_transactions = serializers.IntegerField()
