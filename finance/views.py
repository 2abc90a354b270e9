"""
Finance API Views

Endpoints:
    GET /api/v1/transactions/            The user's transactions
    GET /api/v1/transactions/summary/    The user's financial summary
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from api.base import APIResponse

from .serializers import FinancialSummarySerializer, TransactionSerializer
from .services import LedgerService


class TransactionListView(APIView):
    """Transactions where the current user is payer or payee."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        transactions = LedgerService().get_user_transactions(request.user)
        return APIResponse.success(data=TransactionSerializer(transactions, many=True).data)


class FinancialSummaryView(APIView):
    """Totals over the current user's completed transactions."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        summary = LedgerService().get_financial_summary(request.user)
        return APIResponse.success(data=FinancialSummarySerializer(summary).data)
