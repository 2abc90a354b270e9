"""
URL configuration for the finance app.

Mounted under /api/v1/ by api.urls.
"""

from django.urls import path

from . import views

app_name = 'finance'

urlpatterns = [
    path('transactions/', views.TransactionListView.as_view(), name='transaction-list'),
    path('transactions/summary/', views.FinancialSummaryView.as_view(), name='transaction-summary'),
]
