"""
URL configuration for the jobs app.

Mounted under /api/v1/ by api.urls.
"""

from django.urls import path

from . import views

app_name = 'jobs'

urlpatterns = [
    path(
        'applications/bulk-status/',
        views.ApplicationBulkStatusView.as_view(),
        name='application-bulk-status'
    ),
    path(
        'applications/<int:pk>/status/',
        views.ApplicationStatusView.as_view(),
        name='application-status'
    ),
    path(
        'jobs/<int:pk>/apply/',
        views.JobApplyView.as_view(),
        name='job-apply'
    ),
]
