"""
API URL Configuration

Version 1 of the HireLink REST API lives under /api/v1/.
"""

from django.urls import include, path

app_name = 'api'

v1_patterns = [
    path('', include('jobs.urls')),
    path('', include('finance.urls')),
]

urlpatterns = [
    path('v1/', include((v1_patterns, 'v1'))),
]
