"""
WSGI config for the HireLink project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hirelink.settings')

application = get_wsgi_application()
