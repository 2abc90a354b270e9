"""
Django Test Settings for the HireLink Project

This module contains test-specific settings that override the main settings
for faster and more isolated test execution.

Usage:
    pytest --ds=hirelink.settings_test
    python manage.py test --settings=hirelink.settings_test
"""

import tempfile

from .settings import *  # noqa: F401, F403

# =============================================================================
# TEST ENVIRONMENT CONFIGURATION
# =============================================================================

DEBUG = False
TESTING = True

# Use a faster password hasher for tests
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# =============================================================================
# DATABASE CONFIGURATION
# =============================================================================

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# =============================================================================
# CELERY CONFIGURATION
# =============================================================================

# Execute tasks synchronously during tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

# =============================================================================
# CHANNEL LAYERS CONFIGURATION
# =============================================================================

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer',
    },
}

# =============================================================================
# MARKETPLACE CONFIGURATION
# =============================================================================

RETRY_FAILED_SIDE_EFFECTS = False
NOTIFY_EMPLOYER_ON_WITHDRAWAL = False

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = Path(tempfile.mkdtemp())  # noqa: F405

# Minimal logging during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'CRITICAL',
    },
}
