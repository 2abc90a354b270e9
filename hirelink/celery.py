"""
Celery configuration for the HireLink project.

This module configures Celery for async task processing with:
- Auto-discovery of tasks from all registered Django apps
- Retry policies for side-effect replay
"""

import os
from celery import Celery
from kombu import Exchange, Queue

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hirelink.settings')

app = Celery('hirelink')

# namespace='CELERY' means all celery-related configuration keys
# should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()


# ==================== QUEUE CONFIGURATION ====================

default_exchange = Exchange('default', type='direct')
jobs_exchange = Exchange('jobs', type='direct')
notifications_exchange = Exchange('notifications', type='direct')

app.conf.task_queues = (
    Queue('default', default_exchange, routing_key='default'),
    Queue('jobs', jobs_exchange, routing_key='jobs'),
    Queue('notifications', notifications_exchange, routing_key='notifications'),
)

app.conf.task_default_queue = 'default'
app.conf.task_default_exchange = 'default'
app.conf.task_default_routing_key = 'default'


# ==================== TASK ROUTING ====================

app.conf.task_routes = {
    'jobs.tasks.*': {'queue': 'jobs', 'routing_key': 'jobs'},
    'notifications.tasks.*': {'queue': 'notifications', 'routing_key': 'notifications'},
}


# ==================== RETRY CONFIGURATION ====================

app.conf.task_default_retry_delay = 60  # 1 minute
app.conf.task_max_retries = 5


# ==================== SERIALIZATION ====================

app.conf.task_serializer = 'json'
app.conf.result_serializer = 'json'
app.conf.accept_content = ['json']
app.conf.timezone = 'UTC'
app.conf.enable_utc = True

# Results will be stored for 24 hours
app.conf.result_expires = 86400

