from __future__ import annotations
"""creomotion/workers/celery_app.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Celery app + routage + auto-import des modules de tâches.
"""
from celery import Celery

from creomotion.core.config import settings

celery = Celery("creomotion", broker=settings.REDIS_URL, backend=settings.REDIS_URL)

# Routage par files
celery.conf.task_routes = {
    "tasks.notify": {
        "queue": "notify",
        "rate_limit": "10/m",
    },
}

# Retries des notifications
celery.conf.task_default_retry_delay = 30
celery.conf.task_max_retries = 3

# Exécution in-process (tests, dev local sans Redis)
celery.conf.task_always_eager = settings.CELERY_TASK_ALWAYS_EAGER
celery.conf.task_eager_propagates = False

celery.conf.update(
    imports=[
        "creomotion.workers.tasks.notification_tasks",
    ],
)
