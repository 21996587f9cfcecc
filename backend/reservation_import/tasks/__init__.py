"""
Celery application factory.
"""

from celery import Celery
from celery.signals import worker_process_init

from reservation_import.core.config import settings
from reservation_import.core.logging import setup_logging

celery_app = Celery("reservations")
celery_app.config_from_object("celeryconfig")

# Auto-discover tasks in these modules
celery_app.autodiscover_tasks([
    "reservation_import.tasks.import_tasks",
])


@worker_process_init.connect
def _configure_worker_logging(**_kwargs) -> None:
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
