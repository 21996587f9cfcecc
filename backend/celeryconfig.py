"""
Celery configuration for the reservation import workers.

Loaded by `celery_app.config_from_object("celeryconfig")` in
reservation_import/tasks/__init__.py.  Broker/result-backend URLs come
from the same Settings as the rest of the application.
"""

from reservation_import.core.config import settings

# ═══════════════════════════════════════════════════════════
#  Broker & Result Backend
# ═══════════════════════════════════════════════════════════

broker_url = settings.CELERY_BROKER_URL
result_backend = settings.CELERY_RESULT_BACKEND

# ═══════════════════════════════════════════════════════════
#  Serialization (JSON only)
# ═══════════════════════════════════════════════════════════

task_serializer = "json"
result_serializer = "json"
accept_content = ["json"]

# ═══════════════════════════════════════════════════════════
#  Timezone
# ═══════════════════════════════════════════════════════════

timezone = "UTC"
enable_utc = True

# ═══════════════════════════════════════════════════════════
#  Task Execution
# ═══════════════════════════════════════════════════════════

# Acknowledge after the job returns; a crashed worker means redelivery.
task_acks_late = True
task_reject_on_worker_lost = True

# One job per worker slot, rows are processed strictly in order.
worker_prefetch_multiplier = 1

# Large workbooks stream for a while.
task_soft_time_limit = 3600
task_time_limit = 3660

# ═══════════════════════════════════════════════════════════
#  Retry Policy (per-task autoretry lives on the task decorator)
# ═══════════════════════════════════════════════════════════

task_default_retry_delay = settings.QUEUE_BACKOFF_SECONDS
task_max_retries = max(0, settings.QUEUE_MAX_ATTEMPTS - 1)

# ═══════════════════════════════════════════════════════════
#  Result Expiry
# ═══════════════════════════════════════════════════════════

result_expires = 86400

# ═══════════════════════════════════════════════════════════
#  Worker Settings
# ═══════════════════════════════════════════════════════════

worker_max_tasks_per_child = 200
worker_send_task_events = False
task_send_sent_event = False

# Keep structlog's configuration instead of Celery's root logger setup.
worker_hijack_root_logger = False

# ═══════════════════════════════════════════════════════════
#  Task Routes
# ═══════════════════════════════════════════════════════════
# Run a dedicated worker:
#   celery -A reservation_import.tasks worker -Q imports

task_routes = {
    "reservation_import.tasks.import_tasks.*": {"queue": "imports"},
}

task_default_queue = "default"
