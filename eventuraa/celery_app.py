from celery import Celery

from eventuraa.config import settings

# Redis URL for broker and result backend
celery_app = Celery(
    "eventuraa",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["eventuraa.tasks"],  # Auto-discover tasks from this module
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_time_limit=60,
    task_soft_time_limit=50,
    worker_prefetch_multiplier=1,
)
