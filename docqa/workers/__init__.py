"""
Celery workers module.

Async task processing for chunk embedding.

Dependencies: celery, docqa.configs, docqa.observability
System role: Background task processing
"""

from celery import Celery
from celery.signals import setup_logging

from docqa.configs import get_settings
from docqa.observability import configure_logging

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    "docqa",
    broker=celery_config.broker_url,
    backend=celery_config.result_backend_url,
    include=["docqa.workers.tasks.embedding"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    result_serializer=celery_config.result_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
    task_max_retries=celery_config.task_max_retries,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)


@setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Replace Celery's logging setup with the API's format and correlation IDs."""
    configure_logging(settings.log_level)
