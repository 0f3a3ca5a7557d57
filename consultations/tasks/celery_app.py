from celery import Celery
from celery.signals import setup_logging as celery_setup_logging

from consultations.core.config import settings
from consultations.core.logging import setup_logging

celery_app = Celery(
    "consultations",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["consultations.tasks.notifications"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_ignore_result=True,
    # notifications are fire-and-forget: a broker outage must fail fast, not stall the caller
    task_publish_retry=False,
    broker_connection_timeout=2,
)


@celery_setup_logging.connect
def configure_worker_logging(**_) -> None:
    setup_logging()
