"""
Celery application running Salesforce course syncs in the background.
"""

from celery import Celery, signals

from src.settings import app_settings

REDIS_URL = app_settings.get_env("REDIS_URL", "redis://localhost:6379")

celery_app = Celery(
    app_settings.app_name,
    broker=f"{REDIS_URL}/0",
    backend=f"{REDIS_URL}/1",
    include=["src.crm.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    enable_utc=True,
    worker_concurrency=app_settings.get_int_env("CELERY_CONCURRENCY", 4),
    task_time_limit=300,
    task_soft_time_limit=240,
    task_routes={
        "src.crm.tasks.*": {"queue": "salesforce"},
    },
)


@signals.setup_logging.connect
def configure_worker_logging(**kwargs):
    from src.util.logging import setup_logging

    setup_logging(log_level="DEBUG" if app_settings.debug else "INFO")


@signals.worker_init.connect
def init_worker_sentry(**kwargs):
    from src.util.sentry import init as init_sentry

    init_sentry()
