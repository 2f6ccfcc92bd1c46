from celery import Celery

from jackpot.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    "jackpot",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["jackpot.workers.tasks.jackpot_tick"],
)

celery_app.conf.update(
    task_default_queue="q_jackpot",
    task_acks_late=False,
    worker_prefetch_multiplier=1,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    task_ignore_result=True,
    timezone="UTC",
    enable_utc=True,
)


@celery_app.task(name="jackpot.workers.celery_app.ping")
def ping() -> str:
    return "pong"
