"""Configuração do Celery"""
from celery import Celery
from celery.schedules import crontab
from football_hub.core.config import settings

celery_app = Celery(
    "football_hub",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["football_hub.tasks.sync_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=3600,
    worker_max_tasks_per_child=50,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)

celery_app.conf.beat_schedule = {
    # Ressincronização completa - a cada 6 horas
    "periodic-full-sync": {
        "task": "football_hub.tasks.sync_tasks.sync_all_leagues_task",
        "schedule": crontab(minute=0, hour="*/6"),
    },
}
