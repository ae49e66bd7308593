"""Configuração do Celery"""
from datetime import timedelta
from celery import Celery
from app.core.config import settings

celery_app = Celery(
    'babyfoot_stats',
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=['app.tasks.integrity'],
)

celery_app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    task_track_started=True,
    task_time_limit=600,
    worker_max_tasks_per_child=50,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)

# Intervalo fixo: vale também para 60 minutos ou mais
INTEGRITY_CHECK_INTERVAL = timedelta(minutes=settings.INTEGRITY_CHECK_MINUTES)

celery_app.conf.beat_schedule = {
    # Auditoria dos contadores agregados contra as participações
    'audit-player-statistics': {
        'task': 'app.tasks.integrity.audit_player_statistics',
        'schedule': INTEGRITY_CHECK_INTERVAL,
    },
}
