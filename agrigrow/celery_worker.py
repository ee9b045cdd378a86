# agrigrow/celery_worker.py
from celery import Celery

from agrigrow.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "agrigrow",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# import tasks explicitly so the worker registers them
celery_app.conf.imports = (
    "agrigrow.services.notification_service",
)

celery_app.conf.timezone = "UTC"
