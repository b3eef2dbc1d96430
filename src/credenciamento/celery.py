"""Celery setup for credenciamento."""

import os
import typing as t

import structlog
from celery import Celery
from celery.signals import task_postrun, task_prerun

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "credenciamento.settings")

app = Celery("credenciamento")

# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()


@task_prerun.connect
def celery_task_prerun(task_id: str, task: t.Any, *args: t.Any, **kwargs: t.Any) -> None:
    """Bind Celery task context to structlog before task execution."""
    from django.conf import settings

    if not settings.ENABLE_OBSERVABILITY:
        return

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        task_id=task_id,
        task_name=task.name,
        retries=task.request.retries if hasattr(task.request, "retries") else 0,
    )


@task_postrun.connect
def celery_task_postrun(*args: t.Any, **kwargs: t.Any) -> None:
    """Clear structlog context after task execution."""
    from django.conf import settings

    if not settings.ENABLE_OBSERVABILITY:
        return

    structlog.contextvars.clear_contextvars()


# run:
# celery -A credenciamento worker -l INFO
# celery -A credenciamento beat -l INFO
