import typing as t

from django.db import models, transaction
from pydantic import BaseModel

from common.utils import sanitize_text

T = t.TypeVar("T", bound=models.Model)


@transaction.atomic
def update_db_instance(
    instance: T,
    payload: BaseModel | None = None,
    *,
    exclude_unset: bool = True,
    exclude_defaults: bool = False,
    **kwargs: t.Any,
) -> T:
    """Updates a DB instance given a Pydantic payload, safely within a select_for_update lock.

    Free text values are sanitized before being stored.
    """
    instance = instance.__class__.objects.select_for_update().get(pk=instance.pk)  # type: ignore[attr-defined]
    data = payload.model_dump(exclude_unset=exclude_unset, exclude_defaults=exclude_defaults) if payload else {}
    data.update(**kwargs)
    for key, value in data.items():
        setattr(instance, key, sanitize_text(value))
    instance.save()
    return instance
