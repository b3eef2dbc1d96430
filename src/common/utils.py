import re
import typing as t

from django.db import IntegrityError, models, transaction

T = t.TypeVar("T", bound=models.Model)

TAG_RE = re.compile(r"<[^>]*>")
CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_text(value: t.Any) -> t.Any:
    """Trim free text and drop markup tags and control characters.

    Text is stored raw, so applying this twice gives the same result. Escaping is left
    to whoever renders the value. Non-string values are returned untouched.
    """
    if not isinstance(value, str):
        return value
    return CONTROL_RE.sub("", TAG_RE.sub("", value)).strip()


def get_or_create_with_race_protection(
    model: type[T],
    lookup_filter: models.Q,
    defaults: dict[str, t.Any],
) -> tuple[T, bool]:
    """Get or create a model instance with protection against race conditions.

    Attempts to retrieve an instance matching the lookup filter. If not found,
    creates one using the defaults. Handles IntegrityError from race conditions
    by retrying the lookup.

    Args:
        model: The Django model class
        lookup_filter: Q object for filtering the lookup
        defaults: Dictionary of field values for creating the instance

    Returns:
        Tuple of (instance, created) where created is True if the instance was created

    Example:
        company, created = get_or_create_with_race_protection(
            Company,
            Q(cnpj="11222333000181"),
            {"cnpj": "11222333000181", "razao_social": "ACME LTDA"},
        )
    """
    manager: models.Manager[T] = getattr(model, "objects")
    instance = manager.filter(lookup_filter).first()
    if instance:
        return instance, False

    try:
        with transaction.atomic():
            return manager.create(**defaults), True
    except IntegrityError:
        # Race condition: another request created it between our check and create
        instance = manager.filter(lookup_filter).first()
        if not instance:
            raise
        return instance, False
