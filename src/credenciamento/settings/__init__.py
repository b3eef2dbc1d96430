# flake8: noqa: F401, F403
from .base import *
from .celery import *
from .ninja import *
from .observability import *
from .registries import *
from .unfold import *
