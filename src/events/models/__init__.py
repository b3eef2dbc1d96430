from .company import Company
from .event import Event
from .participant import TEMPORARY_EMAIL_DOMAIN, Participant
from .registration import CheckIn, Registration

__all__ = [
    "TEMPORARY_EMAIL_DOMAIN",
    "CheckIn",
    "Company",
    "Event",
    "Participant",
    "Registration",
]
