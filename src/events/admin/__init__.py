# src/events/admin/__init__.py
"""Events admin module.

Django autodiscover will import this module, which triggers registration
of all admin classes via the @admin.register decorators in submodules.
"""

from events.admin.event import CompanyAdmin, EventAdmin
from events.admin.participant import CheckInAdmin, ParticipantAdmin, RegistrationAdmin

__all__ = [
    # Event
    "CompanyAdmin",
    "EventAdmin",
    # Participant
    "CheckInAdmin",
    "ParticipantAdmin",
    "RegistrationAdmin",
]
