"""Django Unfold admin configuration."""

from django.urls import reverse_lazy
from django.utils.translation import gettext_lazy as _

from .base import SITE_NAME, VERSION

UNFOLD = {
    "SITE_TITLE": f"{SITE_NAME} v{VERSION} Admin",
    "SITE_HEADER": f"{SITE_NAME} v{VERSION}",
    "SITE_URL": "/",
    "DASHBOARD_CALLBACK": "credenciamento.dashboard.dashboard_callback",
    "SHOW_VIEW_ON_SITE": False,
    "SIDEBAR": {
        "show_search": True,
        "show_all_applications": False,
        "navigation": [
            {
                "title": _("Dashboard"),
                "separator": False,
                "items": [
                    {
                        "title": _("Dashboard"),
                        "icon": "home",
                        "link": reverse_lazy("admin:index"),
                    },
                ],
            },
            {
                "title": _("Users & Roles"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Users"),
                        "icon": "person",
                        "link": reverse_lazy("admin:accounts_adminuser_changelist"),
                    },
                    {
                        "title": _("Roles"),
                        "icon": "shield_person",
                        "link": reverse_lazy("admin:accounts_role_changelist"),
                    },
                ],
            },
            {
                "title": _("Credentialing"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Events"),
                        "icon": "event",
                        "link": reverse_lazy("admin:events_event_changelist"),
                    },
                    {
                        "title": _("Participants"),
                        "icon": "badge",
                        "link": reverse_lazy("admin:events_participant_changelist"),
                    },
                    {
                        "title": _("Companies"),
                        "icon": "business",
                        "link": reverse_lazy("admin:events_company_changelist"),
                    },
                    {
                        "title": _("Registrations"),
                        "icon": "how_to_reg",
                        "link": reverse_lazy("admin:events_registration_changelist"),
                    },
                    {
                        "title": _("Check-ins"),
                        "icon": "where_to_vote",
                        "link": reverse_lazy("admin:events_checkin_changelist"),
                    },
                ],
            },
        ],
    },
}
