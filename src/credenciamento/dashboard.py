"""Dashboard callback for Django Unfold admin interface."""

import typing as t

from django.contrib.auth.models import AnonymousUser
from django.http import HttpRequest
from django.urls import reverse

from events.service.dashboard_service import build_dashboard


def dashboard_callback(request: HttpRequest, context: dict[str, t.Any]) -> dict[str, t.Any]:
    """Inject the credentialing numbers of the last 30 days into the admin index.

    Only staff and superusers get the data.
    """
    user = request.user
    if isinstance(user, AnonymousUser) or not (user.is_staff or user.is_superuser):
        return context

    dashboard = build_dashboard("month")
    context.update(
        {
            "dashboard": {
                "quick_actions": [
                    {"title": "API docs", "url": reverse("api:openapi-view"), "icon": "📖"},
                    {"title": "Events", "url": reverse("admin:events_event_changelist"), "icon": "📅"},
                    {"title": "Participants", "url": reverse("admin:events_participant_changelist"), "icon": "🪪"},
                ],
                "quick_stats": dashboard["summary"],
                "check_ins_last_7_days": {
                    "labels": [entry["day"].strftime("%d/%m") for entry in dashboard["chart_data"]],
                    "data": [entry["count"] for entry in dashboard["chart_data"]],
                },
                "top_events": dashboard["top_events"],
                "top_companies": dashboard["top_companies"],
            }
        }
    )
    return context
