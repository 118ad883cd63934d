from django.urls import path

from eventdesk.services import build_auth_service, build_event_service
from events.handlers import EventDetailView, EventListView, EventStatusView

SERVICES = {
    "auth_service_factory": build_auth_service,
    "event_service_factory": build_event_service,
}

urlpatterns = [
    path("events", EventListView.as_view(**SERVICES), name="event-list"),
    path("events/<str:document_id>", EventDetailView.as_view(**SERVICES), name="event-detail"),
    path(
        "events/<str:document_id>/status",
        EventStatusView.as_view(**SERVICES),
        name="event-status",
    ),
]
