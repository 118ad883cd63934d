from events.handlers.views import EventDetailView, EventListView, EventStatusView

__all__ = ["EventListView", "EventDetailView", "EventStatusView"]
