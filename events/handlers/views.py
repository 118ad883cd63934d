"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details

Each view gets an ``event_service_factory`` and an ``auth_service_factory``
(request -> service) from the URLconf; the auth service backs the role gates.
"""

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.services.auth_service import AuthService
from events.domain import DomainError, ErrorCode, Event, EventStatus
from events.handlers.permissions import IsAdminRole, IsSignedIn
from events.handlers.serializers import EventFormSerializer, EventSerializer, EventStatusSerializer
from events.services.event_service import EventService

ERROR_STATUS = {
    ErrorCode.INVALID_EVENT: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.LOAD_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.SAVE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.STATUS_UPDATE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    return Response({"error": error.message}, status=ERROR_STATUS[error.code])


class EventView(APIView):
    authentication_classes = ()
    auth_service_factory = None
    event_service_factory = None

    def get_auth_service(self, request: Request) -> AuthService:
        return self.auth_service_factory(request)

    def get_event_service(self, request: Request) -> EventService:
        return self.event_service_factory(request)

    def find_event(self, service: EventService, document_id: str) -> Event | None:
        """Look an event up in the full listing; the store has no single-get."""
        for event in async_to_sync(service.load_events)():
            if event.document_id == document_id:
                return event
        return None


class EventListView(EventView):
    """Handler for GET/POST /api/events"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAdminRole()]
        return [IsSignedIn()]

    def get(self, request: Request) -> Response:
        try:
            events = async_to_sync(self.get_event_service(request).load_events)()
        except DomainError as exc:
            return error_response(exc)
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        form = EventFormSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        data = form.validated_data
        try:
            async_to_sync(self.get_event_service(request).create_event)(
                data["title"],
                data["category"],
                data["location"],
                data["dateTimeMillis"],
                data["capacityTotal"],
                data["capacityRemaining"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response({"message": "Event created"}, status=status.HTTP_201_CREATED)


class EventDetailView(EventView):
    """Handler for PUT /api/events/{document_id}"""

    permission_classes = [IsAdminRole]

    def put(self, request: Request, document_id: str) -> Response:
        form = EventFormSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        data = form.validated_data
        service = self.get_event_service(request)
        try:
            existing = self.find_event(service, document_id)
            async_to_sync(service.update_event)(
                existing,
                data["title"],
                data["category"],
                data["location"],
                data["dateTimeMillis"],
                data["capacityTotal"],
                data["capacityRemaining"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response({"message": "Event updated"})


class EventStatusView(EventView):
    """Handler for POST /api/events/{document_id}/status"""

    permission_classes = [IsAdminRole]

    def post(self, request: Request, document_id: str) -> Response:
        form = EventStatusSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        target_status = EventStatus(form.validated_data["status"])
        service = self.get_event_service(request)
        try:
            event = self.find_event(service, document_id)
            async_to_sync(service.update_event_status)(event, target_status)
        except DomainError as exc:
            return error_response(exc)
        return Response({"message": f"Event is now {target_status.value}"})
