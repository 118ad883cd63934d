"""Role gates for event handlers, read from the view's AuthService."""

from rest_framework.permissions import BasePermission

from accounts.domain import UserRole


class IsSignedIn(BasePermission):
    message = "Please sign in first."

    def has_permission(self, request, view) -> bool:
        return view.get_auth_service(request).is_signed_in()


class IsAdminRole(BasePermission):
    """Event management is reserved to ADMIN accounts."""

    message = "Only administrators can manage events."

    def has_permission(self, request, view) -> bool:
        service = view.get_auth_service(request)
        return service.is_signed_in() and service.get_signed_in_role() is UserRole.ADMIN
