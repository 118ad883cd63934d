"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details

Each view gets an ``auth_service_factory`` (request -> AuthService) from the
URLconf.
"""

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.domain import DomainError, ErrorCode
from accounts.handlers.serializers import AuthSessionSerializer, RegisterSerializer, SignInSerializer
from accounts.services.auth_service import AuthService

ERROR_STATUS = {
    ErrorCode.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.MISSING_ROLE: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PHONE_IN_USE: status.HTTP_409_CONFLICT,
    ErrorCode.BACKEND: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    return Response({"error": error.message}, status=ERROR_STATUS[error.code])


class AuthView(APIView):
    authentication_classes = ()
    auth_service_factory = None

    def get_auth_service(self, request: Request) -> AuthService:
        return self.auth_service_factory(request)


class SignInView(AuthView):
    """Handler for POST /api/auth/sign-in"""

    def post(self, request: Request) -> Response:
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = self.get_auth_service(request)
        try:
            session = async_to_sync(service.sign_in)(data["identifier"], data["password"])
        except DomainError as exc:
            return error_response(exc)
        return Response(AuthSessionSerializer(session).data)


class RegisterView(AuthView):
    """Handler for POST /api/auth/register"""

    def post(self, request: Request) -> Response:
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = self.get_auth_service(request)
        try:
            session = async_to_sync(service.register)(
                data["email"], data["phone"], data["password"], data["confirmPassword"]
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(AuthSessionSerializer(session).data, status=status.HTTP_201_CREATED)


class SignOutView(AuthView):
    """Handler for POST /api/auth/sign-out"""

    def post(self, request: Request) -> Response:
        self.get_auth_service(request).sign_out()
        return Response(status=status.HTTP_204_NO_CONTENT)


class SessionView(AuthView):
    """Handler for GET /api/auth/session"""

    def get(self, request: Request) -> Response:
        service = self.get_auth_service(request)
        role = service.get_signed_in_role()
        return Response(
            {
                "signedIn": service.is_signed_in(),
                "email": service.get_signed_in_email(),
                "role": role.value if role else None,
            }
        )
