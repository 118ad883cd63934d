from django.urls import path

from accounts.handlers import RegisterView, SessionView, SignInView, SignOutView
from eventdesk.services import build_auth_service

urlpatterns = [
    path("auth/sign-in", SignInView.as_view(auth_service_factory=build_auth_service), name="sign-in"),
    path("auth/register", RegisterView.as_view(auth_service_factory=build_auth_service), name="register"),
    path("auth/sign-out", SignOutView.as_view(auth_service_factory=build_auth_service), name="sign-out"),
    path("auth/session", SessionView.as_view(auth_service_factory=build_auth_service), name="session"),
]
