from accounts.handlers.views import RegisterView, SessionView, SignInView, SignOutView

__all__ = ["SignInView", "RegisterView", "SignOutView", "SessionView"]
