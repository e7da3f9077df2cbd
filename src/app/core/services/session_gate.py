"""Navigation-time route protection based on session presence."""
from dataclasses import dataclass

SIGNIN_PATH = "/signin"
SIGNUP_PATH = "/signup"
DASHBOARD_PATH = "/dashboard"
LANDING_PATH = "/"
CLIENTS_API_PATH = "/api/v1/clients"

PROTECTED_PREFIXES = (DASHBOARD_PATH, CLIENTS_API_PATH)
AUTH_PREFIXES = (SIGNIN_PATH, SIGNUP_PATH)


@dataclass(frozen=True)
class GateDecision:
    """Either proceed to the requested view or redirect to ``redirect_to``."""
    redirect_to: str | None = None

    @property
    def proceed(self) -> bool:
        return self.redirect_to is None


PROCEED = GateDecision()


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_protected(path: str) -> bool:
    return any(_matches(path, prefix) for prefix in PROTECTED_PREFIXES)


def is_auth_view(path: str) -> bool:
    return any(_matches(path, prefix) for prefix in AUTH_PREFIXES)


def is_gated(path: str) -> bool:
    """Whether the gate needs to resolve a session for this path at all."""
    return path == LANDING_PATH or is_protected(path) or is_auth_view(path)


def evaluate(path: str, has_session: bool) -> GateDecision:
    """
    Decide what to do with a navigation.

    | requested view          | session | decision              |
    |-------------------------|---------|-----------------------|
    | /dashboard...           | no      | redirect to /signin   |
    | /api/v1/clients...      | no      | redirect to /signin   |
    | /signin, /signup        | yes     | redirect to /dashboard|
    | /                       | either  | /dashboard or /signin |
    | anything else           | -       | proceed               |
    """
    if path == LANDING_PATH:
        return GateDecision(DASHBOARD_PATH if has_session else SIGNIN_PATH)
    if is_protected(path) and not has_session:
        return GateDecision(SIGNIN_PATH)
    if is_auth_view(path) and has_session:
        return GateDecision(DASHBOARD_PATH)
    return PROCEED
