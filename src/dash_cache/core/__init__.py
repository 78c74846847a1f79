"""Cache collaborators: navigation tracking, route preloading and the identity boundary."""

from .models import AccountRole, AuthSession, NavigationState, UserProfile
from .route_preloader import DASHBOARD_ROUTES, RoutePreloader
from .page_transition import PageTransitionTracker
from .asgi_wrapper import PageCacheASGIWrapper
from .session_manager import PROFILE_PREFIX, AuthSessionManager, NotSignedInError

__all__ = [
    # Navigation
    "RoutePreloader",
    "DASHBOARD_ROUTES",
    "PageTransitionTracker",
    "PageCacheASGIWrapper",
    # Identity boundary
    "AuthSessionManager",
    "NotSignedInError",
    "PROFILE_PREFIX",
    # Models
    "AccountRole",
    "AuthSession",
    "UserProfile",
    "NavigationState",
]
