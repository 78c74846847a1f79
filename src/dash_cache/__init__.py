"""dash_cache

A bounded, in-memory TTL cache for a social-media dashboard process, plus
the collaborators that feed it: route preloading, page-transition tracking
and an identity boundary that clears the cache on sign-out.

The library itself does not import non-stdlib dependencies.
"""

from .cache import CacheEntry, CacheManager
from .core import (
    AccountRole,
    AuthSession,
    AuthSessionManager,
    NavigationState,
    NotSignedInError,
    PageCacheASGIWrapper,
    PageTransitionTracker,
    RoutePreloader,
    UserProfile,
)
from .identity import (
    AuthenticationError,
    IdentityProvider,
    InMemoryIdentityProvider,
    ProfileNotFoundError,
)
from .utils import CacheConfig, DashCacheConfig, ResilienceConfig

__all__ = [
    "CacheManager",
    "CacheEntry",
    "RoutePreloader",
    "PageTransitionTracker",
    "PageCacheASGIWrapper",
    "AuthSessionManager",
    "NotSignedInError",
    "IdentityProvider",
    "InMemoryIdentityProvider",
    "AuthenticationError",
    "ProfileNotFoundError",
    "AccountRole",
    "AuthSession",
    "UserProfile",
    "NavigationState",
    "CacheConfig",
    "ResilienceConfig",
    "DashCacheConfig",
]

__version__ = "0.1.0"
