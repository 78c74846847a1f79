from .base import (
    AuthenticationError,
    IdentityError,
    IdentityProvider,
    InMemoryIdentityProvider,
    ProfileNotFoundError,
)

__all__ = [
    "IdentityProvider",
    "InMemoryIdentityProvider",
    "IdentityError",
    "AuthenticationError",
    "ProfileNotFoundError",
]
