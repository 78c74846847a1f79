from __future__ import annotations

import dataclasses
import time
import typing as t
import uuid
from abc import ABC, abstractmethod

from ..core.models import AccountRole, AuthSession, UserProfile


class IdentityError(Exception):
    """Base error raised by identity providers."""


class AuthenticationError(IdentityError):
    """Raised for unknown users, wrong passwords or duplicate sign-ups."""


class ProfileNotFoundError(IdentityError, LookupError):
    """Raised when no profile record exists for a user id."""


class IdentityProvider(ABC):
    """Boundary to the hosted identity/session service."""

    @abstractmethod
    async def sign_up(
        self, email: str, password: str, full_name: str, role: AccountRole
    ) -> UserProfile:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def sign_out(self, session: AuthSession) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def get_session(self, access_token: str) -> t.Optional[AuthSession]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def fetch_profile(self, user_id: str) -> UserProfile:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def update_profile(self, user_id: str, updates: dict) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def is_healthy(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError


class InMemoryIdentityProvider(IdentityProvider):
    """A simple in-memory provider for dev/test.

    Passwords are stored as given; not intended for production.
    """

    def __init__(self) -> None:
        self._users: t.Dict[str, t.Tuple[str, str]] = {}  # email -> (user_id, password)
        self._profiles: t.Dict[str, UserProfile] = {}
        self._sessions: t.Dict[str, AuthSession] = {}

    async def sign_up(self, email: str, password: str, full_name: str, role: AccountRole) -> UserProfile:
        if email in self._users:
            raise AuthenticationError(f"user already registered: {email}")
        user_id = str(uuid.uuid4())
        self._users[email] = (user_id, password)
        profile = UserProfile(id=user_id, email=email, full_name=full_name, role=role)
        self._profiles[user_id] = profile
        return dataclasses.replace(profile)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        record = self._users.get(email)
        if record is None or record[1] != password:
            raise AuthenticationError("invalid login credentials")
        session = AuthSession(user_id=record[0], email=email, access_token=uuid.uuid4().hex)
        self._sessions[session.access_token] = session
        return session

    async def sign_out(self, session: AuthSession) -> None:
        self._sessions.pop(session.access_token, None)

    async def get_session(self, access_token: str) -> t.Optional[AuthSession]:
        return self._sessions.get(access_token)

    async def fetch_profile(self, user_id: str) -> UserProfile:
        profile = self._profiles.get(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        # Hand out copies so callers can't mutate the stored record
        return dataclasses.replace(profile, metadata=dict(profile.metadata))

    async def update_profile(self, user_id: str, updates: dict) -> None:
        profile = self._profiles.get(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        for key, value in updates.items():
            if key == "id" or not hasattr(profile, key):
                continue
            setattr(profile, key, value)
        profile.updated_at = time.time()

    async def is_healthy(self) -> bool:
        return True
