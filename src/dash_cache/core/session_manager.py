from __future__ import annotations

import dataclasses
import logging
import typing as t

from dash_cache.cache.manager import CacheManager
from dash_cache.identity.base import AuthenticationError, IdentityProvider, ProfileNotFoundError
from dash_cache.utils.config import ResilienceConfig
from dash_cache.utils.resilience import CircuitBreaker, CircuitBreakerConfig, with_retries

from .models import AccountRole, AuthSession, UserProfile

_logger = logging.getLogger(__name__)

PROFILE_PREFIX = "profile:"

# Caller mistakes are never retried and never trip the breaker
_NON_TRANSIENT = (AuthenticationError, ProfileNotFoundError)
_RETRYABLE = (ConnectionError, TimeoutError)


class NotSignedInError(RuntimeError):
    """Raised when an operation needs a signed-in user and there is none."""


class AuthSessionManager:
    """Owns the signed-in session and the cached profile for one process.

    Profiles are cached under ``profile:<user_id>``. ``sign_out`` always
    clears the whole cache so a later session on the same process never
    sees the previous user's data.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        cache: CacheManager[t.Any],
        circuit_breaker: t.Optional[CircuitBreaker] = None,
        retry_attempts: int = 3,
        retry_backoff_ms: t.Optional[t.List[int]] = None,
        use_circuit_breaker: bool = True,
    ) -> None:
        self._provider = provider
        self._cache = cache
        # Without a breaker, provider calls go through retries only
        if use_circuit_breaker:
            self._breaker: t.Optional[CircuitBreaker] = circuit_breaker or CircuitBreaker(CircuitBreakerConfig())
        else:
            self._breaker = None
        self._retry_attempts = retry_attempts
        self._retry_backoff_ms = retry_backoff_ms or [100, 500, 2000]
        self._session: t.Optional[AuthSession] = None
        self._profile: t.Optional[UserProfile] = None

    @classmethod
    def from_config(
        cls,
        provider: IdentityProvider,
        cache: CacheManager[t.Any],
        config: ResilienceConfig,
    ) -> "AuthSessionManager":
        breaker = CircuitBreaker(
            CircuitBreakerConfig(
                failure_threshold=config.failure_threshold,
                reset_timeout_seconds=config.reset_timeout_seconds,
            )
        )
        return cls(
            provider,
            cache,
            circuit_breaker=breaker,
            retry_attempts=config.retry_max_attempts,
            retry_backoff_ms=list(config.retry_backoff_ms),
            use_circuit_breaker=config.circuit_breaker_enabled,
        )

    @property
    def session(self) -> t.Optional[AuthSession]:
        return self._session

    @property
    def profile(self) -> t.Optional[UserProfile]:
        return self._profile

    async def _call(self, op: t.Callable[[], t.Awaitable[t.Any]]) -> t.Any:
        async def _retrying() -> t.Any:
            return await with_retries(
                op,
                self._retry_attempts,
                self._retry_backoff_ms,
                retry_on=_RETRYABLE,
            )

        if self._breaker is None:
            return await _retrying()
        return await self._breaker.run(_retrying, ignore=_NON_TRANSIENT)

    async def sign_up(self, email: str, password: str, full_name: str, role: t.Union[str, AccountRole]) -> UserProfile:
        try:
            account_role = AccountRole(role)
        except ValueError:
            raise ValueError(f"role must be one of {[r.value for r in AccountRole]}, got {role!r}") from None

        async def _op() -> UserProfile:
            return await self._provider.sign_up(email, password, full_name, account_role)

        profile = await self._call(_op)
        _logger.info("Signed up user id=%s role=%s", profile.id, account_role.value)
        return profile

    async def sign_in(self, email: str, password: str) -> AuthSession:
        async def _op() -> AuthSession:
            return await self._provider.sign_in(email, password)

        session = await self._call(_op)
        self._enter(session)
        _logger.info("Signed in user id=%s", session.user_id)
        await self.fetch_profile(session.user_id)
        return session

    async def restore(self, access_token: str) -> t.Optional[AuthSession]:
        """Resume an existing upstream session, e.g. at process start.

        Returns ``None`` and drops any current session when the token is
        unknown to the provider.
        """

        async def _op() -> t.Optional[AuthSession]:
            return await self._provider.get_session(access_token)

        session = await self._call(_op)
        if session is None:
            if self._session is not None:
                self._cache.clear()
            self._session = None
            self._profile = None
            return None
        self._enter(session)
        _logger.info("Restored session for user id=%s", session.user_id)
        await self.fetch_profile(session.user_id)
        return session

    async def is_healthy(self) -> bool:
        return await self._provider.is_healthy()

    def _enter(self, session: AuthSession) -> None:
        if self._session is not None and self._session.user_id != session.user_id:
            # Identity boundary crossed without an explicit sign-out
            self._cache.clear()
        self._session = session

    async def fetch_profile(self, user_id: str) -> UserProfile:
        key = PROFILE_PREFIX + user_id
        cached = self._cache.get(key)
        if cached is None:

            async def _op() -> UserProfile:
                return await self._provider.fetch_profile(user_id)

            cached = await self._call(_op)
            self._cache.set(key, cached)
        # Callers get their own copy; the cached record stays untouched
        self._profile = _copy_profile(cached)
        return self._profile

    async def update_profile(self, updates: dict) -> UserProfile:
        if self._session is None:
            raise NotSignedInError("No user logged in")
        user_id = self._session.user_id

        async def _op() -> None:
            await self._provider.update_profile(user_id, updates)

        await self._call(_op)
        self._cache.delete(PROFILE_PREFIX + user_id)
        return await self.fetch_profile(user_id)

    async def sign_out(self) -> None:
        session = self._session
        try:
            if session is not None:

                async def _op() -> None:
                    await self._provider.sign_out(session)

                await self._call(_op)
        finally:
            # Clear even if the upstream sign-out failed
            self._cache.clear()
            self._session = None
            self._profile = None
        if session is not None:
            _logger.info("Signed out user id=%s", session.user_id)


def _copy_profile(profile: UserProfile) -> UserProfile:
    return dataclasses.replace(profile, metadata=dict(profile.metadata))
