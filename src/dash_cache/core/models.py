from __future__ import annotations

import enum
import time
import typing as t
from dataclasses import dataclass, field


class AccountRole(str, enum.Enum):
    INDIVIDUAL = "individual"
    AGENCY = "agency"


@dataclass
class UserProfile:
    id: str
    email: str
    full_name: str
    role: AccountRole
    avatar_url: t.Optional[str] = None
    metadata: t.Dict[str, t.Any] = field(default_factory=dict)
    created_at: float = field(default_factory=lambda: time.time())
    updated_at: float = field(default_factory=lambda: time.time())


@dataclass
class AuthSession:
    user_id: str
    email: str
    access_token: str
    created_at: float = field(default_factory=lambda: time.time())


@dataclass(frozen=True)
class NavigationState:
    current_path: str
    previous_path: t.Optional[str]
    is_transitioning: bool
    location_key: str
