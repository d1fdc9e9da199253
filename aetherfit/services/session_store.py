"""User session storage consumed (read-only) by the dashboard."""
from __future__ import annotations

import threading
from typing import Protocol

from aetherfit.config import Settings
from aetherfit.models.schemas import UserProfile


class SessionStore(Protocol):
    def get(self, user_id: str) -> UserProfile | None:
        ...


class InMemorySessionStore:
    """Process-local profile store keyed by user id."""

    def __init__(self, profiles: list[UserProfile] | None = None) -> None:
        self._lock = threading.Lock()
        self._profiles: dict[str, UserProfile] = {}
        for profile in profiles or []:
            self.put(profile)

    @classmethod
    def with_demo_user(cls, settings: Settings) -> "InMemorySessionStore":
        return cls(
            [
                UserProfile(
                    user_id=settings.demo_user_id,
                    name=settings.demo_user_name,
                    email=settings.demo_user_email,
                    location=settings.demo_user_location,
                    primary_activity=settings.demo_user_activity,
                )
            ]
        )

    def get(self, user_id: str) -> UserProfile | None:
        with self._lock:
            return self._profiles.get(user_id)

    def put(self, profile: UserProfile) -> None:
        with self._lock:
            self._profiles[profile.user_id] = profile
