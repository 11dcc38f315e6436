"""Local profile and preference state."""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from urllib.parse import quote

from sun_planner.domain.exposure import SkinType
from sun_planner.domain.preferences import Theme
from sun_planner.domain.profile import SunSession, UserProfile

PROFILE_KEY = "sun_planner_user"
THEME_KEY = "sun_planner_theme"

DEFAULT_NAME = "Sun Lover"
DEFAULT_EMAIL = "user@example.com"
DEFAULT_AVATAR_URL = (
    "https://images.unsplash.com/photo-1535713875002-d1d0cf377fde"
    "?w=100&h=100&fit=crop&crop=faces"
)

_logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Key/value persistence for serialized blobs."""

    def load(self, key: str) -> str | None:
        """Return the blob stored under key, if present."""

    def save(self, key: str, blob: str) -> None:
        """Store a blob under key, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove the blob stored under key."""


class SessionRecorder(Protocol):
    """Receiver of completed exposure sessions."""

    def record(self, session: SunSession) -> None:
        """Append a completed session to the user's history."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ProfileService(SessionRecorder):
    """Loads the profile once and saves it on every mutation."""

    store: ProfileStore
    clock: Callable[[], datetime] = _utc_now
    _profile: UserProfile | None = field(default=None, init=False, repr=False)
    _loaded: bool = field(default=False, init=False, repr=False)

    def current(self) -> UserProfile | None:
        """Return the stored profile, or None when onboarding is required."""
        if not self._loaded:
            blob = self.store.load(PROFILE_KEY)
            self._profile = UserProfile.from_dict(json.loads(blob)) if blob else None
            self._loaded = True
        return self._profile

    def complete_onboarding(self, name: str, skin_type: SkinType) -> UserProfile:
        """Create a profile from the onboarding form."""
        cleaned = name.strip()
        if not cleaned:
            raise ValueError("Name must not be empty")
        profile = UserProfile(
            id=self._new_id(),
            name=cleaned,
            email=_email_from_name(cleaned),
            skin_type=skin_type,
            avatar_url=(
                "https://ui-avatars.com/api/"
                f"?name={quote(cleaned)}&background=random&color=fff"
            ),
        )
        self._save(profile)
        return profile

    def skip_onboarding(self) -> UserProfile:
        """Create the default profile."""
        profile = UserProfile(
            id=self._new_id(),
            name=DEFAULT_NAME,
            email=DEFAULT_EMAIL,
            skin_type=SkinType.TYPE_3,
            avatar_url=DEFAULT_AVATAR_URL,
        )
        self._save(profile)
        return profile

    def update_skin_type(self, skin_type: SkinType) -> UserProfile | None:
        """Change the skin type of the current profile."""
        profile = self.current()
        if profile is None:
            return None
        updated = replace(profile, skin_type=skin_type)
        self._save(updated)
        return updated

    def record(self, session: SunSession) -> None:
        """Append a completed session at the end of the history.

        A failed write is logged; the session stays in the in-memory history.
        """
        profile = self.current()
        if profile is None:
            _logger.warning("Dropping session %s: no profile", session.id)
            return
        try:
            self._save(replace(profile, history=(*profile.history, session)))
        except Exception:
            _logger.exception("Failed to persist session %s", session.id)
            return
        _logger.info(
            "Recorded session %s: %s min at UV %s",
            session.id,
            session.duration_minutes,
            session.uv_index,
        )

    def history(self) -> list[SunSession]:
        """Return the session history, newest first."""
        profile = self.current()
        if profile is None:
            return []
        return list(reversed(profile.history))

    def logout(self) -> None:
        """Forget the profile."""
        self._profile = None
        self._loaded = True
        self.store.delete(PROFILE_KEY)

    def _save(self, profile: UserProfile) -> None:
        self._profile = profile
        self._loaded = True
        self.store.save(PROFILE_KEY, json.dumps(profile.to_dict()))

    def _new_id(self) -> str:
        return f"user_{int(self.clock().timestamp() * 1000)}"


@dataclass
class PreferencesService:
    """Theme preference persisted under its own key."""

    store: ProfileStore

    def get_theme(self) -> Theme:
        """Return the saved theme, light unless dark was saved."""
        if self.store.load(THEME_KEY) == Theme.DARK.value:
            return Theme.DARK
        return Theme.LIGHT

    def set_theme(self, theme: Theme) -> Theme:
        """Persist the theme."""
        self.store.save(THEME_KEY, theme.value)
        return theme

    def toggle_theme(self) -> Theme:
        """Flip between light and dark."""
        current = self.get_theme()
        return self.set_theme(Theme.LIGHT if current is Theme.DARK else Theme.DARK)


def _email_from_name(name: str) -> str:
    return re.sub(r"\s", ".", name.lower()) + "@gmail.com"
