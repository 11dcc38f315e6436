"""Domain models for the locally stored user profile."""

from dataclasses import dataclass, field
from datetime import datetime

from sun_planner.domain.exposure import SkinType


@dataclass(frozen=True)
class SunSession:
    """A completed countdown appended to a user's history."""

    id: str
    date: datetime
    duration_minutes: int
    uv_index: float
    location: str

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "duration_minutes": self.duration_minutes,
            "uv_index": self.uv_index,
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "SunSession":
        return cls(
            id=str(data["id"]),
            date=datetime.fromisoformat(str(data["date"])),
            duration_minutes=int(data["duration_minutes"]),
            uv_index=float(data["uv_index"]),
            location=str(data.get("location", "")),
        )


@dataclass(frozen=True)
class UserProfile:
    """Single local user with skin type and exposure history."""

    id: str
    name: str
    email: str
    skin_type: SkinType
    avatar_url: str | None = None
    history: tuple[SunSession, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-compatible representation."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "skin_type": self.skin_type.value,
            "avatar_url": self.avatar_url,
            "history": [session.to_dict() for session in self.history],
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "UserProfile":
        """Build a profile from its stored representation."""
        raw_history = data.get("history") or []
        history = tuple(
            SunSession.from_dict(item)
            for item in raw_history
            if isinstance(item, dict)
        )
        avatar_url = data.get("avatar_url")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            skin_type=SkinType(str(data["skin_type"])),
            avatar_url=str(avatar_url) if avatar_url else None,
            history=history,
        )
