"""Domain models for the media dashboard."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    """Profile returned by the identity provider and kept in the session."""

    id: str
    display_name: str
    photo_url: str | None = None

    def to_session(self) -> dict[str, str | None]:
        """Serialize the profile for cookie-backed session storage."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "photo_url": self.photo_url,
        }

    @classmethod
    def from_session(cls, data: object) -> "UserProfile | None":
        """Rebuild a profile from session data, if it looks valid."""
        if not isinstance(data, dict) or not data.get("id"):
            return None
        return cls(
            id=str(data["id"]),
            display_name=str(data.get("display_name") or ""),
            photo_url=data.get("photo_url"),
        )


@dataclass(frozen=True)
class StoredImage:
    """Represents an uploaded image in the object store."""

    key: str
    url: str
