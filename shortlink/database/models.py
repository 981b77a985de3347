"""Data models for the link shortener."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ShortLink:
    """A short code and the URL it points to.

    Stored as one JSON object under its code. ``original_url`` is kept
    byte-for-byte as submitted.
    """

    code: str
    original_url: str
    id: str
    created_at: datetime = field(default_factory=_utcnow)
    clicks: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "code": self.code,
            "original_url": self.original_url,
            "clicks": self.clicks,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ShortLink":
        """Create from dictionary."""
        created_at = data.get("created_at")
        if created_at and not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            code=data["code"],
            original_url=data["original_url"],
            id=data.get("id") or data["code"],
            created_at=created_at or _utcnow(),
            clicks=int(data.get("clicks", 0)),
        )

    def to_store_value(self) -> str:
        """Serialize for the key-value store."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_store_value(cls, code: str, value: str) -> "ShortLink":
        """Parse a stored value.

        Values that are not a JSON object are plain ``code -> url`` mappings
        and read back as a link with no clicks.
        """
        try:
            data = json.loads(value)
        except ValueError:
            data = None
        if not isinstance(data, dict) or "original_url" not in data:
            return cls(code=code, original_url=value, id=code)
        data.setdefault("code", code)
        return cls.from_dict(data)

    def to_api_dict(self, short_url: Optional[str] = None) -> dict:
        """camelCase representation used by the HTTP API."""
        return {
            "id": self.id,
            "originalUrl": self.original_url,
            "shortCode": self.code,
            "shortUrl": short_url,
            "clicks": self.clicks,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
