"""User model definitions."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """Represents an application user held in the in-memory directory."""

    id: int
    name: str
    username: str
    email: str
    password: str  # plaintext, never serialized
    updated_at: datetime = field(default_factory=utc_now)
    image: str = 'default.jpg'
    role: str = 'user'

    def update_profile(self, data: dict) -> None:
        for field_name in ('name', 'username', 'email', 'image'):
            value = data.get(field_name)
            if value:
                setattr(self, field_name, value)
        self.updated_at = utc_now()

    def password_valid(self, candidate: str) -> bool:
        return self.password == candidate
