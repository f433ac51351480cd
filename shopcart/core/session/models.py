from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UserProfile:
    id: str
    name: str
    email: str

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else ""

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        return cls(id=str(data["id"]), name=str(data["name"]), email=str(data["email"]))


@dataclass(frozen=True)
class SessionIdentity:
    token: Optional[str] = None
    profile: Optional[UserProfile] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "user": self.profile.to_dict() if self.profile else None,
        }
