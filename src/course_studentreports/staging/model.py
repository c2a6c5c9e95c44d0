from __future__ import annotations

from dataclasses import asdict, dataclass

from ..users.model import User


@dataclass(frozen=True)
class StagedUser:
    """A user picked in the add-user dialog, shown in the table but not enrolled."""

    user_id: int
    firstname: str
    lastname: str
    email: str

    @property
    def fullname(self) -> str:
        return f"{self.firstname} {self.lastname}"

    @classmethod
    def from_user(cls, user: User) -> "StagedUser":
        return cls(user_id=user.user_id, firstname=user.firstname, lastname=user.lastname, email=user.email)

    @classmethod
    def from_dict(cls, data: dict) -> "StagedUser":
        return cls(
            user_id=int(data["user_id"]),
            firstname=str(data.get("firstname", "")),
            lastname=str(data.get("lastname", "")),
            email=str(data.get("email", "")),
        )

    def to_dict(self) -> dict:
        return asdict(self)
