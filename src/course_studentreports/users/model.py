from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Domain entity: user of the host platform.

    Only the identity fields the reports need are loaded.
    """

    user_id: int
    firstname: str
    lastname: str
    email: str

    @property
    def fullname(self) -> str:
        return f"{self.firstname} {self.lastname}"
