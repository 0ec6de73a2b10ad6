from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    RECRUITER = "recruiter"
    CANDIDATE = "candidate"


SELF_SELECTABLE_ROLES = frozenset({Role.RECRUITER, Role.CANDIDATE})


@dataclass(frozen=True, slots=True)
class Actor:
    id: str
    role: Role
    role_assigned: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def parse_role(value: object) -> Role | None:
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None
