from typing import Literal

from app.schemas.common import CamelModel

SelectableRole = Literal["recruiter", "candidate"]


class ActorOut(CamelModel):
    id: str
    role: str
    role_assigned: bool


class RoleSelectionRequest(CamelModel):
    role: SelectableRole
