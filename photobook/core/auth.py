from dataclasses import dataclass
from typing import Any

from ..db.models import ActorType


@dataclass(frozen=True, slots=True)
class Actor:
    """Authenticated caller as supplied by the identity service."""

    id: int | None
    role: ActorType

    @property
    def is_admin(self) -> bool:
        return self.role == ActorType.admin


SYSTEM_ACTOR = Actor(id=None, role=ActorType.system)


def actor_from_claims(payload: dict[str, Any]) -> Actor:
    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or role is None:
        raise ValueError("Token is missing subject or role")
    actor_role = ActorType(role)
    if actor_role == ActorType.system:
        raise ValueError("System role cannot be claimed by a token")
    return Actor(id=int(subject), role=actor_role)
