"""Capabilities and the explicit actor identity passed into services.

Services never read the request or a "current user" global. Views build
an :class:`Actor` from the authenticated request and hand it down.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from shared.domain.exceptions import ActionForbidden

ALL_SCOPES = "*"
SCOPES_CLAIM = "scopes"


class Capability(str, enum.Enum):
    OFFICE_CREATE = "office.create"
    OFFICE_UPDATE = "office.update"
    RESERVATION_CREATE = "reservation.create"
    RESERVATION_SHOW = "reservation.show"

    @classmethod
    def parse(cls, scopes: Iterable[str]) -> FrozenSet["Capability"]:
        """Turn token scope strings into capabilities, ignoring unknown ones."""
        scopes = list(scopes)
        if ALL_SCOPES in scopes:
            return frozenset(cls)
        known = {member.value: member for member in cls}
        return frozenset(known[scope] for scope in scopes if scope in known)


@dataclass(frozen=True)
class Actor:
    """Who is calling a service, and what their token allows."""

    user_id: Optional[int]
    capabilities: FrozenSet[Capability] = field(default_factory=frozenset)

    @classmethod
    def anonymous(cls) -> "Actor":
        return cls(user_id=None)

    @classmethod
    def for_user(cls, user, scopes: Optional[Iterable[str]] = None) -> "Actor":
        """Actor for ``user``; no ``scopes`` means every capability."""
        capabilities = frozenset(Capability) if scopes is None else Capability.parse(scopes)
        return cls(user_id=user.pk, capabilities=capabilities)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def can(self, capability: Capability) -> bool:
        return self.is_authenticated and capability in self.capabilities

    def require(self, capability: Capability) -> None:
        if not self.can(capability):
            raise ActionForbidden(f"Token lacks the '{capability.value}' scope.")


def actor_from_request(request) -> Actor:  # type: ignore
    """
    Build the actor of a DRF request.

    Requests authenticated with a JWT carry the scopes listed in the
    token's ``scopes`` claim. Requests authenticated without a token
    (session login) hold every capability.
    """
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return Actor.anonymous()
    token = getattr(request, "auth", None)
    if token is None:
        return Actor.for_user(user)
    try:
        scopes = token[SCOPES_CLAIM]
    except (KeyError, TypeError):
        scopes = []
    return Actor.for_user(user, scopes)
