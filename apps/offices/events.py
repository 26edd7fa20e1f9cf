"""Office domain events, published after the surrounding transaction commits."""

from dataclasses import dataclass

from shared.domain.base import DomainEvent


@dataclass
class OfficePendingApproval(DomainEvent):
    """
    Event: An office entered the PENDING approval state

    Raised when a host creates an office or changes its location or
    price. Triggers the approval request to administrators.
    """
    office_id: int = 0
    reason: str = ""
