# =============================================================================
# core/services/workflow.py - Status Transition Rules
# =============================================================================
# The allowed status changes for inventory and contest registrations.
#
# Inventory:      available <-> sold
# Registration:   pending -> approved | rejected   (rejected is terminal)
#
# Re-applying the current status is always allowed and is a no-op, so
# status writes can be retried safely.
# =============================================================================

from enum import Enum

from app.exceptions import InvalidTransitionError
from core.models.contest import RegistrationStatus
from core.models.fish import FishStatus

FISH_TRANSITIONS: dict[FishStatus, frozenset[FishStatus]] = {
    FishStatus.AVAILABLE: frozenset({FishStatus.SOLD}),
    FishStatus.SOLD: frozenset({FishStatus.AVAILABLE}),
}

REGISTRATION_TRANSITIONS: dict[RegistrationStatus, frozenset[RegistrationStatus]] = {
    RegistrationStatus.PENDING: frozenset({RegistrationStatus.APPROVED, RegistrationStatus.REJECTED}),
    RegistrationStatus.APPROVED: frozenset(),
    RegistrationStatus.REJECTED: frozenset(),
}


def check_transition(
    entity: str,
    transitions: dict,
    current: Enum,
    target: Enum,
) -> bool:
    """
    Validate a status change.

    Args:
        entity: Name used in the error message ("fish", "registration")
        transitions: One of the transition tables above
        current: Current status
        target: Requested status

    Returns:
        False if `target` equals `current` (nothing to write), True otherwise

    Raises:
        InvalidTransitionError: If the workflow does not allow the change
    """
    if current == target:
        return False
    if target not in transitions.get(current, frozenset()):
        raise InvalidTransitionError(entity, current.value, target.value)
    return True
