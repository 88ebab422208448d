# users/state_machine.py
"""
Registration status state machine.

Every change to ``registration_status`` goes through a fixed graph:

unregistered → registered → confirmation → coming → confirmed → checked_in
                    │             └→ not_coming ⇄ coming
                    ├→ waitlist ─────────────────────────────→ checked_in
                    └→ rejected ─────────────────────────────→ checked_in

Moves into checked_in are additionally gated by the check-in window
(see core.datetime_utils). Any transition not in VALID_TRANSITIONS is
rejected.
"""
from datetime import datetime
from typing import Optional, Tuple
import logging

from django.db import DatabaseError

from core import datetime_utils
from core.constants import (
    ELEVATED_FIELDS,
    LOCKED_FIELDS,
    REQUIRED_REGISTRATION_FIELDS,
    TEAM_MANAGED_FIELDS,
)
from core.exceptions import (
    AuthorizationError,
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from core.policies import HackathonPolicy
from core.store import get_store
from core.validators import is_valid_email, normalize_email
from .models import RegistrationStatus, User
from .serializers import RegistrationUpdateSerializer

logger = logging.getLogger("hackathon.users")

S = RegistrationStatus

# Valid state transitions: from_status -> list of allowed to_statuses
VALID_TRANSITIONS = {
    S.UNREGISTERED: [S.REGISTERED],
    S.REGISTERED: [S.REJECTED, S.CONFIRMATION, S.WAITLIST],
    S.CONFIRMATION: [S.COMING, S.NOT_COMING],
    S.REJECTED: [S.CHECKED_IN],
    S.COMING: [S.NOT_COMING, S.CONFIRMED],
    S.NOT_COMING: [S.COMING, S.WAITLIST],
    S.CONFIRMED: [S.CHECKED_IN],
    S.WAITLIST: [S.CHECKED_IN],
    S.CHECKED_IN: [],
}

# Statuses that may check in once the window opens, edge or not
AT_LEAST_REGISTERED = frozenset({S.CONFIRMED, S.WAITLIST, S.REGISTERED, S.COMING})

# Fields a $set may name at all
UPDATABLE_FIELDS = frozenset(RegistrationUpdateSerializer.Meta.fields)

SUPPORTED_OPERATORS = ("$set",)


def can_transition(current: str, goal: str, current_time: Optional[datetime] = None) -> Tuple[bool, str]:
    """
    Check if a user in ``current`` may move to ``goal``.

    Same-status requests are not transitions; callers handle them first.

    Returns (can_transition: bool, reason: str)
    """
    if goal not in S.values:
        return False, f"Invalid registration status: {goal}"

    if current == goal:
        return False, f"User is already {goal}"

    if goal == S.CHECKED_IN:
        current_time = current_time or datetime_utils.now()

        if datetime_utils.is_check_in_closed(current_time):
            cutoff = datetime_utils.format_for_display(datetime_utils.check_in_cutoff())
            return False, f"Check-in closed at {cutoff}"

        if current in AT_LEAST_REGISTERED:
            if current == S.CONFIRMED:
                return True, ""
            start = datetime_utils.check_in_start()
            if start is not None and current_time >= start:
                return True, ""
            if start is None:
                return False, "Check-in has not been scheduled"
            return False, f"Check-in opens at {datetime_utils.format_for_display(start)}"

    allowed = VALID_TRANSITIONS.get(current, [])

    if goal not in allowed:
        return False, f"Cannot transition from '{current}' to '{goal}'"

    return True, ""


def get_allowed_transitions(status: str) -> list:
    """
    Graph edges out of ``status`` (the check-in window may allow more).
    """
    return VALID_TRANSITIONS.get(status, [])


def is_terminal_status(status: str) -> bool:
    return status not in VALID_TRANSITIONS or len(VALID_TRANSITIONS[status]) == 0


def missing_registration_fields(user) -> list:
    """Required profile fields still empty on the stored user."""
    return [
        field for field in REQUIRED_REGISTRATION_FIELDS
        if not str(getattr(user, field, "") or "").strip()
    ]


class RegistrationStatusMachine:
    """
    Gates updates to a user document: who may update whom, which fields may
    be written, and which status moves are legal.
    """

    def __init__(self, store=None, dispatcher=None):
        self.store = store or get_store()
        if dispatcher is None:
            from notifications.dispatcher import NotificationDispatcher
            dispatcher = NotificationDispatcher()
        self.dispatcher = dispatcher

    def update_registration(self, auth_user, user_email: str, updates: dict) -> User:
        """
        Apply ``updates["$set"]`` to the user with ``user_email``.

        Raises a HackathonError subclass on any rejected precondition;
        nothing is written in that case.
        """
        user_email = normalize_email(user_email)

        allowed, reason = HackathonPolicy.can_update_user(auth_user, user_email)
        if not allowed:
            logger.warning(f"Update of {user_email} refused for {auth_user.email}: {reason}")
            raise AuthorizationError(reason, status_code=401)

        self.store.ensure_healthy()

        target = User.objects.find_by_email(user_email)
        if target is None:
            raise NotFoundError("User to be updated not found.")

        values = self._extract_set(updates)
        self.validate_fields(auth_user, target, values)

        old_status = target.registration_status
        goal = values.get("registration_status", old_status)
        if "registration_status" in values:
            if goal == old_status:
                raise ConflictError(f"User is already {goal}", status_code=409)
            self.validate_transition(target, goal)

        return self._apply(target, values, old_status, goal)

    # ─────────────────────────────────────────────────────────────
    # Validation
    # ─────────────────────────────────────────────────────────────

    def _extract_set(self, updates) -> dict:
        if not isinstance(updates, dict):
            raise ValidationError("Updates must be an object")

        unsupported = [op for op in updates if op not in SUPPORTED_OPERATORS]
        if unsupported:
            raise ValidationError(
                f"Unsupported update operator: {', '.join(sorted(unsupported))}",
            )

        values = updates.get("$set")
        if not isinstance(values, dict) or not values:
            raise ValidationError("Updates must contain a non-empty $set object")
        return values

    def validate_fields(self, auth_user, target, values: dict) -> None:
        fields = set(values)

        locked = sorted(fields & LOCKED_FIELDS)
        if locked:
            raise ValidationError(
                f"Cannot update locked fields: {', '.join(locked)}",
                locked_fields=locked,
            )

        team_fields = sorted(fields & TEAM_MANAGED_FIELDS)
        if team_fields:
            raise ValidationError(
                f"Team fields are managed through the team endpoints: {', '.join(team_fields)}",
                team_fields=team_fields,
            )

        if fields & ELEVATED_FIELDS:
            allowed, reason = HackathonPolicy.can_change_roles(auth_user)
            if not allowed:
                raise AuthorizationError(reason, status_code=401)

        unknown = sorted(fields - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown fields: {', '.join(unknown)}",
                unknown_fields=unknown,
            )

        if "email" in values:
            self._validate_email_change(target, values["email"])

    def _validate_email_change(self, target, email) -> None:
        if not is_valid_email(email):
            raise ValidationError("Invalid email format")

        email = normalize_email(email)
        if email == target.email:
            return

        if User.objects.filter(email=email).exists():
            raise ConflictError("Email already in use", status_code=409)

        # Team documents reference members by email
        if target.confirmed_team or target.pending_invites.exists():
            raise ConflictError("Cannot change email while on a team or holding invites")

    def validate_transition(self, target, goal: str) -> None:
        current = target.registration_status

        if goal not in S.values:
            raise ValidationError(f"Invalid registration status: {goal}")

        can, reason = can_transition(current, goal)
        if not can:
            logger.warning(
                f"Invalid registration transition attempted: user={target.email}, "
                f"from={current}, to={goal}. Reason: {reason}"
            )
            raise ValidationError(reason)

        if current == S.UNREGISTERED and goal == S.REGISTERED:
            missing = missing_registration_fields(target)
            if missing:
                raise ValidationError(
                    "Missing required fields",
                    missing_fields=missing,
                )

    # ─────────────────────────────────────────────────────────────
    # Apply
    # ─────────────────────────────────────────────────────────────

    def _apply(self, target, values: dict, old_status: str, goal: str) -> User:
        serializer = RegistrationUpdateSerializer(target, data=values, partial=True)
        if not serializer.is_valid():
            raise ValidationError("Invalid update", errors=serializer.errors)

        extra = {}
        if goal == S.REGISTERED and old_status != S.REGISTERED:
            extra["registered_at"] = datetime_utils.now()

        try:
            with self.store.atomic():
                user = serializer.save(**extra)
        except DatabaseError as e:
            logger.error(f"Failed to update user {target.email}: {e}")
            raise DependencyError("Internal server error")

        if goal != old_status:
            logger.info(
                f"Registration transition: user={user.email}, from={old_status}, to={goal}"
            )
            self.dispatcher.publish_status_change(user, old_status)

        return user
