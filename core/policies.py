# core/policies.py
"""
Centralized authorization for hackathon actions.

Views and state machines ask these methods instead of inspecting roles
inline. All methods return bool or (bool, str) with reason.
"""
from typing import Tuple

from users.roles import Capability


class HackathonPolicy:

    @staticmethod
    def is_staff_role(user) -> bool:
        """Organizer or director."""
        if user is None:
            return False
        return user.roles.is_elevated

    @staticmethod
    def is_team_leader(user, team) -> bool:
        if user is None or team is None:
            return False
        return team.leader_email == user.email

    # ─────────────────────────────────────────────────────────────
    # Registration
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def can_update_user(auth_user, target_email: str) -> Tuple[bool, str]:
        """
        Directors and organizers may update anyone; hackers only themselves.
        """
        if HackathonPolicy.is_staff_role(auth_user):
            return True, ""

        if auth_user.roles.has(Capability.HACKER) and auth_user.email == target_email:
            return True, ""

        return False, "Unauthorized"

    @staticmethod
    def can_change_roles(auth_user) -> Tuple[bool, str]:
        if HackathonPolicy.is_staff_role(auth_user):
            return True, ""
        return False, "Only organizers and directors can change roles"

    # ─────────────────────────────────────────────────────────────
    # Teams
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def can_disband_team(user, team) -> Tuple[bool, str]:
        if HackathonPolicy.is_team_leader(user, team):
            return True, ""
        if HackathonPolicy.is_staff_role(user):
            return True, ""
        return False, "Only the team leader can disband the team"

    @staticmethod
    def can_read_team(user, team_id=None, member_email=None) -> Tuple[bool, str]:
        """
        Staff read any team. Others read by their own team_id, or by their
        own email.
        """
        if HackathonPolicy.is_staff_role(user):
            return True, ""
        if team_id:
            if user.team_id == team_id:
                return True, ""
        elif member_email == user.email:
            return True, ""
        return False, "Unauthorized"
