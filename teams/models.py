# teams/models.py
import uuid
from typing import Tuple

from django.conf import settings
from django.db import models

from core.constants import MAX_TEAM_SIZE, TEAM_NAME_MAX_LENGTH
from core.datetime_utils import format_for_api


def generate_team_id():
    return str(uuid.uuid4())


class TeamStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    DISBANDED = "Disbanded", "Disbanded"


# from_status -> allowed to_statuses. Disbanded is terminal.
VALID_TEAM_TRANSITIONS = {
    TeamStatus.ACTIVE: [TeamStatus.DISBANDED],
    TeamStatus.DISBANDED: [],
}


class Team(models.Model):
    """
    A hackathon team: one leader plus up to three confirmed members.

    ``members`` holds confirmed member emails in join order (leader excluded).
    Outstanding offers live in TeamInvite, attached to the invitee.
    """
    team_id = models.CharField(max_length=64, unique=True, default=generate_team_id, editable=False)
    leader_email = models.EmailField(db_index=True)
    members = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=16, choices=TeamStatus.choices, default=TeamStatus.ACTIVE)
    team_name = models.CharField(max_length=TEAM_NAME_MAX_LENGTH)

    created = models.DateTimeField(auto_now_add=True)
    updated = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["status", "created"], name="team_status_created_idx"),
        ]

    def __str__(self):
        return f"{self.team_name} ({self.team_id})"

    @property
    def size(self):
        """Confirmed headcount, leader included."""
        return len(self.members) + 1

    @property
    def is_full(self):
        return self.size >= MAX_TEAM_SIZE

    @property
    def is_active(self):
        return self.status == TeamStatus.ACTIVE

    def has_member(self, email) -> bool:
        """Leader or confirmed member."""
        return email == self.leader_email or email in self.members

    def can_transition(self, new_status) -> Tuple[bool, str]:
        if new_status not in TeamStatus.values:
            return False, f"Invalid team status: {new_status}"
        if new_status not in VALID_TEAM_TRANSITIONS.get(self.status, []):
            if self.status == TeamStatus.DISBANDED:
                return False, "Team already disbanded"
            return False, f"Cannot transition team from '{self.status}' to '{new_status}'"
        return True, ""


class TeamInvite(models.Model):
    """
    An outstanding offer to join a team, owned by the invitee.

    Rendered as part of ``user.team_info["pending_invites"]``.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="pending_invites",
    )
    team = models.ForeignKey(
        Team,
        to_field="team_id",
        on_delete=models.CASCADE,
        related_name="invites",
    )
    invited_by = models.EmailField()
    invited_at = models.DateTimeField()
    team_name = models.CharField(max_length=TEAM_NAME_MAX_LENGTH)

    class Meta:
        ordering = ["invited_at", "id"]
        unique_together = ("user", "team")
        indexes = [
            models.Index(fields=["team", "invited_at"], name="invite_team_invited_idx"),
        ]

    def __str__(self):
        return f"{self.user_id} invited to {self.team_id}"

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "invited_by": self.invited_by,
            "invited_at": format_for_api(self.invited_at),
            "team_name": self.team_name,
        }
