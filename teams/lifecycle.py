# teams/lifecycle.py
"""
Team membership lifecycle.

    create_team ──→ invite_members ──→ accept_invite / decline_invite
         │                                   │
         └──────→ disband_team ←── leave_team (leader)
                        remove_members (leader)

Team size (leader included) never exceeds MAX_TEAM_SIZE. A user is confirmed
into at most one team at a time but may hold invites for several.

create_team and disband_team run inside one store transaction. The other
operations read a snapshot and write afterwards without one, so two
concurrent accepts can both see a free slot.
"""
import logging
from typing import List, Optional

from django.db import DatabaseError

from core import datetime_utils
from core.constants import MAX_INVITED_MEMBERS, MAX_TEAM_SIZE
from core.exceptions import (
    AuthorizationError,
    CapacityError,
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from core.policies import HackathonPolicy
from core.store import get_store
from core.validators import normalize_email, normalize_emails, validate_team_name
from users.models import TeamRole, User
from users.oracle import ExistenceOracle
from .models import Team, TeamInvite, TeamStatus

logger = logging.getLogger("hackathon.teams")


class TeamLifecycleManager:
    """
    Every operation takes already-authenticated emails and raises a
    HackathonError subclass when a precondition fails.
    """

    def __init__(self, store=None, oracle=None):
        self.store = store or get_store()
        self.oracle = oracle or ExistenceOracle(self.store)

    # ─────────────────────────────────────────────────────────────
    # Lookups
    # ─────────────────────────────────────────────────────────────

    def _get_user(self, email, message="Auth user not found") -> User:
        user = User.objects.find_by_email(email)
        if user is None:
            raise NotFoundError(message)
        return user

    def _get_team(self, team_id) -> Team:
        try:
            return Team.objects.get(team_id=team_id)
        except Team.DoesNotExist:
            raise NotFoundError("Team not found")

    # ─────────────────────────────────────────────────────────────
    # Create
    # ─────────────────────────────────────────────────────────────

    def create_team(self, leader_email, team_name, member_emails=None) -> Team:
        """
        Create an Active team led by ``leader_email`` and invite the members.

        The team and the leader's membership are written in one transaction.
        Invitations go out after it commits; if any of them fails, the team
        is deleted again and the leader released.
        """
        leader_email = normalize_email(leader_email)
        member_emails = normalize_emails(member_emails)

        valid, reason = validate_team_name(team_name)
        if not valid:
            raise ValidationError(reason)

        if len(member_emails) > MAX_INVITED_MEMBERS:
            raise ValidationError(f"Team size cannot exceed {MAX_TEAM_SIZE} members (including leader)")

        if leader_email in member_emails:
            raise ValidationError("Team leader cannot invite themselves")

        self.store.ensure_healthy()

        leader = self._get_user(leader_email)

        if leader.team_role == TeamRole.LEADER:
            raise ConflictError("User already leads a team")

        if leader.confirmed_team:
            raise ConflictError("User is already part of a team")

        if member_emails:
            found = dict(
                User.objects.filter(email__in=member_emails).values_list("email", "confirmed_team")
            )
            invalid_emails = [email for email in member_emails if email not in found]
            if invalid_emails:
                raise NotFoundError("Some users do not exist", invalid_emails=invalid_emails)

            users_in_teams = [email for email in member_emails if found[email]]
            if users_in_teams:
                raise ConflictError("Some users are already part of teams", users_in_teams=users_in_teams)

        with self.store.atomic():
            team = Team.objects.create(
                leader_email=leader_email,
                members=[],
                status=TeamStatus.ACTIVE,
                team_name=team_name,
            )
            leader.join_team(team.team_id, TeamRole.LEADER)
            leader.save(update_fields=User.TEAM_FIELDS)

        logger.info(f"Team created: team={team.team_id}, name={team_name!r}, leader={leader_email}")

        if not member_emails:
            return team

        try:
            result = self.invite_members(team.team_id, leader_email, member_emails)
            error = None
            if result["failed"]:
                error = "; ".join(f"{f['email']}: {f['reason']}" for f in result["failed"])
        except Exception as e:
            logger.exception(f"Issuing invitations for team {team.team_id} raised")
            result = None
            error = getattr(e, "message", None) or str(e)

        if error is not None:
            self._compensate_create(team, leader, error, result)

        return team

    def _compensate_create(self, team, leader, error, result):
        logger.error(f"Invitations failed for new team {team.team_id}, rolling back: {error}")

        failed = result["failed"] if result else []
        try:
            with self.store.atomic():
                # Invites issued for the team go with it
                team.delete()
                leader.clear_team()
                leader.save(update_fields=User.TEAM_FIELDS)
        except DatabaseError as e:
            logger.critical(f"Rollback of team {team.team_id} failed: {e}")
            raise DependencyError(
                "Team created but failed to send invitations, and rollback failed",
                error=error,
                rollback_error=str(e),
            )

        raise DependencyError(
            "Team created but failed to send invitations",
            error=error,
            failed=failed,
        )

    # ─────────────────────────────────────────────────────────────
    # Invites
    # ─────────────────────────────────────────────────────────────

    def invite_members(self, team_id, leader_email, emails) -> dict:
        """
        Invite ``emails`` to the team, in order, until the free slots run out.

        Per-email problems never abort the batch; they are reported in
        ``failed``. Returns {"invited": [...], "failed": [{email, reason}]}.
        """
        leader_email = normalize_email(leader_email)

        self.store.ensure_healthy()

        self._get_user(leader_email)
        team = self._get_team(team_id)

        if team.leader_email != leader_email:
            raise AuthorizationError("Auth user is not the team leader")

        if not team.is_active:
            raise ValidationError("Team is not active")

        pending_count = TeamInvite.objects.filter(team_id=team.team_id).count()
        available_slots = MAX_TEAM_SIZE - team.size - pending_count
        if available_slots <= 0:
            raise CapacityError("Team is already full")

        invited: List[str] = []
        failed: List[dict] = []

        for email in normalize_emails(emails):
            if len(invited) >= available_slots:
                failed.append({"email": email, "reason": "No slots remaining"})
                continue

            reason = self._invite_one(team, leader_email, email)
            if reason:
                failed.append({"email": email, "reason": reason})
            else:
                invited.append(email)

        logger.info(
            f"Invitations processed: team={team.team_id}, invited={len(invited)}, failed={len(failed)}"
        )
        return {"invited": invited, "failed": failed}

    def _invite_one(self, team, leader_email, email) -> Optional[str]:
        """Record one invite. Returns the failure reason, or None on success."""
        if not self.oracle.exists(email):
            return "User does not exist"

        try:
            user = User.objects.find_by_email(email)
            if user is None:
                return "User does not exist"
            if user.confirmed_team:
                return "Already a confirmed team member"
            if user.holds_invite(team.team_id):
                return "Already invited to this team"

            with self.store.atomic():
                TeamInvite.objects.create(
                    user=user,
                    team=team,
                    invited_by=leader_email,
                    invited_at=datetime_utils.now(),
                    team_name=team.team_name,
                )
        except DatabaseError as e:
            logger.error(f"Could not record invite: team={team.team_id}, email={email}: {e}")
            return "Could not record invitation"

        return None

    def accept_invite(self, user_email, team_id) -> Team:
        user_email = normalize_email(user_email)

        self.store.ensure_healthy()

        user = self._get_user(user_email)

        if user.confirmed_team:
            raise ConflictError("User is already part of a team")

        invite = user.invite_for(team_id)
        if invite is None:
            raise ValidationError("No pending invitation found for this team")

        team = self._get_team(team_id)

        if not team.is_active:
            raise ValidationError("Cannot join disbanded team")

        if team.is_full:
            raise CapacityError("Team is at maximum capacity")

        team.members.append(user_email)
        team.save(update_fields=["members", "updated"])

        user.join_team(team.team_id, TeamRole.MEMBER)
        user.save(update_fields=User.TEAM_FIELDS)

        # Invites for other teams stay
        invite.delete()

        logger.info(f"Invite accepted: team={team.team_id}, user={user_email}, size={team.size}")
        return team

    def decline_invite(self, user_email, team_id) -> None:
        user_email = normalize_email(user_email)

        self.store.ensure_healthy()

        user = self._get_user(user_email, "User not found.")

        invite = user.invite_for(team_id)
        if invite is None:
            raise ValidationError("No pending invitation found for this team")

        invite.delete()
        logger.info(f"Invite declined: team={team_id}, user={user_email}")

    # ─────────────────────────────────────────────────────────────
    # Leaving and disbanding
    # ─────────────────────────────────────────────────────────────

    def leave_team(self, user_email, team_id) -> Team:
        """
        A member leaves; the leader leaving disbands the team.
        """
        user_email = normalize_email(user_email)

        self.store.ensure_healthy()

        user = self._get_user(user_email)
        team = self._get_team(team_id)

        if not team.is_active:
            raise ValidationError("Team already disbanded")

        if not team.members:
            raise ValidationError("Empty team member list")

        if not team.has_member(user_email):
            raise ValidationError("User not in team")

        if team.leader_email == user_email:
            return self.disband_team(team_id, actor=user)

        team.members = [m for m in team.members if m != user_email]
        team.save(update_fields=["members", "updated"])

        user.clear_team()
        user.save(update_fields=User.TEAM_FIELDS)
        user.pending_invites.all().delete()

        logger.info(f"Member left team: team={team.team_id}, user={user_email}")
        return team

    def disband_team(self, team_id, actor=None) -> Team:
        """
        Active → Disbanded, releasing the leader and every member.

        All writes happen in one transaction: either every document changes
        or none does.
        """
        self.store.ensure_healthy()

        team = self._get_team(team_id)

        if actor is not None:
            allowed, reason = HackathonPolicy.can_disband_team(actor, team)
            if not allowed:
                raise AuthorizationError(reason)

        can, reason = team.can_transition(TeamStatus.DISBANDED)
        if not can:
            raise ValidationError(reason)

        emails = [team.leader_email] + list(team.members)

        try:
            with self.store.atomic():
                team.status = TeamStatus.DISBANDED
                team.save(update_fields=["status", "updated"])

                User.objects.filter(email__in=emails, team_id=team.team_id).update(
                    confirmed_team=False,
                    team_id=None,
                    team_role=None,
                )
                TeamInvite.objects.filter(user__email__in=emails).delete()
                TeamInvite.objects.filter(team_id=team.team_id).delete()
        except DatabaseError as e:
            logger.error(f"Disband failed: team={team.team_id}: {e}")
            raise DependencyError("Failed to disband team", error=str(e))

        logger.info(
            f"Team disbanded: team={team.team_id}, released={len(emails)}, "
            f"actor={getattr(actor, 'email', 'system')}"
        )
        return team

    def remove_members(self, leader_email, team_id, target_emails) -> dict:
        """
        Leader removes confirmed members and withdraws pending invites.

        Each target is handled on its own; a failure on one is reported in
        ``failed`` and does not undo the others.
        """
        leader_email = normalize_email(leader_email)
        target_emails = normalize_emails(target_emails)

        self.store.ensure_healthy()

        self._get_user(leader_email)
        team = self._get_team(team_id)

        if not team.is_active:
            raise ValidationError("Cannot remove members from disbanded team")

        if team.leader_email != leader_email:
            raise AuthorizationError("Only team leader can remove members")

        if leader_email in target_emails:
            raise ValidationError("Team leader cannot remove themselves from the team")

        members_affected = 0
        failed = []

        for email in target_emails:
            try:
                if self._remove_one(team, email):
                    members_affected += 1
            except DatabaseError as e:
                logger.error(f"Removal failed: team={team.team_id}, email={email}: {e}")
                failed.append({"email": email, "reason": "Could not remove member"})

        logger.info(
            f"Members removed: team={team.team_id}, affected={members_affected}, failed={len(failed)}"
        )
        return {"members_affected": members_affected, "failed": failed}

    def _remove_one(self, team, email) -> bool:
        user = User.objects.find_by_email(email)
        if user is None:
            return False

        if email in team.members:
            previous = team.members
            try:
                with self.store.atomic():
                    team.members = [m for m in previous if m != email]
                    team.save(update_fields=["members", "updated"])

                    user.clear_team()
                    user.save(update_fields=User.TEAM_FIELDS)
                    user.pending_invites.filter(team_id=team.team_id).delete()
            except DatabaseError:
                # Rolled back, so the in-memory list must match the store again
                team.members = previous
                raise
            return True

        invite = user.invite_for(team.team_id)
        if invite is not None:
            invite.delete()
            return True

        return False

    # ─────────────────────────────────────────────────────────────
    # Read
    # ─────────────────────────────────────────────────────────────

    def read_team(self, auth_user, team_id=None, member_email=None) -> Team:
        """
        Look a team up by id, or by one of its members.

        Organizers and directors may read any team; everyone else only
        their own.
        """
        member_email = normalize_email(member_email)

        if not team_id and not member_email:
            raise ValidationError("Either team_id or member_email is required")

        allowed, reason = HackathonPolicy.can_read_team(auth_user, team_id, member_email)
        if not allowed:
            raise AuthorizationError(reason, status_code=401)

        self.store.ensure_healthy()

        if not team_id:
            member = self._get_user(member_email, "Team user not found")
            if not member.team_id:
                raise NotFoundError(f"User ({member_email}) is not in an active team")
            team_id = member.team_id

        team = self._get_team(team_id)

        if not team.is_active:
            raise ValidationError("Team is not active")

        return team
