# users/models.py
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models

from core.validators import normalize_email
from .roles import RoleSet, default_roles


class RegistrationStatus(models.TextChoices):
    UNREGISTERED = "unregistered", "Unregistered"
    REGISTERED = "registered", "Registered"
    REJECTED = "rejected", "Rejected"
    CONFIRMATION = "confirmation", "Confirmation"
    WAITLIST = "waitlist", "Waitlist"
    COMING = "coming", "Coming"
    NOT_COMING = "not_coming", "Not Coming"
    CONFIRMED = "confirmed", "Confirmed"
    CHECKED_IN = "checked_in", "Checked In"


class TeamRole(models.TextChoices):
    LEADER = "leader", "Leader"
    MEMBER = "member", "Member"


class UserManager(BaseUserManager):
    """Accounts are keyed by lower-cased email; there is no username."""
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("An email address is required")
        user = self.model(email=normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self._create_user(email, password, **extra_fields)

    def find_by_email(self, email):
        """The user with this email, or None."""
        return self.filter(email=normalize_email(email)).first()


class User(AbstractUser):
    username = None
    email = models.EmailField(unique=True)

    # Capabilities (hacker, organizer, director, ...). See users/roles.py
    role = models.JSONField(default=default_roles, blank=True)

    registration_status = models.CharField(
        max_length=20,
        choices=RegistrationStatus.choices,
        default=RegistrationStatus.UNREGISTERED,
    )

    # 🔹 Team membership (written only by teams.lifecycle)
    confirmed_team = models.BooleanField(default=False)
    team_id = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    team_role = models.CharField(max_length=10, choices=TeamRole.choices, blank=True, null=True)

    # 🔹 Application profile (first_name/last_name come from AbstractUser)
    phone_number = models.CharField(max_length=20, blank=True, default="")
    date_of_birth = models.CharField(max_length=20, blank=True, default="")
    gender = models.CharField(max_length=50, blank=True, default="")
    ethnicity = models.CharField(max_length=100, blank=True, default="")
    level_of_study = models.CharField(max_length=100, blank=True, default="")
    school = models.CharField(max_length=255, blank=True, default="")
    major = models.CharField(max_length=255, blank=True, default="")
    grad_year = models.CharField(max_length=10, blank=True, default="")
    shirt_size = models.CharField(max_length=10, blank=True, default="")
    dietary_restrictions = models.CharField(max_length=255, blank=True, default="")
    special_needs = models.TextField(blank=True, default="")
    github = models.CharField(max_length=255, blank=True, default="")
    short_answer = models.TextField(blank=True, default="")

    # 🔹 System-owned
    email_verified = models.BooleanField(default=False)
    discord = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    registered_at = models.DateTimeField(blank=True, null=True)

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    # update_fields for join_team / clear_team
    TEAM_FIELDS = ["confirmed_team", "team_id", "team_role"]

    objects = UserManager()

    class Meta:
        indexes = [
            models.Index(fields=["registration_status"], name="user_reg_status_idx"),
        ]

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        self.email = normalize_email(self.email)
        super().save(*args, **kwargs)

    @property
    def roles(self) -> RoleSet:
        return RoleSet(self.role)

    @property
    def team_info(self) -> dict:
        """
        The embedded team view: {team_id, role, pending_invites}.
        """
        return {
            "team_id": self.team_id or None,
            "role": self.team_role or None,
            "pending_invites": [invite.to_dict() for invite in self.pending_invites.all()],
        }

    def invite_for(self, team_id):
        """This user's pending invite for team_id, or None."""
        return self.pending_invites.filter(team_id=team_id).first()

    def holds_invite(self, team_id) -> bool:
        return self.pending_invites.filter(team_id=team_id).exists()

    def join_team(self, team_id, role):
        self.confirmed_team = True
        self.team_id = team_id
        self.team_role = role

    def clear_team(self):
        self.confirmed_team = False
        self.team_id = None
        self.team_role = None
