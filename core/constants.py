# core/constants.py

# --- Team capacity ---
MAX_TEAM_SIZE = 4                       # leader included
MAX_INVITED_MEMBERS = MAX_TEAM_SIZE - 1

# --- Team names ---
TEAM_NAME_MAX_LENGTH = 50
TEAM_NAME_PATTERN = r"^[A-Za-z0-9 _-]{1,50}$"

# --- User documents ---
# Never writable through the update path.
LOCKED_FIELDS = frozenset({
    "_id",
    "password",
    "discord",
    "created_at",
    "registered_at",
    "email_verified",
})

# Written only by the team lifecycle operations.
TEAM_MANAGED_FIELDS = frozenset({
    "confirmed_team",
    "team_info",
    "team_id",
    "team_role",
})

# Only organizers/directors may change these.
ELEVATED_FIELDS = frozenset({"role"})

# Must be filled in on the stored user before unregistered -> registered.
REQUIRED_REGISTRATION_FIELDS = (
    "first_name",
    "last_name",
    "phone_number",
    "date_of_birth",
    "gender",
    "ethnicity",
    "level_of_study",
    "school",
    "major",
    "grad_year",
)

# --- Notification verbs ---
NOTIFY_REGISTRATION_STATUS_CHANGED = "registration.status_changed"
