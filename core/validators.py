# core/validators.py
"""
Input checks shared by the team and registration flows.
"""
import re
from typing import Iterable, List, Tuple

from .constants import TEAM_NAME_MAX_LENGTH, TEAM_NAME_PATTERN

_TEAM_NAME_RE = re.compile(TEAM_NAME_PATTERN)

# Deliberately loose: local@domain.tld, no whitespace.
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email) -> str:
    """Emails are stored and looked up lower-cased."""
    if not email:
        return ""
    return str(email).strip().lower()


def normalize_emails(emails: Iterable) -> List[str]:
    """Lower-case and de-duplicate, keeping first-seen order."""
    seen = []
    for email in emails or []:
        email = normalize_email(email)
        if email and email not in seen:
            seen.append(email)
    return seen


def is_valid_email(email) -> bool:
    return bool(email) and isinstance(email, str) and bool(_EMAIL_RE.match(email.strip()))


def validate_team_name(name) -> Tuple[bool, str]:
    """
    1-50 chars of letters, digits, space, hyphen, underscore.

    Returns (is_valid, reason).
    """
    if not isinstance(name, str) or not name:
        return False, "Team name is required"
    if len(name) > TEAM_NAME_MAX_LENGTH:
        return False, f"Team name cannot exceed {TEAM_NAME_MAX_LENGTH} characters"
    if not _TEAM_NAME_RE.match(name):
        return False, "Team name may only contain letters, digits, spaces, hyphens and underscores"
    return True, ""
