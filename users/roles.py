# users/roles.py
from django.db import models


class Capability(models.TextChoices):
    HACKER = "hacker", "Hacker"
    VOLUNTEER = "volunteer", "Volunteer"
    JUDGE = "judge", "Judge"
    SPONSOR = "sponsor", "Sponsor"
    MENTOR = "mentor", "Mentor"
    ORGANIZER = "organizer", "Organizer"
    DIRECTOR = "director", "Director"


ELEVATED_CAPABILITIES = (Capability.ORGANIZER, Capability.DIRECTOR)


class RoleSet(frozenset):
    """
    The capabilities a user holds. Unknown names are dropped.

    Accepts a list of names or the legacy ``{"hacker": true, ...}`` mapping.
    """

    def __new__(cls, values=()):
        if isinstance(values, dict):
            values = [name for name, enabled in values.items() if enabled]
        known = set(Capability.values)
        return super().__new__(cls, (Capability(v) for v in values or () if v in known))

    def has(self, *capabilities) -> bool:
        """True if the user holds any of the given capabilities."""
        return any(Capability(c) in self for c in capabilities)

    @property
    def is_elevated(self) -> bool:
        return self.has(*ELEVATED_CAPABILITIES)


def default_roles():
    return [Capability.HACKER.value]
