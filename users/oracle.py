# users/oracle.py
import logging

from django.db import DatabaseError

from core.store import get_store
from core.validators import normalize_email
from .models import User

logger = logging.getLogger("hackathon.users")


class ExistenceOracle:
    """
    Answers "does an account with this email exist?".

    A failed lookup counts as "does not exist" so one bad lookup never
    aborts an invite batch.
    """

    def __init__(self, store=None):
        self.store = store or get_store()

    def exists(self, email) -> bool:
        email = normalize_email(email)
        if not email:
            return False
        try:
            return User.objects.using(self.store.alias).filter(email=email).exists()
        except DatabaseError as e:
            logger.warning(f"Existence lookup failed for {email}: {e}")
            return False
