"""
Settings for the test suite: in-memory SQLite, eager Celery, fixed secrets
and a fixed check-in window.
"""
from .settings import *  # noqa: F401,F403

DEBUG = False
SECURE_SSL_REDIRECT = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

JWT_SECRET = "test-jwt-secret-not-for-production-use-0001"
JWT_ALGORITHM = "HS256"

CHECK_IN_START = "2026-10-24T08:00:00+00:00"
CHECK_IN_WINDOW_DAYS = 3

LOGGING["loggers"]["hackathon"]["level"] = "WARNING"  # noqa: F405
