from django.db import DatabaseError
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("hackathon.core")


class HackathonError(APIException):
    """
    Base for every error the state machines raise.

    Carries a human-readable message, the HTTP status it maps to, and any
    extra fields that should be merged into the JSON body
    (e.g. ``invalid_emails``).
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, message=None, status_code=None, **extra):
        self.message = message or self.default_detail
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra
        super().__init__(detail=self.message)

    def to_response(self) -> dict:
        return {"statusCode": self.status_code, "message": self.message, **self.extra}


class AuthenticationError(HackathonError):
    """Missing or bad credential."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class AuthorizationError(HackathonError):
    """Valid identity, but not allowed to do this."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFoundError(HackathonError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ValidationError(HackathonError):
    """Malformed input, illegal transition, locked field, bad format."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class ConflictError(HackathonError):
    """Stored state already satisfies or forbids the request."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Conflict"


class CapacityError(HackathonError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Team is at maximum capacity"


class DependencyError(HackathonError):
    """The document store or another collaborator failed."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"


def custom_exception_handler(exc, context):
    """
    Wrap every error into one response shape:
    {"statusCode": <int>, "message": <str>, ...extra}

    Success responses (2xx) are not touched.
    """
    from rest_framework.views import exception_handler as drf_exception_handler

    if isinstance(exc, HackathonError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc.message}")
        return Response(exc.to_response(), status=exc.status_code)

    if isinstance(exc, DatabaseError):
        logger.exception("Document store failure", exc_info=exc)
        return Response(
            {
                "statusCode": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "message": "Internal server error",
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        body = {"statusCode": response.status_code}
        data = response.data
        if isinstance(data, dict) and set(data) == {"detail"}:
            body["message"] = str(data["detail"])
        else:
            body["message"] = "Bad request"
            body["errors"] = data
        return Response(body, status=response.status_code)

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "statusCode": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "message": "Internal server error",
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
