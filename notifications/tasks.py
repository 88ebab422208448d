# notifications/tasks.py
import logging

from celery import shared_task

from .emails import send_status_email

logger = logging.getLogger("hackathon.notifications")


@shared_task
def send_status_email_task(event: dict):
    """
    Async delivery of a registration status-change email.

    ``event`` is the payload built by NotificationDispatcher.
    """
    email = event.get("email")
    status = event.get("registration_status")

    sent = send_status_email(
        email,
        status,
        first_name=event.get("first_name", ""),
        last_name=event.get("last_name", ""),
    )
    if sent:
        logger.info(f"Status email sent: email={email}, status={status}")
    else:
        logger.info(f"No status email for email={email}, status={status}")
    return sent
