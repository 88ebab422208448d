# notifications/dispatcher.py
"""
Fire-and-forget notifications.

publish() hands the event to Celery and returns. Nothing is awaited and a
failure to enqueue is logged, never raised; at-most-once delivery.
"""
import logging

from core.constants import NOTIFY_REGISTRATION_STATUS_CHANGED
from .tasks import send_status_email_task

logger = logging.getLogger("hackathon.notifications")


class NotificationDispatcher:

    def __init__(self, task=None):
        self.task = task or send_status_email_task

    def publish(self, event: dict) -> bool:
        """Returns True if the event was handed to the queue."""
        try:
            self.task.delay(event)
        except Exception as e:
            logger.error(f"Failed to publish {event.get('type')} for {event.get('email')}: {e}")
            return False
        return True

    def publish_status_change(self, user, previous_status) -> bool:
        return self.publish({
            "type": NOTIFY_REGISTRATION_STATUS_CHANGED,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "registration_status": user.registration_status,
            "previous_status": previous_status,
        })
