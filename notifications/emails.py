# notifications/emails.py
from django.core.mail import send_mail
from django.conf import settings


SIGN_OFF = "Best regards,\nThe Hackathon Team"

# registration_status -> (subject, body). Body is formatted with first/last name.
STATUS_TEMPLATES = {
    "registered": (
        "Registration Received",
        "Thank you for registering! Your application has been received and is "
        "currently being reviewed by our team.\n\n"
        "We'll notify you once a decision has been made regarding your application.",
    ),
    "confirmation": (
        "Congratulations! You've Been Accepted!",
        "Great news! Your application has been accepted!\n\n"
        "Please log in to your dashboard to confirm whether you will be attending. "
        "Update your status to either \"coming\" or \"not coming\" so we can "
        "properly allocate resources.",
    ),
    "rejected": (
        "Application Status Update",
        "Thank you for your interest and for taking the time to apply.\n\n"
        "After careful consideration, we regret to inform you that we are unable "
        "to offer you a spot at this time. We encourage you to apply again for "
        "our future events!",
    ),
    "waitlist": (
        "Application Status - Waitlist",
        "Thank you for your application. Due to the high volume of applications, "
        "we've added you to our waitlist.\n\n"
        "We'll contact you if a spot becomes available. In the meantime, no "
        "further action is required from you.",
    ),
    "coming": (
        "Attendance Confirmed",
        "Thank you for confirming your attendance! We're excited to have you.\n\n"
        "Keep an eye on your inbox for event details as the date approaches.",
    ),
    "not_coming": (
        "Attendance Update",
        "We've received your update that you will not be attending. We're sorry "
        "to miss you!\n\n"
        "If your plans change, you can update your status from your dashboard.",
    ),
    "confirmed": (
        "Final Confirmation",
        "Your spot is confirmed! Please bring a valid ID to check in on the day "
        "of the event.",
    ),
    "checked_in": (
        "Welcome!",
        "You're checked in. Welcome to the hackathon, and happy hacking!",
    ),
}


def render_status_email(registration_status, first_name="", last_name=""):
    """
    Build (subject, message) for a status-change email.

    Raises KeyError for a status that has no template.
    """
    subject, body = STATUS_TEMPLATES[registration_status]
    name = f"{first_name} {last_name}".strip() or "Hacker"
    message = f"Dear {name},\n\n{body}\n\n{SIGN_OFF}"
    return subject, message


def send_status_email(email, registration_status, first_name="", last_name=""):
    """
    Tell a participant their registration status changed.

    Returns False (and sends nothing) when there is no template for the status.
    """
    if not email or registration_status not in STATUS_TEMPLATES:
        return False

    subject, message = render_status_email(registration_status, first_name, last_name)

    send_mail(
        subject=subject,
        message=message,
        from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        recipient_list=[email],
        fail_silently=True,
    )
    return True
