import logging
import re
from typing import List, Union

import requests

from bookstore.config import settings

logger = logging.getLogger(__name__)

BREVO_API_URL = "https://api.brevo.com/v3/smtp/email"

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


def is_valid_email(email) -> bool:
    if isinstance(email, list):
        return all(is_valid_email(e) for e in email)

    if not email:
        return False

    return EMAIL_PATTERN.fullmatch(email) is not None


def send_email(to: Union[str, List[str]], subject: str, html: str) -> bool:
    """
    Send an HTML email through Brevo.

    Returns False instead of raising when nothing valid can be sent or the API
    rejects the request; network errors are raised to the caller.
    """
    if isinstance(to, list):
        valid_emails = [e for e in to if is_valid_email(e)]
    else:
        valid_emails = [to] if is_valid_email(to) else []

    if not valid_emails:
        logger.warning(f"No valid emails found: {to}")
        return False

    if not settings.brevo_api_key:
        logger.warning(f"BREVO_API_KEY not set, skipping email to {valid_emails}")
        return False

    payload = {
        "sender": {
            "email": settings.mail_from,
            "name": settings.store_name,
        },
        "to": [{"email": e} for e in valid_emails],
        "subject": subject,
        "htmlContent": html,
    }

    headers = {
        "api-key": settings.brevo_api_key,
        "Content-Type": "application/json",
    }

    response = requests.post(
        BREVO_API_URL,
        json=payload,
        headers=headers,
        timeout=10,
    )

    if response.status_code >= 400:
        logger.error(
            f"Brevo email failed ({response.status_code}): {response.text}"
        )
        return False

    logger.info(f"Brevo email sent to {valid_emails}")
    return True
