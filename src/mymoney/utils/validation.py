"""Input validation helpers shared by the auth and transaction services."""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email: str | None) -> bool:
    """Return True if ``email`` looks like a deliverable address."""
    if not email:
        return False
    return EMAIL_PATTERN.match(email.strip()) is not None
