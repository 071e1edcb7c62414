"""
Login form checks.

The scoring app's sign-in and reset-password screens only check input
length before enabling their buttons; these helpers hold those rules so the
messages shown inline come from one place.  There is no credential store.
"""

import logging
from typing import List

logger = logging.getLogger(__name__)

MIN_PHONE_LENGTH = 10
MIN_PASSWORD_LENGTH = 6

PHONE_ERROR = "Please enter a valid phone number"
PASSWORD_ERROR = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"


def is_valid_phone_number(phone_number: str) -> bool:
    if not isinstance(phone_number, str):
        return False
    return len(phone_number) >= MIN_PHONE_LENGTH


def is_valid_password(password: str) -> bool:
    if not isinstance(password, str):
        return False
    return len(password) >= MIN_PASSWORD_LENGTH


def validate_credentials(phone_number: str, password: str) -> List[str]:
    """Inline error messages for the sign-in form; empty when both fields pass."""
    errors = []
    if not is_valid_phone_number(phone_number):
        errors.append(PHONE_ERROR)
    if not is_valid_password(password):
        errors.append(PASSWORD_ERROR)
    if errors:
        logger.debug(f"Sign-in form rejected: {len(errors)} error(s)")
    return errors


def can_send_reset_link(phone_number: str) -> bool:
    """The reset-password screen only needs a plausible phone number."""
    return is_valid_phone_number(phone_number)
