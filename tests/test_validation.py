import pytest

from auth.validation import (
    PASSWORD_ERROR,
    PHONE_ERROR,
    can_send_reset_link,
    is_valid_password,
    is_valid_phone_number,
    validate_credentials,
)


@pytest.mark.parametrize("phone,expected", [
    ("9876543210", True),
    ("+919876543210", True),
    ("987654321", False),
    ("", False),
    (None, False),
])
def test_phone_number_length(phone, expected):
    assert is_valid_phone_number(phone) is expected


@pytest.mark.parametrize("password,expected", [
    ("secret", True),
    ("longer password", True),
    ("abc12", False),
    ("", False),
])
def test_password_length(password, expected):
    assert is_valid_password(password) is expected


def test_validate_credentials_messages():
    assert validate_credentials("123", "abc") == [PHONE_ERROR, PASSWORD_ERROR]
    assert validate_credentials("9876543210", "abc") == [PASSWORD_ERROR]
    assert validate_credentials("9876543210", "secret") == []
    assert PASSWORD_ERROR == "Password must be at least 6 characters"


def test_reset_link_needs_valid_phone():
    assert can_send_reset_link("9876543210")
    assert not can_send_reset_link("12345")
