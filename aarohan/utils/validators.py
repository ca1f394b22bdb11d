"""
Utility functions for validating user supplied data
"""
import re
from datetime import date, datetime
from typing import Any, List, Optional

from .security import MAX_PASSWORD_BYTES

EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')
PHONE_PATTERN = re.compile(r'^\d{10}$')


def validate_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.search(email) is not None


def validate_phone(phone: Optional[str]) -> bool:
    return bool(phone) and PHONE_PATTERN.match(phone) is not None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse an ISO date (or datetime) into a date

    Returns:
        The date, or None if the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def parse_income(value: Any) -> Optional[float]:
    """Parse a non-negative income, None for anything else"""
    if isinstance(value, bool) or value is None:
        return None
    try:
        income = float(value)
    except (ValueError, TypeError):
        return None
    if income != income or income < 0:
        return None
    return income


def validate_registration_data(profile_data: dict) -> List[str]:
    """
    Validate registration data and return list of validation errors

    Args:
        profile_data: Dictionary containing registration fields

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not profile_data.get("name"):
        errors.append("Name is a required field.")

    email = profile_data.get("email")
    if not email:
        errors.append("Email is a required field.")
    elif not validate_email(email):
        errors.append("Email address is not valid.")

    password = profile_data.get("password")
    if not password:
        errors.append("Password is a required field.")
    elif len(password.encode()) > MAX_PASSWORD_BYTES:
        errors.append(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")

    skills = [skill for skill in profile_data.get("skills") or [] if skill and skill.strip()]
    if not skills:
        errors.append("Atleast one skill is required")

    return errors


def extract_text_snippet(text: str, max_length: int = 200) -> str:
    """
    Extract a snippet of text for display purposes

    Args:
        text: Full text
        max_length: Maximum length of snippet

    Returns:
        Text snippet
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    # Try to break at word boundary
    snippet = text[:max_length]
    last_space = snippet.rfind(' ')

    if last_space > max_length * 0.8:
        snippet = snippet[:last_space]

    return snippet + "..."
