"""Field-level validation of client drafts entered on the intake form."""
import re

from src.app.core.domain.models import ClientDraft, ErrorMap

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100

# Letter runs separated by a single space, hyphen or apostrophe: "Jane Doe", "Mary-Ann O'Neil"
NAME_PATTERN = re.compile(r"[^\W\d_]+(?:[ '\-][^\W\d_]+)*")
EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+\-]+@[A-Z0-9.\-]+\.[A-Z]{2,}", re.IGNORECASE)

NAME_REQUIRED = "Name is required"
NAME_LENGTH = f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
NAME_FORMAT = "Name can only contain letters, spaces, hyphens and apostrophes"
EMAIL_REQUIRED = "Email is required"
EMAIL_FORMAT = "Please enter a valid email address"
BUSINESS_NAME_REQUIRED = "Business name is required"


def validate_name(value: str) -> str | None:
    name = value.strip()
    if not name:
        return NAME_REQUIRED
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        return NAME_LENGTH
    if not NAME_PATTERN.fullmatch(name):
        return NAME_FORMAT
    return None


def validate_email(value: str) -> str | None:
    email = value.strip()
    if not email:
        return EMAIL_REQUIRED
    if not EMAIL_PATTERN.fullmatch(email):
        return EMAIL_FORMAT
    return None


def validate_business_name(value: str) -> str | None:
    if not value.strip():
        return BUSINESS_NAME_REQUIRED
    return None


FIELD_VALIDATORS = {
    "name": validate_name,
    "email": validate_email,
    "business_name": validate_business_name,
}


def validate(draft: ClientDraft) -> ErrorMap:
    """
    Validate every field of a draft independently.

    Each field reports only its first failing rule. The draft is not modified
    and nothing is raised.

    Args:
        draft: The client draft to check

    Returns:
        Mapping of field name to message; an empty mapping means the draft is valid.
    """
    errors: ErrorMap = {}
    for field, check in FIELD_VALIDATORS.items():
        message = check(getattr(draft, field))
        if message:
            errors[field] = message
    return errors
