"""
utils/sanitize.py

Strip HTML from free-text request fields before they reach Firestore.
"""

import bleach
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

# Fields passed through untouched: credentials, binary payloads, gateway tokens.
RAW_FIELDS = {"password", "validIdBase64", "expoPushToken"}

# Prose shown as plain text by the app; bleach would turn "<3" into "&lt;3".
PLAIN_TEXT_FIELDS = {"title", "body", "description", "productDescription", "addressDetails"}

MAX_TEXT_LENGTH = 2000


def sanitize_text(user_input: str) -> str:
    """
    Remove tags and surrounding whitespace.
    """
    if not user_input:
        return user_input

    cleaned = bleach.clean(user_input, tags=[], attributes={}, strip=True)
    # bleach escapes bare ampersands; "Fruits & Veggies" stays readable
    cleaned = cleaned.replace("&amp;", "&")
    return cleaned.strip()


class SanitizedModel(BaseModel):
    """
    Base for request bodies: every string field is length-checked and
    sanitized, except the ones listed in RAW_FIELDS. Unknown fields are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def sanitize_all_strings(cls, v, info: ValidationInfo):
        if not isinstance(v, str) or info.field_name in RAW_FIELDS:
            return v
        if len(v) > MAX_TEXT_LENGTH:
            raise ValueError(f"{info.field_name} must be at most {MAX_TEXT_LENGTH} characters")
        if info.field_name in PLAIN_TEXT_FIELDS:
            return v.strip()
        return sanitize_text(v)
