"""
utils/fields.py

Presence-based merge for partial updates.
"""
from pydantic import BaseModel


def supplied_fields(payload: BaseModel) -> dict:
    """
    Fields the caller actually sent, minus explicit nulls.
    An empty string or zero counts as supplied; `null` or absence keeps the stored value.
    """
    return {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
