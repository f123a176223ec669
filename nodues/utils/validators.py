"""
Validation utilities
"""

from typing import Any, Optional
from nodues.utils.exceptions import ValidationError

ALLOWED_ACTIONS = ('approve', 'reject')


def validate_required(value: Any, field_name: str) -> None:
    """
    Validate required field

    Args:
        value: Value to validate
        field_name: Name of the field for error message

    Raises:
        ValidationError: If value is empty or None
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")


def validate_action(action: Any) -> str:
    """
    Validate a stage decision verb

    Args:
        action: Requested action, case-insensitive

    Returns:
        Normalized action ('approve' or 'reject')

    Raises:
        ValidationError: If action is not a known verb
    """
    if not isinstance(action, str) or action.strip().lower() not in ALLOWED_ACTIONS:
        raise ValidationError("invalid action")
    return action.strip().lower()


def validate_remark(action: str, remark: Optional[str]) -> Optional[str]:
    """
    Validate the remark attached to a decision

    A rejection must always carry a non-empty remark; for approvals
    the remark is optional.

    Args:
        action: Normalized action
        remark: Free-text remark

    Returns:
        Trimmed remark, or None when empty

    Raises:
        ValidationError: If rejecting without a remark
    """
    cleaned = remark.strip() if isinstance(remark, str) else ''
    if action == 'reject' and not cleaned:
        raise ValidationError("remark required")
    return cleaned or None


def validate_stage_id(stage_id: Any) -> str:
    """
    Validate that a stage identifier is present

    Raises:
        ValidationError: If stage id is missing or blank
    """
    if stage_id is None or not str(stage_id).strip():
        raise ValidationError("missing stage")
    return str(stage_id).strip()


def validate_page(page: Any) -> int:
    """Validate a 1-based page number"""
    try:
        value = int(page)
    except (TypeError, ValueError):
        raise ValidationError("page must be a number")
    if value < 1:
        raise ValidationError("page must be at least 1")
    return value
