"""
Status classification for clearance applications and stages
"""

import re
from typing import Any, Dict, Iterable

from nodues.models.clearance import PENDING, APPROVED, REJECTED, UNKNOWN

_SEPARATORS = re.compile(r'[\s\-_]+')

STATUS_SYNONYMS = {
    APPROVED: frozenset({'cleared', 'approved'}),
    PENDING: frozenset({'inprogress', 'pending'}),
    REJECTED: frozenset({'rejected', 'denied'}),
}


def normalize_status_label(label: Any) -> str:
    """
    Lower-case a status label and strip whitespace, hyphens and underscores

    Args:
        label: Raw status label, e.g. "In Progress" or "in-progress"

    Returns:
        Normalized key, e.g. "inprogress"
    """
    if label is None:
        return ''
    return _SEPARATORS.sub('', str(label)).lower()


def classify_status(label: Any) -> str:
    """
    Map a free-form status label to Pending, Approved, Rejected or Unknown

    Classifying an already canonical label returns the same category.
    """
    key = normalize_status_label(label)
    for category, synonyms in STATUS_SYNONYMS.items():
        if key in synonyms:
            return category
    return UNKNOWN


def display_status(label: Any) -> str:
    """
    Label to show for a status

    Known labels are shown as their category; unknown labels are shown
    verbatim and never coerced to Pending.
    """
    category = classify_status(label)
    if category == UNKNOWN:
        return '' if label is None else str(label)
    return category


def is_actionable(label: Any) -> bool:
    """Only pending stages accept a decision"""
    return classify_status(label) == PENDING


def aggregate_status(stages: Iterable[Any]) -> str:
    """
    Whole-application status from its stages

    Rejected if any stage is rejected, Approved if every stage is
    approved, Pending otherwise (including an application with no stages).

    Args:
        stages: Stage objects or raw stage dicts
    """
    categories = [classify_status(_stage_status(stage)) for stage in stages]
    if REJECTED in categories:
        return REJECTED
    if categories and all(category == APPROVED for category in categories):
        return APPROVED
    return PENDING


def status_counts(records: Iterable[Any]) -> Dict[str, int]:
    """Dashboard counters over classified records"""
    counts = {'total': 0, 'pending': 0, 'approved': 0, 'rejected': 0, 'unknown': 0}
    for record in records:
        counts['total'] += 1
        counts[classify_status(record.status).lower()] += 1
    return counts


def _stage_status(stage: Any) -> Any:
    if isinstance(stage, dict):
        return stage.get('status')
    return getattr(stage, 'status', None)
