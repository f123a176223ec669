"""
In-memory search and status filtering over reconciled records
"""

from typing import Iterable, List, Optional

from nodues.models.clearance import ClearanceRecord, UNKNOWN
from nodues.services.status_classifier import classify_status, normalize_status_label

ALL_STATUSES = 'all'


def _haystack(record: ClearanceRecord) -> str:
    student = record.student
    return f"{student.name}{student.roll_number}{student.enrollment_number}{student.course}".lower()


def matches_status(record: ClearanceRecord, status_filter: Optional[str]) -> bool:
    """
    Compare a record's status to a filter through classification

    Filters that classify as Unknown match records carrying the same
    normalized label.
    """
    if status_filter is None or normalize_status_label(status_filter) in ('', ALL_STATUSES):
        return True
    wanted = classify_status(status_filter)
    if wanted == UNKNOWN:
        return normalize_status_label(record.status) == normalize_status_label(status_filter)
    return classify_status(record.status) == wanted


class SearchFilterIndex:
    """Text and status predicates over a reconciled record set"""

    def __init__(self, records: Iterable[ClearanceRecord]):
        self._entries = [(record, _haystack(record)) for record in records]

    def __len__(self) -> int:
        return len(self._entries)

    def filter(self, query: Optional[str] = None, status_filter: Optional[str] = ALL_STATUSES) -> List[ClearanceRecord]:
        """
        Records matching both the query and the status filter

        Args:
            query: Case-insensitive text matched against name, roll number,
                enrollment number and course
            status_filter: 'all' or any status label

        Returns:
            Matching records, in their original order
        """
        needle = (query or '').strip().lower()
        return [
            record for record, haystack in self._entries
            if needle in haystack and matches_status(record, status_filter)
        ]


def filter_records(records: Iterable[ClearanceRecord], query: Optional[str] = None,
                   status_filter: Optional[str] = ALL_STATUSES) -> List[ClearanceRecord]:
    """Convenience wrapper around SearchFilterIndex"""
    return SearchFilterIndex(records).filter(query, status_filter)
