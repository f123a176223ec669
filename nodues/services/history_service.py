"""
Action history for audit display
"""

import math
from typing import Any, Dict, List, Optional

from nodues.models.clearance import ActionRecord
from nodues.utils.helpers import log_warning

DEFAULT_PAGE_SIZE = 6


def parse_history(payload: Any) -> List[ActionRecord]:
    """Feed items as ActionRecords, in feed order"""
    if not isinstance(payload, list):
        log_warning(f"History feed is not a list ({type(payload).__name__}); showing no entries")
        return []
    return [ActionRecord.from_dict(item) for item in payload if isinstance(item, dict)]


def search_history(entries: List[ActionRecord], query: Optional[str]) -> List[ActionRecord]:
    """Entries whose student name, display id or roll number contain the query"""
    needle = (query or '').strip().lower()
    if not needle:
        return list(entries)
    return [
        entry for entry in entries
        if needle in entry.student_name.lower()
        or needle in entry.display_id.lower()
        or needle in entry.roll_number.lower()
    ]


def paginate(entries: List[Any], page: int = 1, per_page: int = DEFAULT_PAGE_SIZE) -> Dict[str, Any]:
    """
    Slice a list into one page

    Pages past the end are clamped to the last page.

    Returns:
        Dict with items, page, per_page, total and total_pages
    """
    per_page = max(1, per_page)
    total_pages = max(1, math.ceil(len(entries) / per_page))
    page = min(max(1, page), total_pages)
    start = (page - 1) * per_page
    return {
        'items': entries[start:start + per_page],
        'page': page,
        'per_page': per_page,
        'total': len(entries),
        'total_pages': total_pages,
    }


class HistoryService:
    """Reads the actor's decision history from the approvals service"""

    def __init__(self, client, per_page: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.per_page = per_page

    def page(self, query: Optional[str] = None, page: int = 1) -> Dict[str, Any]:
        """
        One page of matching history entries

        Raises:
            requests.RequestException: History feed unavailable
        """
        entries = search_history(parse_history(self.client.list_history()), query)
        result = paginate(entries, page, self.per_page)
        result['items'] = [entry.to_dict() for entry in result['items']]
        return result
